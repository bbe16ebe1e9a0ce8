"""Matcher configuration loaded from environment variables.

All configuration values have sensible defaults. Azure Functions app
settings (or ``local.settings.json`` for local dev) are the source of
truth.

``from_env()`` raises ``ConfigValidationError`` if a value is empty or
the blob names collide, so bad configuration is caught before any blob
is read.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from crop_plan_matcher.core.constants import (
    DEFAULT_CONTAINER,
    DEFAULT_COORDINATES_BLOB,
    DEFAULT_POLYGONS_BLOB,
    DEFAULT_REPORT_BLOB,
)
from crop_plan_matcher.core.exceptions import PipelineError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(PipelineError):
    """Raised when configuration values are invalid.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Full human-readable error message.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class MatcherConfig:
    """Immutable matcher configuration.

    Loaded once per invocation and passed into the orchestrator.

    Attributes:
        container: Blob container holding both inputs and the report.
        coordinates_blob: Blob name of the tab-separated coordinates file.
        polygons_blob: Blob name of the GeoJSON crop plan.
        report_blob: Blob name the CSV report is written to.
        use_spatial_index: Pre-filter polygons with an STRtree before
            the exact containment test.
    """

    container: str = DEFAULT_CONTAINER
    coordinates_blob: str = DEFAULT_COORDINATES_BLOB
    polygons_blob: str = DEFAULT_POLYGONS_BLOB
    report_blob: str = DEFAULT_REPORT_BLOB
    use_spatial_index: bool = True

    @classmethod
    def from_env(cls) -> MatcherConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is empty, a boolean flag is
                unrecognised, or two blob names are identical.
        """
        config = cls(
            container=os.getenv("MATCHER_CONTAINER", DEFAULT_CONTAINER),
            coordinates_blob=os.getenv("COORDINATES_BLOB", DEFAULT_COORDINATES_BLOB),
            polygons_blob=os.getenv("POLYGONS_BLOB", DEFAULT_POLYGONS_BLOB),
            report_blob=os.getenv("REPORT_BLOB", DEFAULT_REPORT_BLOB),
            use_spatial_index=_parse_bool(
                "USE_SPATIAL_INDEX", os.getenv("USE_SPATIAL_INDEX", "true")
            ),
        )
        _validate(config)
        return config


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false)")


def _validate(config: MatcherConfig) -> None:
    """Validate configuration values.  Raises ``ConfigValidationError``."""
    for key, value in (
        ("MATCHER_CONTAINER", config.container),
        ("COORDINATES_BLOB", config.coordinates_blob),
        ("POLYGONS_BLOB", config.polygons_blob),
        ("REPORT_BLOB", config.report_blob),
    ):
        if not value.strip():
            raise ConfigValidationError(key, value, "must not be empty")

    if config.report_blob in (config.coordinates_blob, config.polygons_blob):
        raise ConfigValidationError(
            "REPORT_BLOB",
            config.report_blob,
            "must differ from the input blob names",
        )

    if config.coordinates_blob == config.polygons_blob:
        raise ConfigValidationError(
            "POLYGONS_BLOB",
            config.polygons_blob,
            "must differ from COORDINATES_BLOB",
        )
