"""Coordinate parsing activity.

Turns the raw coordinates file into ``Coordinate`` records.

File format::

    UID<TAB>Latitude<TAB>Longitude
    01egDMwK2V9gxBIzMQG0<TAB>45,28529978<TAB>-74,28007563

- The first line is a header and is always discarded, whatever it holds.
- CRLF and LF line endings are both accepted.
- A decimal comma is accepted: the first ``,`` of each numeric field is
  replaced by ``.`` before parsing.
- Numbers are parsed leniently: the longest leading numeric prefix is
  used and trailing characters are ignored (``"45.5x"`` → ``45.5``).
- Malformed lines (fewer than three fields, empty UID, no numeric
  prefix) are skipped; they never abort the run.
"""

from __future__ import annotations

import logging
import math
import re

from crop_plan_matcher.core.constants import COORDINATE_FIELD_SEPARATOR, MIN_COORDINATE_FIELDS
from crop_plan_matcher.models.coordinate import Coordinate

logger = logging.getLogger("crop_plan_matcher.activities.parse_coordinates")

_LINE_BREAK_RE = re.compile(r"\r?\n")

# Leading decimal number: sign, digits with optional fraction (or a bare
# fraction), optional exponent.
_NUMERIC_PREFIX_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_lenient_float(text: str) -> float | None:
    """Parse the longest numeric prefix of *text*.

    Leading whitespace is ignored.  Returns ``None`` when *text* does not
    start with a number or the number is not finite.
    """
    match = _NUMERIC_PREFIX_RE.match(text.lstrip())
    if match is None:
        return None
    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


def _parse_decimal(field: str) -> float | None:
    return parse_lenient_float(field.strip().replace(",", ".", 1))


def parse_line(raw_line: str) -> Coordinate | None:
    """Parse one data line of the coordinates file.

    Args:
        raw_line: A single line, with or without its line terminator.

    Returns:
        A ``Coordinate``, or ``None`` if the line is blank or malformed.
    """
    if not raw_line:
        return None

    parts = raw_line.strip().split(COORDINATE_FIELD_SEPARATOR)
    if len(parts) < MIN_COORDINATE_FIELDS:
        return None

    uid = parts[0].strip()
    lat = _parse_decimal(parts[1])
    lon = _parse_decimal(parts[2])

    if not uid or lat is None or lon is None:
        return None
    return Coordinate(uid=uid, lat=lat, lon=lon)


def parse_coordinates(raw: bytes | str, *, source_filename: str = "") -> list[Coordinate]:
    """Parse a whole coordinates file.

    Args:
        raw: File content as UTF-8 bytes (a BOM is tolerated) or text.
        source_filename: Blob name used in log messages.

    Returns:
        Valid coordinates in file order, header excluded.

    Raises:
        UnicodeDecodeError: If *raw* is not valid UTF-8.
    """
    text = raw.decode("utf-8-sig") if isinstance(raw, bytes) else raw
    lines = _LINE_BREAK_RE.split(text)

    coordinates: list[Coordinate] = []
    skipped = 0
    # Line 1 is the header.
    for line_number, line in enumerate(lines[1:], start=2):
        coordinate = parse_line(line)
        if coordinate is None:
            if line.strip():
                skipped += 1
                logger.debug(
                    "Skipping malformed coordinate line | file=%s | line=%d",
                    source_filename,
                    line_number,
                )
            continue
        coordinates.append(coordinate)

    logger.info(
        "Parsed coordinates | file=%s | valid=%d | skipped=%d",
        source_filename,
        len(coordinates),
        skipped,
    )
    return coordinates
