"""Shared text helpers used by the models and the report builder.

Numbers and attribute values must render identically whether they come
from a parsed coordinate or from a GeoJSON property, so the rendering
rules live in one place.
"""

from __future__ import annotations

import math


def format_number(value: float) -> str:
    """Render a number the way the report has always shown it.

    Integral values drop the fractional part (``5.0`` → ``"5"``); other
    finite values use the shortest round-trip representation
    (``45.28529978`` → ``"45.28529978"``).

    Args:
        value: An ``int`` or ``float``.

    Returns:
        The textual form of *value*.
    """
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def attribute_text(value: object) -> str:
    """Coerce a GeoJSON property value to report text.

    Empty-like values (``None``, ``""``, ``0``, ``False``, ``NaN``) become
    ``""``.  Booleans are lowercase, numbers go through ``format_number``
    and everything else is ``str()``-ed.
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "true"
    if isinstance(value, int | float):
        if value == 0 or (isinstance(value, float) and math.isnan(value)):
            return ""
        return format_number(value)
    return str(value)
