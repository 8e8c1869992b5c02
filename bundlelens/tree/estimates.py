"""Proportional size estimates for nodes without their own source."""

from __future__ import annotations

import math


def estimate_share(part: int | None, whole: int | None, whole_value: int | None) -> int | None:
    """Scale ``whole_value`` by ``part / whole``, floored.

    Returns ``None`` when any input is unknown or ``whole`` is zero, so an
    unknowable estimate never turns into a measured-looking ``0``.
    """
    if part is None or whole_value is None or not whole:
        return None
    return math.floor(part / whole * whole_value)
