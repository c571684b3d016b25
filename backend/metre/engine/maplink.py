"""Map centre from a pasted Google Maps link (``.../@48.85,2.35,18z``)."""

from __future__ import annotations

import re

from metre.errors import InvalidOperationError
from metre.models.project import GeoPoint

_AT_COORDS_RE = re.compile(r"@(-?\d+\.\d+),(-?\d+\.\d+)")


def center_from_link(url: str) -> GeoPoint:
    match = _AT_COORDS_RE.search(url)
    if not match:
        raise InvalidOperationError("Link does not contain coordinates (e.g. @48.85,2.35)")
    return GeoPoint(lat=float(match.group(1)), lng=float(match.group(2)))
