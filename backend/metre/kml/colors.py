"""KML colour conversion.

KML writes colours as ``aabbggrr`` hex (alpha first, then blue, green, red).
Everything else in the project uses ``#rrggbb``.
"""

from __future__ import annotations

import re

from metre.models.project import DEFAULT_COLOR

# Imported folders without a resolvable style cycle through these
PALETTE = (
    "#ef4444",
    "#3b82f6",
    "#22c55e",
    "#eab308",
    "#a855f7",
    "#ec4899",
    "#f97316",
    "#06b6d4",
)

_HEX_RE = re.compile(r"^(?:[0-9a-f]{6}|[0-9a-f]{8})$")


def kml_color_to_hex(kml_color: str | None, default: str = DEFAULT_COLOR) -> str:
    """``aabbggrr`` (or alpha-less ``bbggrr``) → ``#rrggbb``; ``default`` if absent or malformed."""
    if not kml_color:
        return default
    clean = kml_color.strip().lower()
    if not _HEX_RE.match(clean):
        return default
    bgr = clean[2:] if len(clean) == 8 else clean
    return f"#{bgr[4:6]}{bgr[2:4]}{bgr[0:2]}"


def palette_color(index: int) -> str:
    return PALETTE[index % len(PALETTE)]
