"""Tests for KML colour conversion."""

from __future__ import annotations

import pytest

from metre.kml.colors import PALETTE, kml_color_to_hex, palette_color
from metre.models.project import DEFAULT_COLOR


@pytest.mark.parametrize("kml,expected", [
    ("7f0000ff", "#ff0000"),
    ("ff00ff00", "#00ff00"),
    ("ffff0000", "#0000ff"),
    ("ff336699", "#996633"),
    ("FF336699", "#996633"),
    ("  ff336699\n", "#996633"),
    ("336699", "#996633"),
])
def test_abgr_to_rgb(kml, expected):
    assert kml_color_to_hex(kml) == expected


@pytest.mark.parametrize("kml", [None, "", "zz", "12345", "ff3366990", "gg336699"])
def test_malformed_falls_back_to_gray(kml):
    assert kml_color_to_hex(kml) == DEFAULT_COLOR


def test_custom_default():
    assert kml_color_to_hex("nope", default="#000000") == "#000000"


def test_palette_cycles():
    assert palette_color(0) == "#ef4444"
    assert palette_color(1) == "#3b82f6"
    assert palette_color(len(PALETTE)) == palette_color(0)
