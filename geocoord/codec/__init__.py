"""Coordinate text codec.

Renders ``AngleValue`` objects to text under ``FormatRules`` and parses
heterogeneous coordinate text back into angles.

The codec is split into focused stages:
- **_constants**: accepted glyphs, separators and the token grammar
- **_parse**: tokenising, hemisphere layout detection, angle building
- **_render**: one formatting function per ``FormatStyle``

Parsing never raises for control flow: ``try_parse`` and
``try_parse_angle`` return ``None`` on failure; ``parse`` and
``parse_angle`` raise ``FormatError`` for callers that prefer it.
"""

from __future__ import annotations

from geocoord.codec._parse import parse, parse_angle, try_parse, try_parse_angle
from geocoord.codec._render import format_number, render_angle, render_pair

__all__ = [
    "format_number",
    "parse",
    "parse_angle",
    "render_angle",
    "render_pair",
    "try_parse",
    "try_parse_angle",
]
