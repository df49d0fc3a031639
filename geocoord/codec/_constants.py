"""Shared constants for coordinate text parsing and rendering."""

from __future__ import annotations

import re

# Glyphs accepted in input; each is replaced by a space before tokenising.
DEGREE_GLYPHS = "°º˚"
MINUTE_GLYPHS = "'′’‘"
SECOND_GLYPHS = '"″“”'

# Commas and semicolons separate latitude from longitude.
PAIR_SEPARATORS = ",;"

# A hyphen directly after a value, letter or glyph is a separator,
# anywhere else it is a sign.
SEPARATOR_HYPHEN = re.compile(r"(?<=[^\s,;+-])-")

TOKEN = re.compile(
    r"(?P<hemisphere>[NSEW])"
    r"|(?P<number>[+-]?(?:\d+(?:\.\d*)?|\.\d+))"
    r"|(?P<space>\s+)"
    r"|(?P<invalid>.)"
)

# A group holds one value (decimal), two (degree + decimal minute)
# or three (degree, minute, second).
MAX_GROUP_NUMBERS = 3
PAIR_NUMBER_COUNTS = (2, 4, 6)
