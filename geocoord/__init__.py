"""Observable geographic coordinate model.

Represents a position as dual-encoded latitude/longitude values (signed
decimal degrees and degrees/minutes/seconds), keeps derived grid,
earth-centered and celestial representations in sync on every change,
and reads/writes human-readable coordinate text.
"""

__version__ = "0.1.0"
