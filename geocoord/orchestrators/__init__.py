"""Position orchestration.

Owns a latitude/longitude pair and keeps derived representations in step:
1. Validate the mutation
2. Commit the new value
3. Propagate to eager representations (celestial, grid + MGRS, cartesian, ECEF)
4. Notify subscribers with one batch of changed property names
"""

from geocoord.orchestrators.position import MutationPhase, Position

__all__ = ["MutationPhase", "Position"]
