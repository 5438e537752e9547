"""
Geometry policy for placing new mind-map nodes.

Every child is sited at a polar offset from its immediate parent:
- Angle: the child's ordinal among its siblings, as a fraction of a full
  turn split into a per-level number of slots (8, 16, then 24)
- Distance: a fixed per-level multiple of the horizontal spacing

Offsets are relative to the parent, not the root, so the result is a
recursively offset radial tree rather than a true circular layout.

Once a parent has more children than its level has slots, angles wrap
around and siblings share a direction. That aliasing is kept as-is.
"""

import math


# Layout constants
HORIZONTAL_SPACING = 150.0
NODE_WIDTH = 120.0
NODE_HEIGHT = 60.0

# Slots per full turn, keyed by level; deeper levels use DEFAULT_SLOTS
LEVEL_SLOTS = {1: 8, 2: 16}
DEFAULT_SLOTS = 24

# Distance multipliers, keyed by level; deeper levels use 1.0
LEVEL_DISTANCE_FACTORS = {1: 1.5, 2: 1.2}


def slot_count(level: int) -> int:
    """Number of equal angular slots a full turn is split into at this level."""
    return LEVEL_SLOTS.get(level, DEFAULT_SLOTS)


def angle(sibling_count: int, level: int) -> float:
    """
    Angle in radians for a new child.

    Args:
        sibling_count: Children the parent already has (the new child's ordinal)
        level: Level of the new child

    Returns:
        2*pi * sibling_count / slot_count(level), without wraparound
    """
    return 2.0 * math.pi * sibling_count / slot_count(level)


def distance(level: int) -> float:
    """Radial distance from the parent for a child at this level."""
    return HORIZONTAL_SPACING * LEVEL_DISTANCE_FACTORS.get(level, 1.0)


def polar_offset(theta: float, radius: float) -> tuple[float, float]:
    """Convert an angle and radius into an (dx, dy) displacement."""
    return (radius * math.cos(theta), radius * math.sin(theta))


def child_position(
    parent_x: float,
    parent_y: float,
    sibling_count: int,
    level: int
) -> tuple[float, float]:
    """Absolute position of a new child given its parent and ordinal."""
    dx, dy = polar_offset(angle(sibling_count, level), distance(level))
    return (parent_x + dx, parent_y + dy)
