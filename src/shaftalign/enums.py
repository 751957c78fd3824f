"""Type-safe enums for the shaft alignment calculator."""

from enum import Enum


class Foot(Enum):
    """Foot position of the movable machine"""
    REAR = "rear"    # Far from the coupling
    FRONT = "front"  # Next to the coupling


class ShimAction(Enum):
    """What to do with the shim stack under a foot"""
    ADD = "add"        # Insert shim material (raise the foot)
    REMOVE = "remove"  # Remove shims or cut the base (lower the foot)


class AlignmentStatus(Enum):
    """Overall status shown in the status badge"""
    IN_TOLERANCE = "in_tolerance"
    NEEDS_ALIGNMENT = "needs_alignment"


class OffsetDirection(Enum):
    """Where the movable machine sits relative to the fixed one"""
    HIGH = "high"
    LOW = "low"
    CENTERED = "centered"  # Within offset tolerance


class StepDirection(Enum):
    """Direction of an interactive shim step"""
    UP = "up"      # Add one step of shim
    DOWN = "down"  # Remove one step of shim
