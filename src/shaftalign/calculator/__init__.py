"""
Shaft Alignment Calculator - vertical-plane alignment of coupled machines.

This module provides the forward model (shims -> resulting alignment), the
inverse solver (readings -> required shims), tolerance classification,
an interactive session model and output formatters.

Example:
    >>> from shaftalign.calculator import evaluate, solve_required_shims
    >>> from shaftalign.io import Geometry, InitialMeasurements
    >>>
    >>> geometry = Geometry(motor_length_mm=500, coupling_distance_mm=200)
    >>> readings = InitialMeasurements(initial_offset_mm=-0.5, initial_angle_mm_per_100=0.0)
    >>>
    >>> required = solve_required_shims(geometry, readings)
    >>> required.front_shim_mm, required.rear_shim_mm
    (0.5, 0.5)
    >>> evaluate(geometry, readings, required.as_correction()).vertical_offset_mm
    0.0
"""

from .core import (
    # Errors
    DegenerateGeometryError,

    # Helpers
    angle_to_slope,
    slope_to_angle,
    check_geometry,
    calculate_shim_slope,
    calculate_shim_offset_effect,
    calculate_gaps,
    is_finite_result,

    # Forward model and inverse solver
    evaluate,
    solve_required_shims,
)

from .validation import (
    # Tolerance classification
    is_offset_in_tolerance,
    is_angle_in_tolerance,
    is_in_tolerance,
    needs_attention,
    alignment_status,
    offset_direction,

    # Validation
    validate_alignment,
    Severity,
    ValidationMessage,
    ValidationResult,
)

from .session import (
    AlignmentSession,
    clamp_shim,
)

from .output import (
    # Output formatters
    to_json,
    to_markdown,
    to_summary,
    format_signed,
    describe_required_shim,
)

from ..enums import (
    # Type-safe enums
    Foot,
    ShimAction,
    AlignmentStatus,
    OffsetDirection,
    StepDirection,
)

# Convenience imports
from ..io import (
    Geometry,
    InitialMeasurements,
    Correction,
    SimulationResult,
    RequiredShims,
    AlignmentDocument,
)


__all__ = [
    # Enums (type-safe)
    "Foot",
    "ShimAction",
    "AlignmentStatus",
    "OffsetDirection",
    "StepDirection",

    # Models
    "Geometry",
    "InitialMeasurements",
    "Correction",
    "SimulationResult",
    "RequiredShims",
    "AlignmentDocument",

    # Errors
    "DegenerateGeometryError",

    # Helpers
    "angle_to_slope",
    "slope_to_angle",
    "check_geometry",
    "calculate_shim_slope",
    "calculate_shim_offset_effect",
    "calculate_gaps",
    "is_finite_result",

    # Forward model and inverse solver
    "evaluate",
    "solve_required_shims",

    # Tolerance classification
    "is_offset_in_tolerance",
    "is_angle_in_tolerance",
    "is_in_tolerance",
    "needs_attention",
    "alignment_status",
    "offset_direction",

    # Validation
    "validate_alignment",
    "Severity",
    "ValidationMessage",
    "ValidationResult",

    # Session
    "AlignmentSession",
    "clamp_shim",

    # Output formatters
    "to_json",
    "to_markdown",
    "to_summary",
    "format_signed",
    "describe_required_shim",
]
