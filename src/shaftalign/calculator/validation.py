"""
Shaft Alignment Calculator - Tolerance Classification and Validation

The core model never thresholds its output. This module is the consumer
side: it decides whether a result is in tolerance, which way the motor
sits, and collects findings about the inputs for display.

Rules follow common practice for horizontal machines:
- 0.05 mm parallel offset and 0.05 mm/100mm angle as the acceptance window
- Shim stacks beyond +/-10 mm are outside the interactive range
"""

from dataclasses import dataclass, field
from enum import Enum
from math import isfinite
from typing import List, Optional

from ..constants import (
    ANGLE_TOLERANCE_MM_PER_100,
    OFFSET_TOLERANCE_MM,
    SHIM_MAX_MM,
    SHIM_MIN_MM,
)
from ..enums import AlignmentStatus, OffsetDirection
from ..io import Correction, Geometry, InitialMeasurements, SimulationResult
from .core import evaluate, solve_required_shims


def is_offset_in_tolerance(result: SimulationResult, tolerance_mm: float = OFFSET_TOLERANCE_MM) -> bool:
    """Check parallel offset at the coupling against the tolerance (inclusive)"""
    return abs(result.vertical_offset_mm) <= tolerance_mm


def is_angle_in_tolerance(
    result: SimulationResult,
    tolerance_mm_per_100: float = ANGLE_TOLERANCE_MM_PER_100,
) -> bool:
    """Check angular misalignment, compared in mm/100mm (inclusive)"""
    return abs(result.angular_misalignment_mm_per_100) <= tolerance_mm_per_100


def is_in_tolerance(result: SimulationResult) -> bool:
    """Both offset and angle within tolerance"""
    return is_offset_in_tolerance(result) and is_angle_in_tolerance(result)


def needs_attention(result: SimulationResult) -> bool:
    """Attention badge: offset or angle strictly beyond tolerance"""
    return (
        abs(result.vertical_offset_mm) > OFFSET_TOLERANCE_MM
        or abs(result.angular_misalignment_mm_per_100) > ANGLE_TOLERANCE_MM_PER_100
    )


def alignment_status(result: SimulationResult) -> AlignmentStatus:
    """Status badge value for a result"""
    if is_in_tolerance(result):
        return AlignmentStatus.IN_TOLERANCE
    return AlignmentStatus.NEEDS_ALIGNMENT


def offset_direction(result: SimulationResult) -> OffsetDirection:
    """
    Where the movable machine sits at the coupling.

    Offsets inside the tolerance window are reported as CENTERED; the
    readings panel only shows a direction hint when out of tolerance.
    """
    if is_offset_in_tolerance(result):
        return OffsetDirection.CENTERED
    if result.vertical_offset_mm < 0:
        return OffsetDirection.LOW
    return OffsetDirection.HIGH


class Severity(Enum):
    """Validation message severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding"""
    severity: Severity
    code: str
    message: str
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    """Complete validation result"""
    valid: bool  # True if no errors
    messages: List[ValidationMessage] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    @property
    def infos(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.INFO]

    @property
    def codes(self) -> List[str]:
        return [m.code for m in self.messages]


def validate_alignment(
    geometry: Geometry,
    measurements: InitialMeasurements,
    correction: Optional[Correction] = None,
) -> ValidationResult:
    """
    Validate an alignment job and classify its result.

    Geometry errors stop evaluation; everything else is reported alongside
    the result checks.

    Args:
        geometry: Machine-train dimensions
        measurements: Initial instrument readings
        correction: Current shim change (defaults to none applied)

    Returns:
        ValidationResult with all findings
    """
    if correction is None:
        correction = Correction()

    messages: List[ValidationMessage] = []

    messages.extend(_validate_finite_inputs(geometry, measurements, correction))
    messages.extend(_validate_geometry(geometry))

    if any(m.severity == Severity.ERROR for m in messages):
        return ValidationResult(valid=False, messages=messages)

    messages.extend(_validate_shim_range(correction))
    messages.extend(_validate_result(evaluate(geometry, measurements, correction)))
    messages.extend(_validate_required_shims(geometry, measurements))

    has_errors = any(m.severity == Severity.ERROR for m in messages)

    return ValidationResult(
        valid=not has_errors,
        messages=messages
    )


def _validate_finite_inputs(
    geometry: Geometry,
    measurements: InitialMeasurements,
    correction: Correction,
) -> List[ValidationMessage]:
    """NaN or infinite inputs would propagate into every output"""
    fields = {
        **geometry.model_dump(),
        **measurements.model_dump(),
        **correction.model_dump(),
    }
    bad = [name for name, value in fields.items() if not isfinite(value)]
    if not bad:
        return []
    return [ValidationMessage(
        severity=Severity.ERROR,
        code="NON_FINITE_INPUT",
        message=f"Non-finite input value(s): {', '.join(bad)}",
        suggestion="Re-enter the affected readings or dimensions"
    )]


def _validate_geometry(geometry: Geometry) -> List[ValidationMessage]:
    """Check foot span and coupling distance"""
    messages = []

    if geometry.motor_length_mm == 0:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="DEGENERATE_GEOMETRY",
            message="Distance between the feet is zero",
            suggestion="Measure the distance from the rear foot bolt to the front foot bolt"
        ))
    elif geometry.motor_length_mm < 0:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="NEGATIVE_MOTOR_LENGTH",
            message=f"Distance between the feet ({geometry.motor_length_mm:.1f}mm) is negative",
            suggestion="Enter the foot span as a positive distance"
        ))

    if geometry.coupling_distance_mm < 0:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="NEGATIVE_COUPLING_DISTANCE",
            message=f"Front foot to coupling distance ({geometry.coupling_distance_mm:.1f}mm) is negative",
            suggestion="A negative distance places the coupling between the feet - check the measurement"
        ))

    return messages


def _validate_shim_range(correction: Correction) -> List[ValidationMessage]:
    """Check shim changes lie within the interactive range"""
    messages = []
    for name, value in (("Rear", correction.rear_shim_mm), ("Front", correction.front_shim_mm)):
        if value < SHIM_MIN_MM or value > SHIM_MAX_MM:
            messages.append(ValidationMessage(
                severity=Severity.WARNING,
                code="SHIM_OUT_OF_RANGE",
                message=f"{name} shim change {value:+.2f}mm is outside {SHIM_MIN_MM:+.0f}..{SHIM_MAX_MM:+.0f}mm",
                suggestion="Check the foot for soft foot or base problems before shimming this much"
            ))
    return messages


def _validate_result(result: SimulationResult) -> List[ValidationMessage]:
    """Classify the resulting offset and angle"""
    messages = []

    if not is_offset_in_tolerance(result):
        where = "LOW" if result.vertical_offset_mm < 0 else "HIGH"
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="OFFSET_OUT_OF_TOLERANCE",
            message=(
                f"Parallel offset {result.vertical_offset_mm:+.3f}mm exceeds "
                f"{OFFSET_TOLERANCE_MM}mm - motor is {where}"
            ),
            suggestion="Add shims under both feet" if where == "LOW" else "Remove shims under both feet"
        ))

    if not is_angle_in_tolerance(result):
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="ANGLE_OUT_OF_TOLERANCE",
            message=(
                f"Angular misalignment {result.angular_misalignment_mm_per_100:+.3f}mm/100mm "
                f"exceeds {ANGLE_TOLERANCE_MM_PER_100}mm/100mm"
            ),
            suggestion="Change the rear and front shims by different amounts to correct the angle"
        ))

    if not messages:
        messages.append(ValidationMessage(
            severity=Severity.INFO,
            code="IN_TOLERANCE",
            message="Offset and angle are within tolerance"
        ))

    return messages


def _validate_required_shims(geometry: Geometry, measurements: InitialMeasurements) -> List[ValidationMessage]:
    """Report corrections that need cutting or exceed the shim range"""
    messages = []
    required = solve_required_shims(geometry, measurements)

    for name, value in (("rear", required.rear_shim_mm), ("front", required.front_shim_mm)):
        if value < 0:
            messages.append(ValidationMessage(
                severity=Severity.INFO,
                code="REQUIRED_CUT",
                message=f"Full correction removes {abs(value):.3f}mm at the {name} foot",
                suggestion="Remove existing shims first; cut the base only if none are left"
            ))
        if value < SHIM_MIN_MM or value > SHIM_MAX_MM:
            messages.append(ValidationMessage(
                severity=Severity.INFO,
                code="REQUIRED_SHIM_OUT_OF_RANGE",
                message=f"Required {name} shim change {value:+.3f}mm is beyond the {SHIM_MAX_MM:.0f}mm range",
                suggestion="Re-check the readings; a correction this large usually indicates a setup error"
            ))

    return messages
