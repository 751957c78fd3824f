"""
Shaft Alignment Calculator - Core Calculations

Pure mathematical functions for vertical-plane shaft alignment of a movable
machine (motor) standing on two feet, coupled to a fixed machine (pump).

The model is linear: shims change the motor's centreline by a rise at the
front foot plus a slope over the foot span, and these changes superpose on
the initial instrument readings.

Sign conventions:
- Offsets: positive = movable machine high
- Slopes: positive = front foot relatively higher than rear foot
- Shims: positive = add material, negative = remove material / cut the base
"""

from math import isfinite

from ..constants import ANGLE_READING_BASE_MM, BASELINE_GAP_MM, COUPLING_DIAMETER_MM
from ..io import Geometry, InitialMeasurements, Correction, SimulationResult, RequiredShims


class DegenerateGeometryError(ValueError):
    """Raised when the foot span is zero and the shim slope is undefined."""


def angle_to_slope(angle_mm_per_100: float) -> float:
    """Convert an angular reading in mm/100mm to a raw slope (mm/mm)."""
    return angle_mm_per_100 / ANGLE_READING_BASE_MM


def slope_to_angle(slope: float) -> float:
    """Convert a raw slope (mm/mm) to the mm/100mm reading convention."""
    return slope * ANGLE_READING_BASE_MM


def check_geometry(geometry: Geometry) -> None:
    """
    Reject geometry the model cannot evaluate.

    Only a zero foot span is rejected. Negative or non-finite dimensions are
    passed through so that they propagate into the result.

    Raises:
        DegenerateGeometryError: If motor_length_mm is zero
    """
    if geometry.motor_length_mm == 0:
        raise DegenerateGeometryError(
            "motor_length_mm must be non-zero: the distance between the feet "
            "defines the slope introduced by the shims"
        )


def calculate_shim_slope(front_shim_mm: float, rear_shim_mm: float, motor_length_mm: float) -> float:
    """
    Slope added by the differential shim change between the feet.

    Args:
        front_shim_mm: Shim change at the front foot (mm)
        rear_shim_mm: Shim change at the rear foot (mm)
        motor_length_mm: Distance between the feet (mm), non-zero

    Returns:
        Slope in mm/mm, positive when the front foot ends up higher
    """
    return (front_shim_mm - rear_shim_mm) / motor_length_mm


def calculate_shim_offset_effect(front_shim_mm: float, shim_slope: float, coupling_distance_mm: float) -> float:
    """
    Vertical change at the coupling centre caused by the shims alone.

    The front foot lifts the whole line by its shim; the slope adds the rise
    accumulated over the distance from the front foot to the coupling.
    """
    return front_shim_mm + shim_slope * coupling_distance_mm


def calculate_gaps(total_slope: float) -> tuple[float, float]:
    """
    Coupling-face gap readings at top and bottom for a given slope.

    Returns:
        Tuple of (gap_top_mm, gap_bottom_mm). They always sum to twice the
        baseline gap.
    """
    gap_diff = total_slope * COUPLING_DIAMETER_MM
    gap_top = BASELINE_GAP_MM - gap_diff / 2
    gap_bottom = BASELINE_GAP_MM + gap_diff / 2
    return gap_top, gap_bottom


def evaluate(
    geometry: Geometry,
    measurements: InitialMeasurements,
    correction: Correction,
) -> SimulationResult:
    """
    Forward model: resulting alignment after applying a shim correction.

    Final offset = initial offset + offset change due to shims
    Final slope  = initial slope  + slope change due to shims

    Args:
        geometry: Foot span and front-foot-to-coupling distance
        measurements: Initial offset and angular readings
        correction: Shim change at each foot (zero = as measured)

    Returns:
        SimulationResult with offset, slope and coupling gaps

    Raises:
        DegenerateGeometryError: If motor_length_mm is zero
    """
    check_geometry(geometry)

    shim_slope = calculate_shim_slope(
        correction.front_shim_mm,
        correction.rear_shim_mm,
        geometry.motor_length_mm,
    )
    shim_offset_effect = calculate_shim_offset_effect(
        correction.front_shim_mm,
        shim_slope,
        geometry.coupling_distance_mm,
    )

    total_slope = angle_to_slope(measurements.initial_angle_mm_per_100) + shim_slope
    vertical_offset = measurements.initial_offset_mm + shim_offset_effect
    gap_top, gap_bottom = calculate_gaps(total_slope)

    return SimulationResult(
        vertical_offset_mm=vertical_offset,
        angular_misalignment=total_slope,
        gap_top_mm=gap_top,
        gap_bottom_mm=gap_bottom,
    )


def solve_required_shims(geometry: Geometry, measurements: InitialMeasurements) -> RequiredShims:
    """
    Inverse solver: the shim change that zeroes both offset and angle.

    Back-substitutes through the forward model with a zero result:
    1. The shim slope must cancel the initial slope
    2. Front shim: initial_offset + front + slope * coupling_distance = 0
    3. Rear shim: slope = (front - rear) / motor_length

    Positive values mean "add shims", negative "remove shims / cut the base".

    Raises:
        DegenerateGeometryError: If motor_length_mm is zero
    """
    check_geometry(geometry)

    required_slope_change = -angle_to_slope(measurements.initial_angle_mm_per_100)

    front = -measurements.initial_offset_mm - required_slope_change * geometry.coupling_distance_mm
    rear = front - required_slope_change * geometry.motor_length_mm

    return RequiredShims(front_shim_mm=front, rear_shim_mm=rear)


def is_finite_result(result: SimulationResult) -> bool:
    """True when no field of the result is NaN or infinite."""
    values = (
        result.vertical_offset_mm,
        result.angular_misalignment,
        result.gap_top_mm,
        result.gap_bottom_mm,
    )
    return all(isfinite(v) for v in values)
