"""
Interactive alignment session.

Holds the three inputs a technician edits (geometry, readings, shims) and
recomputes results on access. Shim stepping mirrors the +/- buttons of the
shim controls: each step is clamped to the interactive range and rounded so
repeated 0.05 mm steps do not accumulate float drift.
"""

import logging
from typing import Optional

from ..constants import SHIM_DECIMALS, SHIM_MAX_MM, SHIM_MIN_MM, SHIM_STEP_MM
from ..enums import Foot, StepDirection
from ..io import (
    AlignmentDocument,
    Correction,
    Geometry,
    InitialMeasurements,
    RequiredShims,
    SimulationResult,
)
from .core import evaluate, solve_required_shims

logger = logging.getLogger(__name__)


def clamp_shim(value: float) -> float:
    """Clamp a shim change to the interactive range and round it."""
    clamped = max(SHIM_MIN_MM, min(SHIM_MAX_MM, value))
    return round(clamped, SHIM_DECIMALS)


class AlignmentSession:
    """Mutable alignment state; results are always derived, never stored."""

    def __init__(
        self,
        geometry: Optional[Geometry] = None,
        measurements: Optional[InitialMeasurements] = None,
        correction: Optional[Correction] = None,
        notes: Optional[str] = None,
    ):
        self.geometry = geometry or Geometry()
        self.measurements = measurements or InitialMeasurements()
        self.correction = correction or Correction()
        self.notes = notes

    @property
    def result(self) -> SimulationResult:
        return evaluate(self.geometry, self.measurements, self.correction)

    @property
    def required_shims(self) -> RequiredShims:
        return solve_required_shims(self.geometry, self.measurements)

    def shim(self, foot: Foot) -> float:
        if foot == Foot.REAR:
            return self.correction.rear_shim_mm
        return self.correction.front_shim_mm

    def set_shim(self, foot: Foot, value: float) -> float:
        """Set one foot's shim change without clamping. Returns the new value."""
        key = 'rear_shim_mm' if foot == Foot.REAR else 'front_shim_mm'
        self.correction = self.correction.model_copy(update={key: value})
        return value

    def adjust(self, foot: Foot, delta_mm: float) -> float:
        """Add delta_mm to a foot's shim, clamped and rounded. Returns the new value."""
        new_value = clamp_shim(self.shim(foot) + delta_mm)
        logger.debug(f"{foot.value} shim {self.shim(foot):+.2f} -> {new_value:+.2f} mm")
        return self.set_shim(foot, new_value)

    def adjust_rear(self, delta_mm: float) -> float:
        return self.adjust(Foot.REAR, delta_mm)

    def adjust_front(self, delta_mm: float) -> float:
        return self.adjust(Foot.FRONT, delta_mm)

    def step(self, foot: Foot, direction: StepDirection) -> float:
        """One button press: +/- one standard shim step."""
        delta = SHIM_STEP_MM if direction == StepDirection.UP else -SHIM_STEP_MM
        return self.adjust(foot, delta)

    def step_rear_up(self) -> float:
        return self.step(Foot.REAR, StepDirection.UP)

    def step_rear_down(self) -> float:
        return self.step(Foot.REAR, StepDirection.DOWN)

    def step_front_up(self) -> float:
        return self.step(Foot.FRONT, StepDirection.UP)

    def step_front_down(self) -> float:
        return self.step(Foot.FRONT, StepDirection.DOWN)

    def can_raise(self, foot: Foot) -> bool:
        return self.shim(foot) < SHIM_MAX_MM

    def can_lower(self, foot: Foot) -> bool:
        return self.shim(foot) > SHIM_MIN_MM

    def set_measurements(self, measurements: InitialMeasurements) -> None:
        self.measurements = measurements

    def set_geometry(self, geometry: Geometry) -> None:
        self.geometry = geometry

    def reset(self) -> None:
        """Return both shims to the as-measured baseline."""
        self.correction = Correction()

    def apply_required(self) -> RequiredShims:
        """
        Set the correction to the solver's output.

        Not clamped: the exact values are applied even beyond the
        interactive range, so the result is zeroed.
        """
        required = self.required_shims
        self.correction = required.as_correction()
        return required

    def to_document(self) -> AlignmentDocument:
        return AlignmentDocument(
            geometry=self.geometry,
            measurements=self.measurements,
            correction=self.correction,
            notes=self.notes,
        )

    @classmethod
    def from_document(cls, document: AlignmentDocument) -> "AlignmentSession":
        return cls(
            geometry=document.geometry,
            measurements=document.measurements,
            correction=document.correction,
            notes=document.notes,
        )
