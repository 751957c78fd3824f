"""
JSON input/output for shaft alignment sessions.

Defines the typed models shared by the calculator and its collaborators
(geometry, instrument readings, shim correction, computed result) and the
session file format used to save and reload an alignment job.

Uses Pydantic for automatic validation and coercion. Field names carry
their units; the camelCase names used by the web front-end are accepted
as aliases on input.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..constants import (
    ANGLE_READING_BASE_MM,
    DEFAULT_COUPLING_DISTANCE_MM,
    DEFAULT_MOTOR_LENGTH_MM,
)
from ..enums import ShimAction
from .schema import SCHEMA_VERSION, validate_schema_version, detect_schema_version

logger = logging.getLogger(__name__)


class Geometry(BaseModel):
    """Machine-train dimensions of the movable machine."""
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    motor_length_mm: float = Field(
        default=DEFAULT_MOTOR_LENGTH_MM,
        validation_alias=AliasChoices('motor_length_mm', 'motorLength'),
    )  # Rear foot to front foot, must be non-zero
    coupling_distance_mm: float = Field(
        default=DEFAULT_COUPLING_DISTANCE_MM,
        validation_alias=AliasChoices('coupling_distance_mm', 'couplingDist'),
    )  # Front foot to coupling centre


class InitialMeasurements(BaseModel):
    """Raw instrument readings before any correction."""
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    initial_offset_mm: float = Field(
        default=0.0,
        validation_alias=AliasChoices('initial_offset_mm', 'initialOffset'),
    )  # < 0: movable machine low, > 0: high
    initial_angle_mm_per_100: float = Field(
        default=0.0,
        validation_alias=AliasChoices('initial_angle_mm_per_100', 'initialAngle'),
    )  # Gap change per 100 mm of coupling diameter


class Correction(BaseModel):
    """Shim change at each foot relative to the as-measured state."""
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    rear_shim_mm: float = Field(
        default=0.0,
        validation_alias=AliasChoices('rear_shim_mm', 'rearShim'),
    )
    front_shim_mm: float = Field(
        default=0.0,
        validation_alias=AliasChoices('front_shim_mm', 'frontShim'),
    )


class SimulationResult(BaseModel):
    """Resulting alignment after applying a correction."""
    model_config = ConfigDict(extra='ignore')

    vertical_offset_mm: float
    angular_misalignment: float  # Raw slope (mm/mm)
    gap_top_mm: float
    gap_bottom_mm: float

    @property
    def angular_misalignment_mm_per_100(self) -> float:
        """Angular misalignment in the mm/100mm display convention."""
        return self.angular_misalignment * ANGLE_READING_BASE_MM


class RequiredShims(BaseModel):
    """Shim change that drives both offset and angle to zero."""
    model_config = ConfigDict(extra='ignore')

    front_shim_mm: float
    rear_shim_mm: float

    @property
    def front_action(self) -> ShimAction:
        return ShimAction.ADD if self.front_shim_mm >= 0 else ShimAction.REMOVE

    @property
    def rear_action(self) -> ShimAction:
        return ShimAction.ADD if self.rear_shim_mm >= 0 else ShimAction.REMOVE

    def as_correction(self) -> Correction:
        """Use the required values as a shim correction."""
        return Correction(rear_shim_mm=self.rear_shim_mm, front_shim_mm=self.front_shim_mm)


class AlignmentDocument(BaseModel):
    """Complete alignment job: everything needed to reproduce a result."""
    model_config = ConfigDict(extra='ignore')

    geometry: Geometry = Field(default_factory=Geometry)
    measurements: InitialMeasurements = Field(default_factory=InitialMeasurements)
    correction: Correction = Field(default_factory=Correction)
    notes: Optional[str] = None


def load_session_json(filepath: Union[str, Path]) -> AlignmentDocument:
    """
    Load an alignment session from JSON.

    Missing sections fall back to the defaults (500/200 mm geometry, zero
    readings, zero shims).

    Args:
        filepath: Path to a session JSON file

    Returns:
        AlignmentDocument with all parameters

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the schema version is not supported
        ValidationError: If a field has the wrong type
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Session file not found: {filepath}")

    with open(filepath, 'r', encoding='utf-8') as f:
        data = json.load(f)

    # Some exports wrap the document
    if 'session' in data:
        data = data['session']

    if not validate_schema_version(data):
        raise ValueError(
            f"Unsupported session schema version {detect_schema_version(data)} "
            f"(this version reads up to {SCHEMA_VERSION})"
        )

    document = AlignmentDocument.model_validate(data)
    logger.debug(f"Loaded session from {filepath}")
    return document


def save_session_json(document: AlignmentDocument, filepath: Union[str, Path]) -> None:
    """
    Save an alignment session to JSON.

    Args:
        document: Session to save
        filepath: Path to save JSON file
    """
    filepath = Path(filepath)

    data = {'schema_version': SCHEMA_VERSION}
    data.update(document.model_dump(mode='json', exclude_none=True))

    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)

    logger.info(f"Saved session to {filepath}")
