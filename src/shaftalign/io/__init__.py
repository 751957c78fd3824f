"""
Shaftalign IO - typed models, session loaders and JSON schema.

Example:
    >>> from shaftalign.io import load_session_json, save_session_json
    >>>
    >>> session = load_session_json("pump_p101.json")
    >>> session.measurements.initial_offset_mm
    -0.5
    >>> save_session_json(session, "pump_p101_copy.json")
"""

from .loaders import (
    load_session_json,
    save_session_json,
    Geometry,
    InitialMeasurements,
    Correction,
    SimulationResult,
    RequiredShims,
    AlignmentDocument,
)

from .schema import (
    SCHEMA_VERSION,
    get_schema_v1,
    detect_schema_version,
    validate_schema_version,
    create_example_session,
)

__all__ = [
    # Loaders
    "load_session_json",
    "save_session_json",

    # Models
    "Geometry",
    "InitialMeasurements",
    "Correction",
    "SimulationResult",
    "RequiredShims",
    "AlignmentDocument",

    # Schema
    "SCHEMA_VERSION",
    "get_schema_v1",
    "detect_schema_version",
    "validate_schema_version",
    "create_example_session",
]
