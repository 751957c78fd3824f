"""
JSON schema definition for alignment session files.

This defines the contract between the calculator front-ends (CLI, bridge)
and saved session files. The models themselves live in loaders.py; this
module provides version handling and a documented example.
"""

from typing import Dict
from datetime import datetime

SCHEMA_VERSION = "1.0"

MIN_SUPPORTED_VERSION = "1.0"


def get_schema_v1() -> Dict:
    """
    Get the session schema, version 1.0.

    Every section is optional; absent sections take default values.
    """
    return {
        "schema_version": "1.0",
        "required_sections": [],
        "optional_sections": [
            "geometry",
            "measurements",
            "correction",
            "notes"
        ],
        "geometry_fields": {
            "required": [],
            "optional": [
                "motor_length_mm",  # Rear foot to front foot
                "coupling_distance_mm"  # Front foot to coupling centre
            ]
        },
        "measurements_fields": {
            "required": [],
            "optional": [
                "initial_offset_mm",  # < 0 = movable machine low
                "initial_angle_mm_per_100"  # Gap change per 100 mm diameter
            ]
        },
        "correction_fields": {
            "required": [],
            "optional": [
                "rear_shim_mm",  # + add shim, - remove / cut
                "front_shim_mm"
            ]
        }
    }


def detect_schema_version(data: Dict) -> str:
    """Return the schema version of a session dict (files without one are 1.0)."""
    return str(data.get("schema_version", "1.0"))


def validate_schema_version(data: Dict) -> bool:
    """
    Check if schema version is supported for loading.

    Args:
        data: JSON data to check

    Returns:
        True if version is supported
    """
    version = detect_schema_version(data)

    def version_tuple(v: str):
        return tuple(int(x) for x in v.split('.'))

    try:
        current = version_tuple(version)
    except ValueError:
        return False

    return version_tuple(MIN_SUPPORTED_VERSION) <= current <= version_tuple(SCHEMA_VERSION)


def create_example_session() -> Dict:
    """
    Create an example session dict with all fields documented.

    Motor sits 0.5 mm low with a 0.1 mm/100mm angular gap; no shims changed yet.
    """
    return {
        "schema_version": SCHEMA_VERSION,
        "_generator": "shaftalign",
        "_created": datetime.now().isoformat(),

        "geometry": {
            "motor_length_mm": 500.0,
            "coupling_distance_mm": 200.0
        },

        "measurements": {
            "initial_offset_mm": -0.5,
            "initial_angle_mm_per_100": 0.1
        },

        "correction": {
            "rear_shim_mm": 0.0,
            "front_shim_mm": 0.0
        },

        "notes": "Pump P-101, motor side, dial indicator readings"
    }
