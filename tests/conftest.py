"""
Pytest configuration and shared fixtures for shaftalign tests.
"""

import json
import pytest

from shaftalign.io import Geometry, InitialMeasurements, Correction, AlignmentDocument


# ─── Geometry ────────────────────────────────────────────────────────────


@pytest.fixture
def default_geometry():
    """500 mm foot span, 200 mm front foot to coupling."""
    return Geometry(motor_length_mm=500.0, coupling_distance_mm=200.0)


@pytest.fixture
def zero_span_geometry():
    """Feet at the same position: slope is undefined."""
    return Geometry(motor_length_mm=0.0, coupling_distance_mm=200.0)


# ─── Readings ────────────────────────────────────────────────────────────


@pytest.fixture
def aligned_readings():
    return InitialMeasurements(initial_offset_mm=0.0, initial_angle_mm_per_100=0.0)


@pytest.fixture
def low_motor_readings():
    """Motor 0.5 mm low, 0.1 mm/100mm angular gap."""
    return InitialMeasurements(initial_offset_mm=-0.5, initial_angle_mm_per_100=0.1)


@pytest.fixture
def no_shims():
    return Correction()


# ─── Session documents and files ─────────────────────────────────────────


@pytest.fixture
def sample_session_dict():
    """Session dict as written by save_session_json."""
    return {
        "schema_version": "1.0",
        "geometry": {"motor_length_mm": 500.0, "coupling_distance_mm": 200.0},
        "measurements": {"initial_offset_mm": -0.5, "initial_angle_mm_per_100": 0.1},
        "correction": {"rear_shim_mm": 0.0, "front_shim_mm": 0.0},
        "notes": "Pump P-101",
    }


@pytest.fixture
def sample_document(sample_session_dict):
    return AlignmentDocument.model_validate(sample_session_dict)


@pytest.fixture
def session_file(tmp_path, sample_session_dict):
    """Session JSON written to a temporary file."""
    path = tmp_path / "session.json"
    path.write_text(json.dumps(sample_session_dict, indent=2))
    return path
