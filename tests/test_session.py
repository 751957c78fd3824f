"""
Tests for the interactive alignment session (shim controls).
"""

import pytest

from shaftalign.calculator import AlignmentSession, clamp_shim
from shaftalign.enums import Foot, StepDirection
from shaftalign.io import Geometry, InitialMeasurements, Correction, AlignmentDocument


class TestClampShim:

    def test_within_range_rounded(self):
        assert clamp_shim(0.1 + 0.2) == 0.3

    def test_clamped(self):
        assert clamp_shim(12.5) == 10.0
        assert clamp_shim(-10.01) == -10.0


class TestStepping:
    """+/- buttons step by 0.05 mm, clamped and rounded."""

    def test_defaults(self):
        session = AlignmentSession()
        assert session.geometry.motor_length_mm == 500.0
        assert session.geometry.coupling_distance_mm == 200.0
        assert session.correction == Correction()

    def test_step_up_down(self):
        session = AlignmentSession()
        assert session.step_rear_up() == 0.05
        assert session.step_front_down() == -0.05
        assert session.correction.rear_shim_mm == 0.05
        assert session.correction.front_shim_mm == -0.05

    def test_repeated_steps_do_not_drift(self):
        session = AlignmentSession()
        for _ in range(7):
            session.step(Foot.FRONT, StepDirection.UP)
        assert session.correction.front_shim_mm == 0.35

    def test_steps_stop_at_limit(self):
        session = AlignmentSession(correction=Correction(rear_shim_mm=9.98))
        assert session.step_rear_up() == 10.0
        assert not session.can_raise(Foot.REAR)
        assert session.step_rear_up() == 10.0
        assert session.can_lower(Foot.REAR)

    def test_lower_limit(self):
        session = AlignmentSession(correction=Correction(front_shim_mm=-10.0))
        assert not session.can_lower(Foot.FRONT)
        assert session.step_front_down() == -10.0

    def test_adjust_by_delta(self):
        session = AlignmentSession()
        session.adjust_rear(0.123)
        assert session.correction.rear_shim_mm == 0.12

    def test_step_changes_result(self):
        session = AlignmentSession()
        before = session.result.vertical_offset_mm
        session.step_front_up()
        assert session.result.vertical_offset_mm > before


class TestSessionState:

    def test_reset(self):
        session = AlignmentSession(correction=Correction(rear_shim_mm=1.0, front_shim_mm=-2.0))
        session.reset()
        assert session.correction.rear_shim_mm == 0.0
        assert session.correction.front_shim_mm == 0.0

    def test_apply_required_zeroes_result(self):
        session = AlignmentSession(
            measurements=InitialMeasurements(initial_offset_mm=-0.5, initial_angle_mm_per_100=0.1),
        )
        required = session.apply_required()
        assert session.correction.rear_shim_mm == required.rear_shim_mm
        assert abs(session.result.vertical_offset_mm) < 1e-9
        assert abs(session.result.angular_misalignment) < 1e-12

    def test_apply_required_is_not_clamped(self):
        session = AlignmentSession(
            measurements=InitialMeasurements(initial_angle_mm_per_100=10.0),
        )
        session.apply_required()
        assert session.correction.rear_shim_mm == pytest.approx(70.0)

    def test_required_ignores_current_shims(self):
        session = AlignmentSession(
            measurements=InitialMeasurements(initial_offset_mm=-0.5),
            correction=Correction(rear_shim_mm=3.0),
        )
        assert session.required_shims.rear_shim_mm == pytest.approx(0.5)

    def test_set_measurements_recomputes(self):
        session = AlignmentSession()
        assert session.result.vertical_offset_mm == 0.0
        session.set_measurements(InitialMeasurements(initial_offset_mm=0.2))
        assert session.result.vertical_offset_mm == pytest.approx(0.2)

    def test_set_geometry_recomputes(self):
        session = AlignmentSession(correction=Correction(rear_shim_mm=1.0))
        first = session.result.vertical_offset_mm
        session.set_geometry(Geometry(motor_length_mm=1000.0, coupling_distance_mm=200.0))
        assert session.result.vertical_offset_mm == pytest.approx(-0.2)
        assert first == pytest.approx(-0.4)

    def test_document_round_trip(self):
        session = AlignmentSession(
            measurements=InitialMeasurements(initial_offset_mm=-0.5),
            correction=Correction(front_shim_mm=0.25),
            notes="motor side",
        )
        document = session.to_document()
        assert isinstance(document, AlignmentDocument)

        restored = AlignmentSession.from_document(document)
        assert restored.correction == session.correction
        assert restored.measurements == session.measurements
        assert restored.notes == "motor side"
