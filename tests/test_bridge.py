"""
Tests for the JSON bridge used by calculator front-ends.

The bridge uses a single entry point: calculate(input_json) -> output_json
"""

import json
import pytest

from shaftalign.calculator.bridge import (
    calculate,
    parse_numeric_input,
    CalculatorInputs,
    CalculatorOutput,
)


def _call(payload):
    return json.loads(calculate(json.dumps(payload)))


class TestParseNumericInput:
    """Free-text numeric fields keep the previous value on partial input."""

    @pytest.mark.parametrize("text", ["", "-", "+", ".", "-.", "+.", "  ", "abc", "1.2.3", "nan", "inf", None])
    def test_rejected(self, text):
        assert parse_numeric_input(text) is None

    @pytest.mark.parametrize("text,expected", [
        ("0.5", 0.5),
        ("-0.5", -0.5),
        (" 12 ", 12.0),
        ("0,25", 0.25),
        ("-.5", -0.5),
        ("5.", 5.0),
        (3, 3.0),
        (2.5, 2.5),
    ])
    def test_accepted(self, text, expected):
        assert parse_numeric_input(text) == expected

    def test_non_finite_number(self):
        assert parse_numeric_input(float('nan')) is None


class TestInputModels:

    def test_defaults(self):
        inputs = CalculatorInputs()
        assert inputs.geometry.motor_length_mm == 500.0
        assert inputs.action is None

    def test_camel_case_accepted(self):
        inputs = CalculatorInputs.model_validate({
            "geometry": {"motorLength": 600, "couplingDist": 150},
            "measurements": {"initialOffset": -0.2, "initialAngle": 0.05},
            "correction": {"rearShim": 0.1, "frontShim": 0.2},
        })
        assert inputs.geometry.motor_length_mm == 600.0
        assert inputs.measurements.initial_angle_mm_per_100 == 0.05
        assert inputs.correction.front_shim_mm == 0.2

    def test_action_lowercased(self):
        inputs = CalculatorInputs.model_validate({"action": "STEP", "foot": "Rear", "direction": "UP"})
        assert inputs.action == "step"
        assert inputs.foot == "rear"
        assert inputs.direction == "up"


class TestCalculate:

    def test_basic(self):
        output = _call({"measurements": {"initial_offset_mm": -0.5, "initial_angle_mm_per_100": 0.1}})
        assert output["success"] is True
        assert output["result"]["vertical_offset_mm"] == pytest.approx(-0.5)
        assert output["required_shims"]["front_shim_mm"] == pytest.approx(0.7)
        assert output["status"] == "needs_alignment"
        assert output["offset_direction"] == "low"
        assert output["can_raise"] == {"rear": True, "front": True}
        assert "═══ Shaft Alignment ═══" in output["summary"]
        assert output["markdown"].startswith("# Shaft Alignment Report")

    def test_output_validates(self):
        raw = calculate(json.dumps({}))
        output = CalculatorOutput.model_validate_json(raw)
        assert output.success
        assert output.status == "in_tolerance"

    def test_step_action(self):
        output = _call({
            "correction": {"rear_shim_mm": 0.1},
            "action": "step", "foot": "rear", "direction": "up",
        })
        assert output["success"] is True
        assert output["correction"]["rear_shim_mm"] == 0.15

    def test_step_at_limit(self):
        output = _call({
            "correction": {"front_shim_mm": 10.0},
            "action": "step", "foot": "front", "direction": "up",
        })
        assert output["correction"]["front_shim_mm"] == 10.0
        assert output["can_raise"]["front"] is False

    def test_step_requires_foot(self):
        output = _call({"action": "step", "direction": "up"})
        assert output["success"] is False
        assert "foot" in output["error"]

    def test_reset_action(self):
        output = _call({"correction": {"rear_shim_mm": 2.0, "front_shim_mm": 1.0}, "action": "reset"})
        assert output["correction"] == {"rear_shim_mm": 0.0, "front_shim_mm": 0.0}

    def test_apply_required_action(self):
        output = _call({
            "measurements": {"initial_offset_mm": -0.5, "initial_angle_mm_per_100": 0.1},
            "action": "apply_required",
        })
        assert output["success"] is True
        assert output["status"] == "in_tolerance"
        assert output["correction"]["rear_shim_mm"] == pytest.approx(1.2)

    def test_unknown_action(self):
        output = _call({"action": "explode"})
        assert output["success"] is False
        assert "Unknown action" in output["error"]

    def test_zero_span_reported_not_raised(self):
        output = _call({"geometry": {"motor_length_mm": 0}})
        assert output["success"] is False
        assert output["valid"] is False
        assert output["messages"][0]["code"] == "DEGENERATE_GEOMETRY"

    def test_invalid_json(self):
        output = json.loads(calculate("{not json"))
        assert output["success"] is False
        assert output["error"].startswith("Invalid JSON")

    def test_wrong_type(self):
        output = _call({"geometry": {"motor_length_mm": [500]}})
        assert output["success"] is False
        assert output["error"]

    def test_messages_included(self):
        output = _call({"correction": {"rear_shim_mm": 11.0}})
        codes = [m["code"] for m in output["messages"]]
        assert "SHIM_OUT_OF_RANGE" in codes


class TestPartialTextInput:
    """Numeric fields arriving as text while the user is still typing."""

    @pytest.mark.parametrize("text", ["-", "", ".", "+."])
    def test_partial_entry_keeps_default(self, text):
        output = _call({"measurements": {"initialOffset": text, "initialAngle": "0.1"}})
        assert output["success"] is True
        assert output["result"]["vertical_offset_mm"] == 0.0
        assert output["result"]["angular_misalignment_mm_per_100"] == pytest.approx(0.1)

    def test_trailing_dot_parsed(self):
        output = _call({"measurements": {"initial_offset_mm": "5."}})
        assert output["success"] is True
        assert output["result"]["vertical_offset_mm"] == pytest.approx(5.0)

    def test_decimal_comma(self):
        output = _call({"correction": {"rearShim": "0,25"}})
        assert output["correction"]["rear_shim_mm"] == 0.25

    def test_partial_geometry_keeps_default(self):
        output = _call({"geometry": {"motorLength": "-", "couplingDist": "150"}})
        assert output["success"] is True
        inputs = CalculatorInputs.model_validate({"geometry": {"motorLength": "-", "couplingDist": "150"}})
        assert inputs.geometry.motor_length_mm == 500.0
        assert inputs.geometry.coupling_distance_mm == 150.0

    def test_non_text_values_untouched(self):
        inputs = CalculatorInputs.model_validate({"measurements": {"initial_offset_mm": -0.25}})
        assert inputs.measurements.initial_offset_mm == -0.25


class TestNeedsAttention:

    def test_flag_out_of_tolerance(self):
        output = _call({"measurements": {"initial_offset_mm": -0.5}})
        assert output["needs_attention"] is True

    def test_flag_in_tolerance(self):
        output = _call({"measurements": {"initial_offset_mm": 0.05}})
        assert output["needs_attention"] is False
