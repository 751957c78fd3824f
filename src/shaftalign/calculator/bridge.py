"""
JSON bridge for calculator front-ends.

Provides a single, clean entry point for all UI->Python calculator calls.
All inputs are validated via Pydantic models before processing, and the
call never raises: failures come back as {"success": false, "error": ...}.

Usage from a web front-end (e.g. Pyodide):
    pyodide.globals.set('input_json', JSON.stringify(state));
    const result = await pyodide.runPythonAsync(`
        from shaftalign.calculator.bridge import calculate
        calculate(input_json)
    `);
    const output = JSON.parse(result);
"""

import json
import logging
from math import isfinite
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing_extensions import TypedDict

from ..enums import Foot, StepDirection
from ..io import Correction, Geometry, InitialMeasurements
from .core import DegenerateGeometryError
from .output import required_to_dict, result_to_dict, to_markdown, to_summary
from .session import AlignmentSession
from .validation import alignment_status, needs_attention, offset_direction, validate_alignment

logger = logging.getLogger(__name__)


class ValidationMessageDict(TypedDict, total=False):
    """Type for validation message dictionaries sent to the front-end."""
    severity: str  # "error", "warning", "info"
    code: str  # e.g., "OFFSET_OUT_OF_TOLERANCE"
    message: str
    suggestion: Optional[str]


# Intermediate text states while a number is being typed
_PARTIAL_NUMBERS = {"", "-", "+", ".", "-.", "+."}


def parse_numeric_input(text: Any) -> Optional[float]:
    """
    Parse free text from a numeric field.

    Returns None for intermediate typing states ("-", ".", empty) and for
    anything that is not a finite number, meaning "keep the previous value".
    A decimal comma is accepted.
    """
    if text is None:
        return None
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return float(text) if isfinite(text) else None

    cleaned = str(text).strip().replace(',', '.')
    if cleaned in _PARTIAL_NUMBERS:
        return None

    try:
        value = float(cleaned)
    except ValueError:
        return None

    return value if isfinite(value) else None


# ============================================================================
# Input Models (Pydantic validation for UI inputs)
# ============================================================================

class CalculatorInputs(BaseModel):
    """
    All inputs from the calculator UI.

    This is the single source of truth for what the front-end sends to Python.
    """
    model_config = ConfigDict(extra='ignore')

    geometry: Geometry = Field(default_factory=Geometry)
    measurements: InitialMeasurements = Field(default_factory=InitialMeasurements)
    correction: Correction = Field(default_factory=Correction)

    # Optional interaction applied before computing
    action: Optional[str] = None  # "step" | "reset" | "apply_required"
    foot: Optional[str] = None  # "rear" | "front" (step only)
    direction: Optional[str] = None  # "up" | "down" (step only)

    @field_validator('geometry', 'measurements', 'correction', mode='before')
    @classmethod
    def parse_text_fields(cls, v):
        """Text from numeric fields; partial entries keep the field's default."""
        if not isinstance(v, dict):
            return v
        cleaned = {}
        for key, value in v.items():
            if isinstance(value, str):
                value = parse_numeric_input(value)
                if value is None:
                    logger.debug(f"Ignoring partial input for {key}")
                    continue
            cleaned[key] = value
        return cleaned

    @field_validator('action', 'foot', 'direction', mode='before')
    @classmethod
    def normalize_lower(cls, v):
        if isinstance(v, str):
            return v.lower()
        return v


# ============================================================================
# Output Models
# ============================================================================

class CalculatorOutput(BaseModel):
    """Output from calculate() - matches what the front-end expects."""
    model_config = ConfigDict(extra='ignore')

    success: bool
    error: Optional[str] = None

    # State after the action (shims may have been stepped or reset)
    correction: Optional[Dict[str, float]] = None

    result: Optional[Dict[str, float]] = None
    required_shims: Optional[Dict[str, Any]] = None
    status: Optional[str] = None
    offset_direction: Optional[str] = None
    needs_attention: Optional[bool] = None  # Advice panel badge

    # Button enable flags for the shim controls
    can_raise: Dict[str, bool] = Field(default_factory=dict)
    can_lower: Dict[str, bool] = Field(default_factory=dict)

    # Display formats
    summary: Optional[str] = None
    markdown: Optional[str] = None

    # Validation
    valid: bool = True
    messages: List[ValidationMessageDict] = Field(default_factory=list)


# ============================================================================
# Main Entry Point
# ============================================================================

def calculate(input_json: str) -> str:
    """
    Single entry point for all calculator operations from a front-end.

    Args:
        input_json: JSON string with CalculatorInputs structure

    Returns:
        JSON string with CalculatorOutput structure
    """
    try:
        data = json.loads(input_json)
        inputs = CalculatorInputs.model_validate(data)

        session = AlignmentSession(
            geometry=inputs.geometry,
            measurements=inputs.measurements,
            correction=inputs.correction,
        )
        _apply_action(session, inputs)

        validation = validate_alignment(session.geometry, session.measurements, session.correction)
        messages = [
            {
                'severity': m.severity.value,
                'message': m.message,
                'code': m.code,
                'suggestion': m.suggestion
            }
            for m in validation.messages
        ]

        if not validation.valid:
            return CalculatorOutput(
                success=False,
                error=validation.errors[0].message,
                correction=session.correction.model_dump(),
                valid=False,
                messages=messages,
            ).model_dump_json()

        result = session.result
        document = session.to_document()

        output = CalculatorOutput(
            success=True,
            correction=session.correction.model_dump(),
            result=result_to_dict(result),
            required_shims=required_to_dict(session.required_shims),
            status=alignment_status(result).value,
            offset_direction=offset_direction(result).value,
            needs_attention=needs_attention(result),
            can_raise={foot.value: session.can_raise(foot) for foot in Foot},
            can_lower={foot.value: session.can_lower(foot) for foot in Foot},
            summary=to_summary(document),
            markdown=to_markdown(document, validation),
            valid=validation.valid,
            messages=messages,
        )

        return output.model_dump_json()

    except json.JSONDecodeError as e:
        return CalculatorOutput(
            success=False,
            error=f"Invalid JSON: {e}"
        ).model_dump_json()

    except (ValidationError, DegenerateGeometryError, ValueError) as e:
        logger.debug(f"Bridge input rejected: {e}")
        return CalculatorOutput(
            success=False,
            error=str(e)
        ).model_dump_json()


def _apply_action(session: AlignmentSession, inputs: CalculatorInputs) -> None:
    """Apply the optional UI action to the session."""
    action = inputs.action
    if action is None or action == "none":
        return
    if action == "reset":
        session.reset()
    elif action == "apply_required":
        session.apply_required()
    elif action == "step":
        if inputs.foot is None or inputs.direction is None:
            raise ValueError("foot and direction are required for step action")
        session.step(Foot(inputs.foot), StepDirection(inputs.direction))
    else:
        raise ValueError(f"Unknown action: {action}")
