"""Output formatters for alignment sessions.

Converts an AlignmentDocument plus its computed result to JSON, Markdown
and a plain-text summary. Results are recomputed here from the document,
never read from a stored copy.

Uses Pydantic's model_dump(mode='json') for the input sections.
"""

import json
from typing import Dict, List, Optional, TYPE_CHECKING

from ..constants import (
    ANGLE_DISPLAY_DECIMALS,
    ANGLE_TOLERANCE_MM_PER_100,
    OFFSET_DISPLAY_DECIMALS,
    OFFSET_TOLERANCE_MM,
)
from ..enums import AlignmentStatus, OffsetDirection, ShimAction
from ..io import AlignmentDocument, RequiredShims, SimulationResult
from ..io.schema import SCHEMA_VERSION
from .core import evaluate, solve_required_shims
from .validation import alignment_status, offset_direction

if TYPE_CHECKING:
    from .validation import ValidationResult, ValidationMessage


STATUS_LABELS = {
    AlignmentStatus.IN_TOLERANCE: "IN TOLERANCE",
    AlignmentStatus.NEEDS_ALIGNMENT: "ALIGNMENT REQUIRED",
}

DIRECTION_LABELS = {
    OffsetDirection.HIGH: "motor HIGH",
    OffsetDirection.LOW: "motor LOW",
    OffsetDirection.CENTERED: "centred",
}

ACTION_LABELS = {
    ShimAction.ADD: "add",
    ShimAction.REMOVE: "remove",
}


def format_signed(value: float, decimals: int = OFFSET_DISPLAY_DECIMALS) -> str:
    """Format with an explicit '+' for positive values (zero has no sign)."""
    text = f"{value:.{decimals}f}"
    if value > 0:
        text = "+" + text
    return text


def describe_required_shim(value: float, decimals: int = 3) -> Dict:
    """
    Split a required shim value into sign, magnitude and action.

    Zero counts as "add" so that a perfectly aligned foot is shown as +0.000.
    """
    is_positive = value >= 0
    return {
        "sign": "+" if is_positive else "-",
        "value": f"{abs(value):.{decimals}f}",
        "action": ShimAction.ADD if is_positive else ShimAction.REMOVE,
    }


def result_to_dict(result: SimulationResult) -> Dict:
    data = result.model_dump(mode='json')
    data["angular_misalignment_mm_per_100"] = result.angular_misalignment_mm_per_100
    return data


def required_to_dict(required: RequiredShims) -> Dict:
    return {
        "front_shim_mm": required.front_shim_mm,
        "rear_shim_mm": required.rear_shim_mm,
        "front_action": required.front_action.value,
        "rear_action": required.rear_action.value,
    }


def messages_to_dicts(messages: List["ValidationMessage"]) -> List[Dict]:
    return [
        {
            'severity': msg.severity.value,
            'code': msg.code,
            'message': msg.message,
            'suggestion': msg.suggestion
        }
        for msg in messages
    ]


def to_json(
    document: AlignmentDocument,
    validation: Optional["ValidationResult"] = None,
    indent: int = 2,
) -> str:
    """Convert an alignment session and its results to a JSON string.

    Args:
        document: Geometry, readings and correction
        validation: Optional validation results to include in output
        indent: JSON indentation level (default: 2)

    Returns:
        JSON string with schema version, inputs, result, required shims
        and status
    """
    result = evaluate(document.geometry, document.measurements, document.correction)
    required = solve_required_shims(document.geometry, document.measurements)

    data = {"schema_version": SCHEMA_VERSION}
    data.update(document.model_dump(mode='json', exclude_none=True))
    data["result"] = result_to_dict(result)
    data["required_shims"] = required_to_dict(required)
    data["status"] = alignment_status(result).value
    data["offset_direction"] = offset_direction(result).value

    if validation:
        data["validation"] = {
            'valid': validation.valid,
            'errors': messages_to_dicts(validation.errors),
            'warnings': messages_to_dicts(validation.warnings),
            'infos': messages_to_dicts(validation.infos),
        }

    return json.dumps(data, indent=indent)


def to_markdown(
    document: AlignmentDocument,
    validation: Optional["ValidationResult"] = None,
) -> str:
    """Convert an alignment session to a Markdown report.

    Args:
        document: Geometry, readings and correction
        validation: Optional validation results to include

    Returns:
        Markdown report string
    """
    geo = document.geometry
    meas = document.measurements
    corr = document.correction

    result = evaluate(geo, meas, corr)
    required = solve_required_shims(geo, meas)
    status = alignment_status(result)
    direction = offset_direction(result)

    md = "# Shaft Alignment Report\n\n"
    if document.notes:
        md += f"{document.notes}\n\n"

    md += f"**Status:** {STATUS_LABELS[status]}\n\n"

    md += "## Machine Geometry\n\n"
    md += "| Parameter | Value |\n"
    md += "|-----------|-------|\n"
    md += f"| Distance Between Feet | {geo.motor_length_mm:.1f} mm |\n"
    md += f"| Front Foot to Coupling | {geo.coupling_distance_mm:.1f} mm |\n\n"

    md += "## Initial Readings\n\n"
    md += "| Reading | Value |\n"
    md += "|---------|-------|\n"
    md += f"| Parallel Offset | {format_signed(meas.initial_offset_mm)} mm |\n"
    md += f"| Angular Gap | {meas.initial_angle_mm_per_100:.{ANGLE_DISPLAY_DECIMALS}f} mm/100mm |\n\n"

    md += "## Applied Shims\n\n"
    md += "| Foot | Change |\n"
    md += "|------|--------|\n"
    md += f"| Rear | {format_signed(corr.rear_shim_mm, 2)} mm |\n"
    md += f"| Front | {format_signed(corr.front_shim_mm, 2)} mm |\n\n"

    md += "## Current Position\n\n"
    md += "| Parameter | Value | Tolerance |\n"
    md += "|-----------|-------|-----------|\n"
    offset_text = format_signed(result.vertical_offset_mm)
    if direction != OffsetDirection.CENTERED:
        offset_text += f" ({DIRECTION_LABELS[direction]})"
    md += f"| Parallel Offset | {offset_text} mm | ±{OFFSET_TOLERANCE_MM} mm |\n"
    md += (
        f"| Angular Misalignment | {result.angular_misalignment_mm_per_100:.{ANGLE_DISPLAY_DECIMALS}f} mm/100mm "
        f"| ±{ANGLE_TOLERANCE_MM_PER_100} mm/100mm |\n"
    )
    md += f"| Gap Top | {result.gap_top_mm:.3f} mm | |\n"
    md += f"| Gap Bottom | {result.gap_bottom_mm:.3f} mm | |\n\n"

    md += "## Required Correction\n\n"
    md += "| Foot | Shim Change | Action |\n"
    md += "|------|-------------|--------|\n"
    for name, value in (("Rear", required.rear_shim_mm), ("Front", required.front_shim_mm)):
        desc = describe_required_shim(value)
        md += f"| {name} | {desc['sign']}{desc['value']} mm | {ACTION_LABELS[desc['action']].title()} |\n"
    md += "\n*Positive values mean adding shims, negative values removing them.*\n"

    if validation:
        md += "\n## Validation\n\n"

        if validation.valid:
            md += "**Inputs:** ✅ valid\n\n"
        else:
            md += "**Inputs:** ❌ errors found\n\n"

        if validation.errors:
            md += "### Errors\n\n"
            for msg in validation.errors:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.warnings:
            md += "### Warnings\n\n"
            for msg in validation.warnings:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.infos:
            md += "### Information\n\n"
            for msg in validation.infos:
                md += f"- {msg.message}\n"
            md += "\n"

    md += "\n## Notes\n\n"
    md += "- All dimensions in millimeters\n"
    md += "- Angular values are mm of gap change per 100 mm of coupling diameter\n"
    md += "- Vertical plane only; check horizontal alignment and soft foot separately\n"
    md += "\n---\n"
    md += "*Generated by ShaftAlign*\n"

    return md


def to_summary(document: AlignmentDocument) -> str:
    """Convert an alignment session to a formatted text summary.

    Args:
        document: Geometry, readings and correction

    Returns:
        Multi-line formatted summary string
    """
    geo = document.geometry
    meas = document.measurements
    corr = document.correction

    result = evaluate(geo, meas, corr)
    required = solve_required_shims(geo, meas)
    direction = offset_direction(result)

    offset_line = f"  Parallel offset:   {format_signed(result.vertical_offset_mm)} mm"
    if direction != OffsetDirection.CENTERED:
        offset_line += f" ({DIRECTION_LABELS[direction]})"

    rear = describe_required_shim(required.rear_shim_mm)
    front = describe_required_shim(required.front_shim_mm)

    lines = [
        "═══ Shaft Alignment ═══",
        f"Status: {STATUS_LABELS[alignment_status(result)]}",
        "",
        "Geometry:",
        f"  Feet span:         {geo.motor_length_mm:.1f} mm",
        f"  Front foot → cpl:  {geo.coupling_distance_mm:.1f} mm",
        "",
        "Initial readings:",
        f"  Offset:            {format_signed(meas.initial_offset_mm)} mm",
        f"  Angle:             {meas.initial_angle_mm_per_100:.3f} mm/100mm",
        "",
        "Shims:",
        f"  Rear:              {format_signed(corr.rear_shim_mm, 2)} mm",
        f"  Front:             {format_signed(corr.front_shim_mm, 2)} mm",
        "",
        "Current position:",
        offset_line,
        f"  Angular:           {result.angular_misalignment_mm_per_100:.3f} mm/100mm",
        f"  Gap top/bottom:    {result.gap_top_mm:.3f} / {result.gap_bottom_mm:.3f} mm",
        "",
        "Required correction:",
        f"  Rear foot:         {rear['sign']}{rear['value']} mm ({ACTION_LABELS[rear['action']]})",
        f"  Front foot:        {front['sign']}{front['value']} mm ({ACTION_LABELS[front['action']]})",
    ]

    return "\n".join(lines)
