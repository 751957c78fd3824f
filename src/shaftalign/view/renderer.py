from __future__ import annotations

import io
import math
from pathlib import Path
from typing import Optional, Union

from matplotlib.figure import Figure
from matplotlib.patches import Polygon, Rectangle
from matplotlib.transforms import Affine2D

from ..calculator.validation import is_angle_in_tolerance, is_offset_in_tolerance
from ..io import Correction, Geometry, SimulationResult
from .style import RenderStyle


# -------------------------
# Layout (drawing units, y up, coupling centre at x = 0)
# -------------------------
HALF_GAP = 5.0
MACHINE_HALF_HEIGHT = 70.0
FOOT_HEIGHT = 10.0
FOOT_BOTTOM = -(MACHINE_HALF_HEIGHT + FOOT_HEIGHT)

REAR_FOOT_X = -215.0
FRONT_FOOT_X = -105.0
FOOT_TOP_WIDTH = 40.0
SHIM_WIDTH = 50.0


def _add(ax, patch, transform):
    patch.set_transform(transform)
    ax.add_patch(patch)
    return patch


def _draw_coupling_half(ax, transform, side: float, style: RenderStyle):
    """Shaft stub, hub and flange on one side of the gap (side = -1 motor, +1 load)."""
    def span(x0, x1):
        lo, hi = sorted((side * x0, side * x1))
        return lo, hi - lo

    x, w = span(HALF_GAP, 35.0)
    _add(ax, Rectangle((x, -10), w, 20, fc=style.steel_color, ec=style.steel_edge, lw=0.8), transform)
    x, w = span(HALF_GAP + 8.0, HALF_GAP + 20.0)
    _add(ax, Rectangle((x, -16), w, 32, fc=style.steel_color, ec=style.steel_edge, lw=0.8), transform)
    x, w = span(HALF_GAP, HALF_GAP + 8.0)
    _add(ax, Rectangle((x, -32), w, 64, fc=style.steel_color, ec=style.steel_edge, lw=0.8, zorder=3), transform)


def _foot_polygon(x_left: float) -> Polygon:
    """Trapezoid foot bracket hanging under the machine body."""
    top = -MACHINE_HALF_HEIGHT
    return Polygon(
        [
            (x_left, top),
            (x_left + FOOT_TOP_WIDTH, top),
            (x_left + FOOT_TOP_WIDTH + 10.0, FOOT_BOTTOM),
            (x_left - 10.0, FOOT_BOTTOM),
        ],
        closed=True,
    )


def _draw_shim(ax, transform, foot_x: float, shim_mm: float, style: RenderStyle):
    """
    Shim plate under a foot. Added material hangs below the foot bracket;
    removed material is outlined as a dashed cut above the foot bottom.
    """
    if shim_mm == 0:
        return
    height = abs(shim_mm) * style.shim_scale
    x = foot_x - 5.0
    if shim_mm > 0:
        plate = Rectangle(
            (x, FOOT_BOTTOM - height), SHIM_WIDTH, height,
            fc=style.shim_color, ec=style.shim_edge, lw=0.8, zorder=2,
        )
    else:
        plate = Rectangle(
            (x, FOOT_BOTTOM), SHIM_WIDTH, height,
            fill=False, ec=style.cut_color, lw=1.0, ls="--", hatch="//", zorder=4,
        )
    _add(ax, plate, transform)


def _draw_motor(ax, correction: Correction, result: SimulationResult, style: RenderStyle):
    """Movable machine, translated by the (amplified) offset and tilted by the slope."""
    shaft_y = style.shaft_height
    lift = result.vertical_offset_mm * style.amplification
    tilt_deg = math.degrees(math.atan(result.angular_misalignment))

    transform = Affine2D().rotate_deg(tilt_deg).translate(0.0, shaft_y + lift) + ax.transData

    _draw_coupling_half(ax, transform, -1.0, style)

    # End shield between the shaft and the stator
    _add(ax, Polygon(
        [(-65, -65), (-45, -50), (-45, 50), (-65, 65)],
        closed=True, fc=style.motor_color, ec=style.motor_edge, lw=1.0,
    ), transform)
    # Stator
    _add(ax, Rectangle(
        (-245, -MACHINE_HALF_HEIGHT), 180, 2 * MACHINE_HALF_HEIGHT,
        fc=style.motor_color, ec=style.motor_edge, lw=1.2,
    ), transform)
    for x in range(-235, -70, 15):
        _add(ax, Rectangle((x, -60), 5, 120, fc=style.rib_color, ec="none", alpha=0.5), transform)
    # Fan cowl
    _add(ax, Rectangle(
        (-275, -60), 30, 120,
        fc=style.motor_color, ec=style.motor_edge, lw=1.0,
    ), transform)

    for foot_x, shim in ((REAR_FOOT_X, correction.rear_shim_mm), (FRONT_FOOT_X, correction.front_shim_mm)):
        foot = _foot_polygon(foot_x)
        foot.set_facecolor(style.motor_foot_color)
        foot.set_edgecolor(style.motor_edge)
        _add(ax, foot, transform)
        _draw_shim(ax, transform, foot_x, shim, style)


def _draw_load(ax, style: RenderStyle):
    """Fixed machine (pump) on the right of the coupling."""
    transform = Affine2D().translate(0.0, style.shaft_height) + ax.transData

    _draw_coupling_half(ax, transform, 1.0, style)
    _add(ax, Rectangle((35, -30), 20, 60, fc=style.load_color, ec=style.load_edge, lw=1.0), transform)
    _add(ax, Rectangle(
        (55, -MACHINE_HALF_HEIGHT), 180, 2 * MACHINE_HALF_HEIGHT,
        fc=style.load_color, ec=style.load_edge, lw=1.2,
    ), transform)
    _add(ax, Rectangle((75, 65), 140, 10, fc=style.load_color, ec=style.load_edge, lw=1.0), transform)
    for x in (75, 185):
        _add(ax, Rectangle(
            (x, FOOT_BOTTOM), 50, FOOT_HEIGHT,
            fc=style.load_foot_color, ec=style.load_edge, lw=1.0,
        ), transform)


def _draw_annotations(ax, geometry: Geometry, correction: Correction, result: SimulationResult, style: RenderStyle):
    offset_ok = is_offset_in_tolerance(result)
    angle_ok = is_angle_in_tolerance(result)
    bad = style.reference_color

    ax.text(
        -style.width / 2 + 10, style.height - style.floor_margin - 20,
        f"Offset: {result.vertical_offset_mm:+.3f} mm",
        color=style.ok_color if offset_ok else bad, fontsize=style.font_size, family="monospace",
    )
    ax.text(
        -style.width / 2 + 10, style.height - style.floor_margin - 42,
        f"Angle:  {result.angular_misalignment_mm_per_100:+.3f} mm/100mm",
        color=style.ok_color if angle_ok else bad, fontsize=style.font_size, family="monospace",
    )
    ax.text(
        style.width / 2 - 10, style.height - style.floor_margin - 20,
        f"Visualization x{style.amplification:g}",
        ha="right", color=style.text_color, fontsize=style.font_size - 1,
    )

    # Foot labels and dimensions under the floor line
    label_y = -22.0
    for name, foot_x, shim in (
        ("REAR", REAR_FOOT_X, correction.rear_shim_mm),
        ("FRONT", FRONT_FOOT_X, correction.front_shim_mm),
    ):
        ax.text(
            foot_x + FOOT_TOP_WIDTH / 2, label_y, f"{name}\n{shim:+.2f} mm",
            ha="center", va="top", color=style.text_color, fontsize=style.font_size - 1,
        )
    ax.text(
        (REAR_FOOT_X + FRONT_FOOT_X) / 2 + FOOT_TOP_WIDTH / 2, label_y - 32,
        f"L = {geometry.motor_length_mm:g} mm",
        ha="center", va="top", color=style.text_color, fontsize=style.font_size - 1,
    )
    ax.text(
        FRONT_FOOT_X / 2 + FOOT_TOP_WIDTH / 2, label_y - 32,
        f"D = {geometry.coupling_distance_mm:g} mm",
        ha="center", va="top", color=style.text_color, fontsize=style.font_size - 1,
    )


def render_schematic(
    ax,
    geometry: Geometry,
    correction: Correction,
    result: SimulationResult,
    style: Optional[RenderStyle] = None,
):
    """
    Draw the side view of the machine train onto an existing Axes.

    The floor is at y = 0 and the fixed shaft centreline at
    y = style.shaft_height. The motor group is translated by the parallel
    offset times the amplification and rotated by atan(slope) about the
    coupling centre.
    """
    style = style or RenderStyle()
    half_w = style.width / 2

    ax.clear()
    ax.set_xlim(-half_w, half_w)
    ax.set_ylim(-style.floor_margin, style.height - style.floor_margin)
    ax.set_aspect("equal", adjustable="box")
    ax.axis("off")

    ax.axhline(0.0, color=style.floor_color, lw=style.floor_lw, zorder=0)
    ax.axhline(
        style.shaft_height, color=style.reference_color,
        lw=style.reference_lw, ls="--", alpha=0.5, zorder=5,
    )

    _draw_load(ax, style)
    _draw_motor(ax, correction, result, style)
    _draw_annotations(ax, geometry, correction, result, style)
    return ax


def render_figure(
    geometry: Geometry,
    correction: Correction,
    result: SimulationResult,
    style: Optional[RenderStyle] = None,
) -> Figure:
    style = style or RenderStyle()
    fig = Figure(figsize=(style.width / 100, style.height / 100))
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    render_schematic(ax, geometry, correction, result, style)
    return fig


def render_to_svg(
    geometry: Geometry,
    correction: Correction,
    result: SimulationResult,
    style: Optional[RenderStyle] = None,
) -> str:
    """Render the schematic and return it as an SVG document string."""
    fig = render_figure(geometry, correction, result, style)
    buf = io.StringIO()
    fig.savefig(buf, format="svg")
    return buf.getvalue()


def save_schematic(
    path: Union[str, Path],
    geometry: Geometry,
    correction: Correction,
    result: SimulationResult,
    style: Optional[RenderStyle] = None,
    dpi: int = 150,
) -> Path:
    """Write the schematic to disk; the format follows the file extension."""
    path = Path(path)
    fig = render_figure(geometry, correction, result, style)
    fig.savefig(path, dpi=dpi)
    return path
