"""
Tests for the machine-train schematic.
"""

import pytest
import matplotlib

matplotlib.use("Agg")

from matplotlib.colors import to_rgb
from matplotlib.figure import Figure

from shaftalign.calculator import evaluate
from shaftalign.io import Correction, Geometry, InitialMeasurements
from shaftalign.view import RenderStyle, render_figure, render_schematic, render_to_svg, save_schematic


@pytest.fixture
def state():
    geometry = Geometry()
    correction = Correction(rear_shim_mm=1.5, front_shim_mm=-0.5)
    readings = InitialMeasurements(initial_offset_mm=-0.2, initial_angle_mm_per_100=0.05)
    return geometry, correction, evaluate(geometry, readings, correction)


class TestRender:

    def test_render_onto_axes(self, state):
        fig = Figure()
        ax = fig.add_subplot()
        render_schematic(ax, *state)
        assert ax.patches
        texts = [t.get_text() for t in ax.texts]
        assert "Visualization x150" in texts
        assert any(t.startswith("Offset:") for t in texts)

    def test_shim_patches(self, state):
        geometry, correction, result = state
        fig = render_figure(geometry, correction, result)
        ax = fig.axes[0]
        style = RenderStyle()
        # Added shim is filled amber; removed shim is drawn as a dashed outline
        assert any(p.get_facecolor()[:3] == to_rgb(style.shim_color) for p in ax.patches)
        assert any(p.get_linestyle() == "--" for p in ax.patches)

    def test_no_shims_no_plates(self):
        geometry = Geometry()
        result = evaluate(geometry, InitialMeasurements(), Correction())
        fig = render_figure(geometry, Correction(), result)
        assert not any(p.get_linestyle() == "--" for p in fig.axes[0].patches)

    def test_svg(self, state):
        svg = render_to_svg(*state)
        assert "<svg" in svg

    def test_custom_amplification(self, state):
        fig = render_figure(*state, style=RenderStyle(amplification=50.0))
        assert "Visualization x50" in [t.get_text() for t in fig.axes[0].texts]

    def test_save(self, tmp_path, state):
        path = save_schematic(tmp_path / "schematic.png", *state)
        assert path.exists()
        assert path.stat().st_size > 0
