"""Schematic rendering of the machine train (matplotlib)."""

from .style import RenderStyle
from .renderer import render_schematic, render_figure, render_to_svg, save_schematic

__all__ = [
    "RenderStyle",
    "render_schematic",
    "render_figure",
    "render_to_svg",
    "save_schematic",
]
