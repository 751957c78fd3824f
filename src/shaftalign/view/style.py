from __future__ import annotations
from dataclasses import dataclass

from ..constants import VISUAL_AMPLIFICATION


@dataclass(frozen=True)
class RenderStyle:
    # Offsets are drawn amplified; angles are drawn as-is
    amplification: float = VISUAL_AMPLIFICATION
    shim_scale: float = 4.0  # Drawing units per mm of shim

    width: float = 800.0
    height: float = 450.0
    floor_margin: float = 70.0   # Below the floor line
    shaft_height: float = 80.0   # Shaft centre above the floor

    motor_color: str = "#2563eb"
    motor_edge: str = "#172554"
    rib_color: str = "#60a5fa"
    motor_foot_color: str = "#1e3a8a"
    load_color: str = "#64748b"
    load_edge: str = "#1e293b"
    load_foot_color: str = "#475569"
    steel_color: str = "#cbd5e1"
    steel_edge: str = "#64748b"
    shim_color: str = "#fbbf24"
    shim_edge: str = "#d97706"
    cut_color: str = "#d97706"
    floor_color: str = "#94a3b8"
    reference_color: str = "#ef4444"
    ok_color: str = "#16a34a"
    text_color: str = "#334155"

    floor_lw: float = 4.0
    reference_lw: float = 1.0
    font_size: int = 9
