"""
ShaftAlign - Vertical-plane shaft alignment calculator.

Predicts the offset and angle at a coupling after shimming the feet of a
movable machine, and solves for the shims that bring it into line.

Example:
    >>> from shaftalign import Geometry, InitialMeasurements, solve_required_shims
    >>>
    >>> geometry = Geometry(motor_length_mm=500, coupling_distance_mm=200)
    >>> readings = InitialMeasurements(initial_offset_mm=0, initial_angle_mm_per_100=10)
    >>> solve_required_shims(geometry, readings)
    RequiredShims(front_shim_mm=20.0, rear_shim_mm=70.0)

Note: All imports are lazy-loaded for fast startup. The calculator can be
imported without triggering rendering (matplotlib) or advice (openai) imports.
"""

__version__ = "1.0.0"

# Define which names come from which submodule
# All imports are lazy to minimize startup time

_ENUMS = {"Foot", "ShimAction", "AlignmentStatus", "OffsetDirection", "StepDirection"}

_CALCULATOR = {
    "DegenerateGeometryError",
    "evaluate",
    "solve_required_shims",
    "is_in_tolerance",
    "needs_attention",
    "alignment_status",
    "offset_direction",
    "validate_alignment",
    "Severity",
    "ValidationResult",
    "AlignmentSession",
    "to_json",
    "to_markdown",
    "to_summary",
}

_IO = {
    "load_session_json",
    "save_session_json",
    "Geometry",
    "InitialMeasurements",
    "Correction",
    "SimulationResult",
    "RequiredShims",
    "AlignmentDocument",
}

_VIEW = {
    "RenderStyle",
    "render_schematic",
    "render_to_svg",
    "save_schematic",
}

_ADVICE = {
    "get_alignment_advice",
    "OpenAIAdvisor",
    "AdviceError",
}

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    global _modules

    if name in _ENUMS:
        if "enums" not in _modules:
            from . import enums
            _modules["enums"] = enums
        return getattr(_modules["enums"], name)

    if name in _CALCULATOR:
        if "calculator" not in _modules:
            from . import calculator
            _modules["calculator"] = calculator
        return getattr(_modules["calculator"], name)

    if name in _IO:
        if "io" not in _modules:
            from . import io
            _modules["io"] = io
        return getattr(_modules["io"], name)

    if name in _VIEW:
        if "view" not in _modules:
            from . import view
            _modules["view"] = view
        return getattr(_modules["view"], name)

    if name in _ADVICE:
        if "advice" not in _modules:
            from . import advice
            _modules["advice"] = advice
        return getattr(_modules["advice"], name)

    raise AttributeError(f"module 'shaftalign' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",

    # Enums (lazy loaded from enums)
    "Foot",
    "ShimAction",
    "AlignmentStatus",
    "OffsetDirection",
    "StepDirection",

    # Calculator (lazy loaded from calculator)
    "DegenerateGeometryError",
    "evaluate",
    "solve_required_shims",
    "is_in_tolerance",
    "needs_attention",
    "alignment_status",
    "offset_direction",
    "validate_alignment",
    "Severity",
    "ValidationResult",
    "AlignmentSession",
    "to_json",
    "to_markdown",
    "to_summary",

    # IO (lazy loaded from io)
    "load_session_json",
    "save_session_json",
    "Geometry",
    "InitialMeasurements",
    "Correction",
    "SimulationResult",
    "RequiredShims",
    "AlignmentDocument",

    # Rendering (lazy loaded from view)
    "RenderStyle",
    "render_schematic",
    "render_to_svg",
    "save_schematic",

    # Advice (lazy loaded from advice)
    "get_alignment_advice",
    "OpenAIAdvisor",
    "AdviceError",
]
