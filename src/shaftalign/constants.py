"""
Engineering constants for shaft alignment calculations.

Shared by the calculator, io, view and advice modules. Must not import from
any of them.

This module centralizes all numerical constants used in the calculator,
validation and presentation modules. Each constant is documented with its
source (shop-floor alignment practice, instrument convention, or the
interactive shim controls).

MODIFICATION GUIDELINES:
- Tolerance values are consumer-side conventions; the core never reads them
- Add new constants here rather than hardcoding in functions
- Always include units in constant names (_MM, _MM_PER_100)

Constants are grouped by category:
- Coupling model: Nominal coupling used for gap readings
- Tolerances: In-tolerance thresholds for status display
- Shim handling: Interactive shim stepping limits
- Default geometry: Starting machine-train dimensions
- Display: Decimal places and schematic amplification
- Advice service: Language model request parameters
"""

from typing import Tuple

# =============================================================================
# Coupling Model
# =============================================================================

# Nominal coupling diameter for gap readings
# Angular readings are quoted in mm of gap change per 100 mm of diameter
COUPLING_DIAMETER_MM: float = 100.0

# Conversion between the mm/100mm reading convention and a raw slope (mm/mm)
ANGLE_READING_BASE_MM: float = 100.0

# Gap between coupling faces when perfectly aligned
BASELINE_GAP_MM: float = 3.0

# =============================================================================
# Tolerances
# =============================================================================

# Parallel offset tolerance at the coupling centre
# Common practice for 1500-3000 rpm machines
OFFSET_TOLERANCE_MM: float = 0.05

# Angular tolerance, in mm/100mm
ANGLE_TOLERANCE_MM_PER_100: float = 0.05

# =============================================================================
# Shim Handling
# =============================================================================

# Thinnest standard shim plate, used as the +/- button step
SHIM_STEP_MM: float = 0.05

# Interactive range; negative values simulate cutting the base or removing
# existing shims below the as-measured state
SHIM_MIN_MM: float = -10.0
SHIM_MAX_MM: float = 10.0
SHIM_RANGE_MM: Tuple[float, float] = (SHIM_MIN_MM, SHIM_MAX_MM)

# Stepped values are rounded to avoid float drift (0.05 + 0.05 + ...)
SHIM_DECIMALS: int = 2

# =============================================================================
# Default Geometry
# =============================================================================

DEFAULT_MOTOR_LENGTH_MM: float = 500.0       # Rear foot to front foot
DEFAULT_COUPLING_DISTANCE_MM: float = 200.0  # Front foot to coupling centre

# =============================================================================
# Display
# =============================================================================

OFFSET_DISPLAY_DECIMALS: int = 3
ANGLE_DISPLAY_DECIMALS: int = 3

# Schematic amplification: 1 mm of offset is drawn as 150 units
VISUAL_AMPLIFICATION: float = 150.0

# =============================================================================
# Advice Service
# =============================================================================

ADVICE_MODEL_DEFAULT: str = "gpt-4o-mini"
ADVICE_MODEL_ENV: str = "SHAFTALIGN_ADVICE_MODEL"
ADVICE_API_KEY_ENV: str = "OPENAI_API_KEY"
ADVICE_TEMPERATURE: float = 0.4
ADVICE_MAX_TOKENS: int = 300

# Shortcut questions offered next to the free-text query
ADVICE_QUICK_QUERIES: Tuple[str, ...] = (
    "How to remove angular misalignment?",
    "Calculate shim thickness for perfect alignment.",
)
