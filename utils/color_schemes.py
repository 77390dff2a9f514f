"""
Color schemes for the coastal vulnerability map.

A single 5-step sequential blue ramp (light = low vulnerability, dark = high)
is shared by the ranked indicator views and the equal-interval index views,
so the same shade always means the same class.
"""
from typing import List

from .classification import to_number

# =============================================================================
# SEQUENTIAL RAMP (class 1 -> 5)
# =============================================================================
RAMP5 = {
    1: '#f7fbff',   # Near white
    2: '#cce5ff',   # Pale blue
    3: '#66b2ff',   # Mid blue
    4: '#1f78b4',   # Strong blue
    5: '#08306b',   # Navy
}

# Fixed meaning of the precomputed 1-5 indicator ranks
RANK_LABELS = {
    1: 'Very Low',
    2: 'Low',
    3: 'Moderate',
    4: 'High',
    5: 'Very High',
}

# =============================================================================
# STROKE / FILL PRESETS
# =============================================================================
INDICATOR_STROKE = '#444'
INDEX_STROKE = '#222'
STROKE_WEIGHT = 0.6
FILL_OPACITY = 0.75


def ramp_color(class_index) -> str:
    """Hex color for a class index. Anything outside 1-4 gets the darkest shade."""
    return RAMP5[class_index] if class_index in (1, 2, 3, 4) else RAMP5[5]


def rank_color(rank) -> str:
    """Hex color for a precomputed indicator rank (numeric strings are accepted)."""
    return ramp_color(to_number(rank))


def hex_to_rgba(hex_color: str, opacity: float = 1.0) -> List[int]:
    """
    Convert '#rgb' or '#rrggbb' into an RGBA list for pydeck.

    Args:
        hex_color: CSS hex color
        opacity: Alpha as a fraction (0.0-1.0)

    Returns:
        RGBA color list [R, G, B, A]
    """
    digits = hex_color.lstrip('#')
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)

    r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    return [r, g, b, int(round(opacity * 255))]
