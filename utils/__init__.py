"""
Utilities for the Coastal Vulnerability Story Map.

Modules:
- classification: value extraction, equal-interval breaks, classifier
- breakpoint_cache: per-session memoized breakpoints
- color_schemes: 5-step sequential ramp and stroke presets
- field_config: indicator / index field map and data locations
- data_loader: GeoJSON loading
- view_state: active view types
"""

from .classification import (
    N_CLASSES,
    DEFAULT_CLASS,
    to_number,
    extract_values,
    compute_equal_breaks,
    classify_equal,
    format_value,
)

from .breakpoint_cache import BreakpointCache

from .view_state import (
    IndicatorView,
    IndexView,
    resolve_view,
)

__all__ = [
    # Classification
    'N_CLASSES',
    'DEFAULT_CLASS',
    'to_number',
    'extract_values',
    'compute_equal_breaks',
    'classify_equal',
    'format_value',
    # Cache
    'BreakpointCache',
    # Views
    'IndicatorView',
    'IndexView',
    'resolve_view',
]
