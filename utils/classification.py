"""
Equal-interval classification for the composite vulnerability indices.

Pulls a numeric attribute out of a GeoJSON FeatureCollection, splits the
observed range into five equal-width classes and maps single values onto
those classes.

Breakpoint sets are plain 6-tuples [b0..b5] describing the classes
(b0,b1], (b1,b2], ... (b4,b5], with b0 the minimum and b5 the maximum.
"""
import math
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

N_CLASSES = 5
DEFAULT_CLASS = 3  # Missing or non-numeric values land in the middle class

BreakpointSet = Tuple[float, ...]


def to_number(value) -> Optional[float]:
    """Convert a raw attribute value to float, or None if it is not numeric."""
    if value is None or isinstance(value, bool):
        return None

    try:
        number = float(value)
    except (TypeError, ValueError):
        return None

    if math.isnan(number):
        return None
    return number


def extract_values(collection: Optional[dict], attribute: str) -> np.ndarray:
    """
    Extract one numeric attribute from every feature of a collection.

    Missing, non-numeric and non-finite values are dropped.

    Args:
        collection: GeoJSON FeatureCollection dict
        attribute: Property name to read

    Returns:
        1-D float array of usable values (possibly empty)
    """
    features = (collection or {}).get('features') or []

    numbers = []
    for feature in features:
        properties = feature.get('properties') or {}
        number = to_number(properties.get(attribute))
        if number is not None:
            numbers.append(number)

    values = np.asarray(numbers, dtype=float)
    return values[np.isfinite(values)]


def compute_equal_breaks(values: Iterable[float], n_classes: int = N_CLASSES) -> Optional[BreakpointSet]:
    """
    Compute equal-interval class boundaries.

    Each class spans the same slice of the value range regardless of how
    many values fall inside it. The last boundary is the exact maximum.

    Args:
        values: Numeric values, already filtered of missing entries
        n_classes: Number of classes (5 for every view in this app)

    Returns:
        Tuple of n_classes + 1 boundaries, or None when values is empty
    """
    values = np.asarray(list(values), dtype=float)
    if values.size == 0:
        return None

    low = float(values.min())
    high = float(values.max())
    step = (high - low) / n_classes

    return tuple([low + i * step for i in range(n_classes)] + [high])


def classify_equal(value, breaks: Sequence[float]) -> int:
    """
    Return the class index (1..5) for a value given breaks [b0..b5].

    Upper bounds are inclusive, so a value sitting exactly on a boundary
    belongs to the lower class. Anything above b4 falls in class 5.
    """
    number = to_number(value)
    if number is None:
        return DEFAULT_CLASS

    for class_index in range(1, N_CLASSES):
        if number <= breaks[class_index]:
            return class_index
    return N_CLASSES


def format_value(value) -> str:
    """Two-decimal display text for a numeric value, an em-dash otherwise."""
    number = to_number(value)
    if number is None:
        return '—'
    return f"{number:.2f}"
