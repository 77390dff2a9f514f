"""
Lazy, per-session store of equal-interval breakpoints keyed by attribute name.

Source datasets never change while the app is running, so an entry is
computed on first use and then kept for the rest of the session.
"""
import logging
from typing import Dict, Optional

from .classification import BreakpointSet, compute_equal_breaks, extract_values

logger = logging.getLogger(__name__)


class BreakpointCache:
    """Memoized breakpoint sets, one per index attribute."""

    def __init__(self):
        self._breaks: Dict[str, BreakpointSet] = {}

    def __contains__(self, attribute: str) -> bool:
        return attribute in self._breaks

    def __len__(self) -> int:
        return len(self._breaks)

    def get(self, attribute: str) -> Optional[BreakpointSet]:
        return self._breaks.get(attribute)

    def ensure(self, attribute: str, collection: Optional[dict]) -> Optional[BreakpointSet]:
        """
        Return the cached breakpoints for an attribute, computing them on a miss.

        Only a usable result is stored. An attribute with no numeric values
        stays uncached and yields None, so the legend can show its
        placeholder.

        Args:
            attribute: Property name holding the raw index value
            collection: FeatureCollection to read values from on a miss

        Returns:
            Breakpoint set or None
        """
        if attribute in self._breaks:
            return self._breaks[attribute]

        values = extract_values(collection, attribute)
        breaks = compute_equal_breaks(values)
        logger.debug(f"Computed breakpoints for '{attribute}' from {len(values)} values: {breaks}")

        if breaks is not None:
            self._breaks[attribute] = breaks
        return breaks
