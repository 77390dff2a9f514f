"""
Legend component for the coastal vulnerability map.

Indicator views list the five fixed rank categories. Index views list the
equal-interval ranges currently cached for that index, or a placeholder
while no breakpoints exist.
"""
from dataclasses import dataclass, field
from html import escape
from typing import List, Optional

import streamlit as st

from utils.breakpoint_cache import BreakpointCache
from utils.classification import N_CLASSES, format_value
from utils.color_schemes import RANK_LABELS, ramp_color, rank_color
from utils.view_state import IndicatorView, ViewState, resolve_view

PENDING_BREAKS_NOTE = 'Equal-interval classes will appear once data loads.'
HIGHEST_CLASS_NOTE = '(highest vulnerability)'


@dataclass(frozen=True)
class LegendItem:
    color: str
    label: str


@dataclass(frozen=True)
class Legend:
    title: str
    items: List[LegendItem] = field(default_factory=list)
    note: Optional[str] = None


def build_legend(view: Optional[ViewState], cache: BreakpointCache) -> Optional[Legend]:
    """
    Build the legend for the active view.

    Args:
        view: Active view (None before the first render)
        cache: Breakpoint cache holding index ranges

    Returns:
        Legend, or None when the view is not configured
    """
    descriptor = resolve_view(view)
    if descriptor is None:
        return None

    if isinstance(view, IndicatorView):
        items = [
            LegendItem(rank_color(rank), f"Rank {rank} – {RANK_LABELS[rank]}")
            for rank in range(1, N_CLASSES + 1)
        ]
        return Legend(title=descriptor.title, items=items)

    breaks = cache.get(descriptor.value)
    if breaks is None:
        return Legend(title=descriptor.title, note=PENDING_BREAKS_NOTE)

    items = []
    for i in range(1, N_CLASSES + 1):
        label = f"{format_value(breaks[i - 1])} – {format_value(breaks[i])}"
        if i == N_CLASSES:
            label = f"{label} {HIGHEST_CLASS_NOTE}"
        items.append(LegendItem(ramp_color(i), label))

    return Legend(title=descriptor.title, items=items)


def legend_to_html(legend: Legend) -> str:
    """Build HTML for a legend box (swatch + label rows)."""
    rows = [f'<div style="font-weight:600;font-size:13px;margin-bottom:6px;">{escape(legend.title)}</div>']

    for item in legend.items:
        rows.append(
            '<div style="display:flex;align-items:center;gap:6px;font-size:12px;margin-bottom:3px;">'
            f'<span style="width:18px;height:12px;background:{item.color};border:1px solid #999;"></span>'
            f'{escape(item.label)}</div>'
        )

    if legend.note:
        rows.append(f'<div style="font-size:12px;color:#666;">{escape(legend.note)}</div>')

    return (
        '<div style="background:rgba(255,255,255,0.95);padding:8px 12px;border-radius:6px;'
        'box-shadow:0 1px 4px rgba(0,0,0,0.15);display:inline-block;">'
        + ''.join(rows)
        + '</div>'
    )


def render_legend(legend: Optional[Legend]) -> None:
    """Render the legend beneath the map."""
    if legend is None:
        return
    st.markdown(legend_to_html(legend), unsafe_allow_html=True)
