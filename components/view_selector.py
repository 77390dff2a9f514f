"""
Sidebar view selector for the coastal vulnerability story map.

Replaces the story sections of the original page: each selection here is a
view trigger, either (group, key) for a ranked indicator or (index_key) for a
composite index, plus an optional county to zoom to.

SIDEBAR STRUCTURE:
1. View type (indices / indicators)
2. Index picker, or dataset group + indicator picker
3. County zoom
"""
from typing import Dict, List, Optional

import streamlit as st

from utils.field_config import DEFAULT_INDEX, GROUP_TITLES, INDEX_FIELDS, INDICATOR_FIELDS

MODE_INDEX = "🌊 Composite Indices"
MODE_INDICATOR = "📍 Ranked Indicators"
ALL_COUNTIES = "All counties"


def render_view_selector(county_options: Optional[List[str]] = None) -> Dict:
    """
    Render the sidebar controls and return the current selection.

    Args:
        county_options: County names offered for zooming

    Returns:
        Dict with 'mode', 'group', 'key', 'index_key' and 'county' keys
    """
    st.sidebar.markdown("### 🗺️ Map View")

    mode = st.sidebar.radio(
        "View type",
        options=[MODE_INDEX, MODE_INDICATOR],
        index=0,
        key="view_mode",
        label_visibility="collapsed"
    )

    selection = {'mode': 'index', 'group': None, 'key': None, 'index_key': None, 'county': None}

    if mode == MODE_INDEX:
        index_keys = list(INDEX_FIELDS)
        selection['index_key'] = st.sidebar.radio(
            "Index",
            options=index_keys,
            index=index_keys.index(DEFAULT_INDEX),
            format_func=lambda k: INDEX_FIELDS[k].title,
            key="index_key",
            help="Composite indices are shown in five equal-interval classes"
        )
    else:
        selection['mode'] = 'indicator'
        selection['group'] = st.sidebar.selectbox(
            "Dataset",
            options=list(INDICATOR_FIELDS),
            format_func=lambda g: GROUP_TITLES.get(g, g),
            key="indicator_group"
        )
        fields = INDICATOR_FIELDS[selection['group']]
        selection['key'] = st.sidebar.radio(
            "Indicator",
            options=list(fields),
            format_func=lambda k: fields[k].title,
            key=f"indicator_key_{selection['group']}",
            help="Indicators use the 1-5 vulnerability rank stored with each segment"
        )

    if county_options:
        st.sidebar.divider()
        county = st.sidebar.selectbox(
            "🔍 Zoom to county",
            options=[ALL_COUNTIES] + list(county_options),
            index=0,
            key="county"
        )
        if county != ALL_COUNTIES:
            selection['county'] = county

    return selection


def apply_selection(controller, selection: Dict) -> bool:
    """
    Forward a sidebar selection to the map controller.

    Returns:
        True if the selection named a configured view
    """
    if selection.get('mode') == 'indicator':
        accepted = controller.show_indicator(selection.get('group'), selection.get('key'))
    else:
        accepted = controller.show_index(selection.get('index_key'))

    if selection.get('county'):
        controller.zoom_to_county(selection['county'])

    return accepted
