"""
Coastal Vulnerability Story Map
Version: 2025-10-v3-equal-interval

An interactive choropleth of coastal vulnerability along the Kenya coast:
- Physical and socio-economic indicators shown by their precomputed 1-5 rank
- Composite indices (CVI, PVI, SoVI) shown in five equal-interval classes
- Per-segment popups and a legend matching the selected view

Built with Streamlit + Pydeck.
"""
import logging
import sys
from pathlib import Path

import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from utils.data_loader import attribute_names, get_county_options, load_datasets
from utils.field_config import validate_fields
from components.legend import render_legend
from components.map_view import MapController, render_map
from components.view_selector import apply_selection, render_view_selector

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


# Page configuration
st.set_page_config(
    page_title="Coastal Vulnerability Story Map",
    page_icon="🌊",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Compact, map-first layout
st.markdown("""
<style>
    .block-container {
        padding-top: 0.5rem !important;
        padding-bottom: 0.5rem !important;
        padding-left: 1rem !important;
        padding-right: 1rem !important;
        max-width: 100% !important;
    }

    [data-testid="stPydeckChart"] {
        margin-left: -0.5rem !important;
        margin-right: -0.5rem !important;
        width: calc(100% + 1rem) !important;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


@st.cache_data(show_spinner=False)
def load_data():
    """Load the three GeoJSON datasets once and check the field map against them."""
    try:
        datasets = load_datasets()
    except (FileNotFoundError, ValueError) as e:
        st.error(f"Failed to load data: {e}")
        st.stop()

    validate_fields({group: attribute_names(collection) for group, collection in datasets.items()})
    return datasets


def get_controller(datasets) -> MapController:
    """One map controller (and breakpoint cache) per browser session."""
    if 'map_controller' not in st.session_state:
        controller = MapController(datasets)
        controller.start()
        st.session_state.map_controller = controller
    return st.session_state.map_controller


def main():
    """Main application entry point."""
    with st.spinner("Loading coastal segments..."):
        datasets = load_data()

    controller = get_controller(datasets)

    counties = sorted({c for collection in datasets.values() for c in get_county_options(collection)})
    selection = render_view_selector(counties)
    apply_selection(controller, selection)

    st.markdown(
        '<div style="display:flex;justify-content:space-between;align-items:center;'
        'padding:0.5rem 0;border-bottom:1px solid #eee;margin-bottom:0.5rem;">'
        '<h4 style="margin:0;color:#333;">🌊 Coastal Vulnerability Story Map</h4>'
        f'<span style="color:#666;font-size:13px;">{controller.legend.title if controller.legend else ""}</span>'
        '</div>',
        unsafe_allow_html=True
    )

    render_map(controller)
    render_legend(controller.legend)


if __name__ == "__main__":
    main()
