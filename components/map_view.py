"""
Map visualization component using Pydeck (Deck.gl for Python).
Renders the coastal vulnerability choropleth for the selected view.

View system: exactly one thematic layer is shown at a time, either a ranked
indicator (physical / socio datasets, colored by the precomputed 1-5 rank)
or a composite index (combined indices dataset, colored by equal-interval
classes computed on first use and cached for the session).
"""
import logging
import math
import threading
from dataclasses import dataclass, field
from html import escape
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import numpy as np
import pydeck as pdk
import streamlit as st

from components.legend import Legend, build_legend
from utils.breakpoint_cache import BreakpointCache
from utils.classification import DEFAULT_CLASS, BreakpointSet, classify_equal, format_value, to_number
from utils.color_schemes import (
    FILL_OPACITY,
    INDEX_STROKE,
    INDICATOR_STROKE,
    STROKE_WEIGHT,
    hex_to_rgba,
    ramp_color,
    rank_color,
)
from utils.field_config import (
    COUNTY_FIELD,
    DATASET_GROUPS,
    DEFAULT_INDEX,
    SEGMENT_ID_FIELD,
    IndexField,
    IndicatorField,
    get_index_field,
    get_indicator_field,
)
from utils.view_state import IndexView, IndicatorView, ViewState, resolve_view

logger = logging.getLogger(__name__)

# Kenya coast (Kwale - Lamu) default framing
DEFAULT_VIEW = {
    'latitude': -3.6,
    'longitude': 40.0,
    'zoom': 7,
}

# Zoom clamp for fitted views
MIN_ZOOM = 3.0
MAX_ZOOM = 16.0

# Extra margin around fitted bounds (fraction of the span on each side)
FIT_PADDING = 0.05
COUNTY_PADDING = 0.2

# CartoDB Positron - free basemap, no API key required
MAP_STYLE = "https://basemaps.cartocdn.com/gl/positron-gl-style/style.json"

Bounds = Tuple[float, float, float, float]  # (min_lng, min_lat, max_lng, max_lat)


# =============================================================================
# STYLE & POPUP RESOLVERS
# =============================================================================

def _display(value) -> str:
    if value is None or value == '':
        return '—'
    return escape(str(value))


def _popup_header(properties: dict) -> str:
    return (
        f"<strong>Segment {_display(properties.get(SEGMENT_ID_FIELD))}</strong><br>"
        f"County: {_display(properties.get(COUNTY_FIELD))}<br>"
    )


def style_indicator(descriptor: IndicatorField) -> Callable[[dict], dict]:
    """Style function for a ranked indicator: fill comes straight from the rank."""
    def style(feature: dict) -> dict:
        rank = (feature.get('properties') or {}).get(descriptor.rank)
        return {
            'color': INDICATOR_STROKE,
            'weight': STROKE_WEIGHT,
            'fill_opacity': FILL_OPACITY,
            'fill_color': rank_color(rank),
            'class_index': to_number(rank),
        }
    return style


def popup_indicator(descriptor: IndicatorField) -> Callable[[dict], str]:
    """Popup function for a ranked indicator."""
    def popup(feature: dict) -> str:
        properties = feature.get('properties') or {}
        return (
            _popup_header(properties)
            + f"{escape(descriptor.title)}: {format_value(properties.get(descriptor.value))}<br>"
            + f"Rank: {format_value(properties.get(descriptor.rank))}"
        )
    return popup


def style_index_equal(attribute: str, breaks: Optional[BreakpointSet]) -> Callable[[dict], dict]:
    """
    Style function for an equal-interval index.

    Without breakpoints (no usable values) every feature gets the
    middle class.
    """
    def style(feature: dict) -> dict:
        value = (feature.get('properties') or {}).get(attribute)
        class_index = classify_equal(value, breaks) if breaks else DEFAULT_CLASS
        return {
            'color': INDEX_STROKE,
            'weight': STROKE_WEIGHT,
            'fill_opacity': FILL_OPACITY,
            'fill_color': ramp_color(class_index),
            'class_index': class_index,
        }
    return style


def popup_index(attribute: str, title: str) -> Callable[[dict], str]:
    """Popup function for a composite index."""
    def popup(feature: dict) -> str:
        properties = feature.get('properties') or {}
        return _popup_header(properties) + f"{escape(title)}: {format_value(properties.get(attribute))}"
    return popup


# =============================================================================
# LAYER CONSTRUCTION
# =============================================================================

def build_styled_geojson(
    collection: Optional[dict],
    style_fn: Callable[[dict], dict],
    popup_fn: Callable[[dict], str]
) -> dict:
    """
    Prepare GeoJSON with embedded style and popup content for rendering.

    The source collection is left untouched; each output feature gets a
    copy of its properties plus the resolved colors and popup HTML.

    Args:
        collection: Source FeatureCollection
        style_fn: Feature -> style dict
        popup_fn: Feature -> popup HTML

    Returns:
        New FeatureCollection ready for a GeoJsonLayer
    """
    styled_features = []
    for feature in (collection or {}).get('features') or []:
        style = style_fn(feature)
        styled_features.append({
            'type': 'Feature',
            'geometry': feature.get('geometry'),
            'properties': {
                **(feature.get('properties') or {}),
                'fill_hex': style['fill_color'],
                'fill_color': hex_to_rgba(style['fill_color'], style['fill_opacity']),
                'line_color': hex_to_rgba(style['color']),
                'line_width': style['weight'],
                'class_index': style['class_index'],
                'popup_html': popup_fn(feature),
            }
        })

    return {
        'type': 'FeatureCollection',
        'features': styled_features
    }


def create_thematic_layer(group: str, geojson: dict) -> pdk.Layer:
    """
    Create a GeoJsonLayer for one dataset group.

    Args:
        group: Dataset group ('physical', 'socio' or 'indices')
        geojson: Output of build_styled_geojson

    Returns:
        Pydeck GeoJsonLayer
    """
    return pdk.Layer(
        "GeoJsonLayer",
        data=geojson,
        id=f"thematic_{group}",
        get_fill_color="properties.fill_color",
        get_line_color="properties.line_color",
        get_line_width="properties.line_width",
        line_width_units="pixels",
        pickable=True,
        stroked=True,
        filled=True,
        extruded=False,
        auto_highlight=True,
        highlight_color=[255, 255, 0, 100],
    )


def create_tooltip() -> dict:
    """Create tooltip showing the popup content of the hovered segment."""
    return {
        "html": '<div style="font-family:-apple-system,BlinkMacSystemFont,sans-serif;'
                'padding:8px;font-size:12px;line-height:1.5;">{popup_html}</div>',
        "style": {
            "backgroundColor": "white",
            "color": "#333",
            "borderRadius": "8px",
            "boxShadow": "0 2px 10px rgba(0,0,0,0.18)",
            "maxWidth": "300px"
        }
    }


# =============================================================================
# VIEWPORT FITTING
# =============================================================================

def _iter_positions(coordinates) -> Iterator:
    if not isinstance(coordinates, (list, tuple)) or not coordinates:
        return
    if isinstance(coordinates[0], (int, float)):
        yield coordinates[:2]
        return
    for part in coordinates:
        yield from _iter_positions(part)


def _iter_geometry_positions(geometry: Optional[dict]) -> Iterator:
    if not geometry:
        return
    if geometry.get('type') == 'GeometryCollection':
        for part in geometry.get('geometries') or []:
            yield from _iter_geometry_positions(part)
    else:
        yield from _iter_positions(geometry.get('coordinates'))


def compute_bounds(collection: Optional[dict]) -> Optional[Bounds]:
    """
    Bounding box of every coordinate in a collection.

    Returns:
        (min_lng, min_lat, max_lng, max_lat), or None when there is no
        finite coordinate to frame
    """
    positions = [
        position
        for feature in (collection or {}).get('features') or []
        for position in _iter_geometry_positions(feature.get('geometry'))
        if len(position) == 2
    ]
    if not positions:
        return None

    points = np.asarray(positions, dtype=float)
    points = points[np.isfinite(points).all(axis=1)]
    if len(points) == 0:
        return None

    min_lng, min_lat = points.min(axis=0)
    max_lng, max_lat = points.max(axis=0)
    return float(min_lng), float(min_lat), float(max_lng), float(max_lat)


def pad_bounds(bounds: Bounds, ratio: float) -> Bounds:
    """Grow bounds by a fraction of their span on every side."""
    min_lng, min_lat, max_lng, max_lat = bounds
    lng_pad = (max_lng - min_lng) * ratio
    lat_pad = (max_lat - min_lat) * ratio
    return min_lng - lng_pad, min_lat - lat_pad, max_lng + lng_pad, max_lat + lat_pad


def fit_view_state(bounds: Bounds, padding: float = FIT_PADDING) -> dict:
    """
    Calculate the view state (center + zoom) that frames the given bounds.

    Args:
        bounds: (min_lng, min_lat, max_lng, max_lat)
        padding: Extra margin around bounds (0.05 = 5% on each side)

    Returns:
        Dict with 'latitude', 'longitude', 'zoom' keys
    """
    min_lng, min_lat, max_lng, max_lat = pad_bounds(bounds, padding)

    lat_span = max_lat - min_lat
    lng_span = max_lng - min_lng

    # Single segment or very tight cluster
    if lat_span < 0.01:
        lat_span = 0.02
    if lng_span < 0.01:
        lng_span = 0.02

    # At zoom 0 the world is ~360 degrees wide; each level doubles resolution
    lat_zoom = math.log2(180 / lat_span) - 0.5
    lng_zoom = math.log2(360 / lng_span) - 0.5
    zoom = max(MIN_ZOOM, min(min(lat_zoom, lng_zoom), MAX_ZOOM))

    return {
        'latitude': (min_lat + max_lat) / 2,
        'longitude': (min_lng + max_lng) / 2,
        'zoom': zoom
    }


# =============================================================================
# RENDER ORCHESTRATION
# =============================================================================

@dataclass
class RenderedLayer:
    group: str
    view: ViewState
    geojson: dict
    layer: pdk.Layer = field(compare=False, repr=False)


class MapController:
    """
    Owns everything the map shows: active view, rendered layers, viewport
    and legend, plus the breakpoint cache.

    One controller per browser session. All mutators take the same lock so
    a render never interleaves with a view switch.
    """

    def __init__(self, datasets: Dict[str, dict], cache: Optional[BreakpointCache] = None):
        self.datasets = datasets
        self.cache = cache if cache is not None else BreakpointCache()
        self.view: Optional[ViewState] = None
        self.layers: Dict[str, Optional[RenderedLayer]] = {group: None for group in DATASET_GROUPS}
        self.view_state = DEFAULT_VIEW.copy()
        self.legend: Optional[Legend] = None
        self._lock = threading.RLock()

    def start(self) -> bool:
        """Show the default view (the Coastal Vulnerability Index)."""
        return self.show_index(DEFAULT_INDEX)

    def show_indicator(self, group: str, key: str) -> bool:
        """Switch to a ranked indicator. Unknown selections are ignored."""
        if get_indicator_field(group, key) is None:
            logger.warning(f"Ignoring unknown indicator selection: {group}/{key}")
            return False

        with self._lock:
            self.view = IndicatorView(group, key)
            self.render()
        return True

    def show_index(self, index_key: str) -> bool:
        """Switch to a composite index. Unknown selections are ignored."""
        if get_index_field(index_key) is None:
            logger.warning(f"Ignoring unknown index selection: {index_key}")
            return False

        with self._lock:
            self.view = IndexView(index_key)
            self.render()
        return True

    def _collection_for(self, view: ViewState) -> dict:
        return self.datasets.get(view.dataset_group) or {'type': 'FeatureCollection', 'features': []}

    def render(self) -> None:
        """
        Rebuild the map for the active view.

        Removes every thematic layer, makes sure index breakpoints are
        cached, adds the freshly styled layer, fits the viewport to it and
        rebuilds the legend.
        """
        with self._lock:
            for group in self.layers:
                self.layers[group] = None

            view = self.view
            descriptor = resolve_view(view)
            if descriptor is None:
                self.legend = None
                return

            collection = self._collection_for(view)

            if isinstance(descriptor, IndexField):
                breaks = self.cache.ensure(descriptor.value, collection)
                style_fn = style_index_equal(descriptor.value, breaks)
                popup_fn = popup_index(descriptor.value, descriptor.title)
            else:
                style_fn = style_indicator(descriptor)
                popup_fn = popup_indicator(descriptor)

            geojson = build_styled_geojson(collection, style_fn, popup_fn)
            group = view.dataset_group
            self.layers[group] = RenderedLayer(
                group=group,
                view=view,
                geojson=geojson,
                layer=create_thematic_layer(group, geojson),
            )

            self._fit(collection, FIT_PADDING)
            self.legend = build_legend(view, self.cache)

    def zoom_to_county(self, name: str) -> bool:
        """
        Fit the viewport to one county's segments in the current dataset.

        Returns:
            True if the viewport moved, False if nothing matched
        """
        with self._lock:
            if self.view is None:
                return False

            features = self._collection_for(self.view).get('features') or []
            subset = {
                'type': 'FeatureCollection',
                'features': [f for f in features if (f.get('properties') or {}).get(COUNTY_FIELD) == name],
            }
            return self._fit(subset, COUNTY_PADDING)

    def _fit(self, collection: dict, padding: float) -> bool:
        bounds = compute_bounds(collection)
        if bounds is None:
            logger.debug("No valid bounds to fit, keeping current viewport")
            return False

        self.view_state = fit_view_state(bounds, padding)
        return True

    def visible_layers(self) -> List[RenderedLayer]:
        return [layer for layer in self.layers.values() if layer is not None]

    def to_deck(self) -> pdk.Deck:
        """Assemble the pydeck Deck for the current map state."""
        with self._lock:
            view_state = pdk.ViewState(
                latitude=self.view_state['latitude'],
                longitude=self.view_state['longitude'],
                zoom=self.view_state['zoom'],
                pitch=0,
                bearing=0
            )

            return pdk.Deck(
                layers=[rendered.layer for rendered in self.visible_layers()],
                initial_view_state=view_state,
                tooltip=create_tooltip(),
                map_style=MAP_STYLE,
            )


def render_map(controller: MapController, height: int = 650) -> None:
    """
    Render the interactive map for the controller's current state.

    Args:
        controller: Session map controller
        height: Map height in pixels
    """
    if not controller.visible_layers():
        st.warning("No thematic layer to display.")

    st.pydeck_chart(controller.to_deck(), use_container_width=True, height=height)
