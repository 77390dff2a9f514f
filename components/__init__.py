"""
Streamlit components for the Coastal Vulnerability Story Map.

Modules:
- map_view: style/popup resolvers, pydeck layers, MapController
- legend: legend model and HTML rendering
- view_selector: sidebar view triggers
"""
