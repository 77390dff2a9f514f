"""
Data loading utilities for the coastal vulnerability story map.
Reads the GeoJSON exports of the indicator and index shapefiles.

Data Source: GeoJSON files in STORYMAP_SHP/ (override with CVI_DATA_DIR)

Available Datasets:
- physical: Physical indicators with precomputed RANK_* fields
- socio: Socio-economic indicators with precomputed RANK_* fields
- indices: One combined file carrying CVI, PVI_nrm and SVI_nrm
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .field_config import COUNTY_FIELD, DATA_DIR, DATA_FILES

# Configure logging
logger = logging.getLogger(__name__)


def load_feature_collection(path: Path) -> dict:
    """
    Load one GeoJSON FeatureCollection.

    Args:
        path: Path to the .json / .geojson file

    Returns:
        GeoJSON dict

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the document is not a FeatureCollection-like object
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"GeoJSON not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict) or not isinstance(data.get('features'), list):
        raise ValueError(f"{path.name} is not a GeoJSON FeatureCollection (no 'features' list)")

    return data


def load_datasets(data_dir: Optional[Path] = None) -> Dict[str, dict]:
    """
    Load the physical, socio and indices collections.

    All three are loaded before the first render; nothing is fetched lazily.

    Args:
        data_dir: Directory holding the exports (defaults to DATA_DIR)

    Returns:
        Dict mapping dataset group -> FeatureCollection
    """
    data_dir = Path(data_dir) if data_dir is not None else DATA_DIR

    datasets = {}
    for group, filename in DATA_FILES.items():
        datasets[group] = load_feature_collection(data_dir / filename)
        logger.info(f"Loaded {len(datasets[group]['features'])} features from '{filename}' ({group})")

    return datasets


def properties_frame(collection: Optional[dict]) -> pd.DataFrame:
    """Flatten feature properties into a DataFrame (one row per feature)."""
    features = (collection or {}).get('features') or []
    return pd.DataFrame([feature.get('properties') or {} for feature in features])


def attribute_names(collection: Optional[dict]) -> set:
    """Names of every property present on at least one feature."""
    return set(properties_frame(collection).columns)


def get_county_options(collection: Optional[dict]) -> List[str]:
    """Sorted unique county names for the zoom selector."""
    df = properties_frame(collection)
    if COUNTY_FIELD not in df.columns:
        return []

    counties = df[COUNTY_FIELD].dropna().astype(str).str.strip()
    return sorted(c for c in counties.unique() if c)
