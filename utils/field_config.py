"""
Static configuration for the coastal vulnerability story map.

Every selectable view is described by a field descriptor:
- IndicatorField: a physical or socio-economic indicator that already carries
  a precomputed 1-5 rank in the data
- IndexField: a composite index (CVI / PVI / SoVI) classified at runtime with
  equal-interval breakpoints

Adjust the attribute names here if the source shapefile exports change.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndicatorField:
    value: str
    rank: str
    title: str

    @property
    def attributes(self) -> tuple:
        return (self.value, self.rank)


@dataclass(frozen=True)
class IndexField:
    value: str
    title: str

    @property
    def attributes(self) -> tuple:
        return (self.value,)


# =============================================================================
# DATA SOURCES
# =============================================================================
DATA_DIR = Path(os.environ.get('CVI_DATA_DIR', Path(__file__).parent.parent / 'STORYMAP_SHP'))

# Dataset group -> GeoJSON export
DATA_FILES = {
    'physical': 'Physical_Indicators.json',
    'socio': 'Socio_Indicators.json',
    'indices': 'CVI.json',  # Combined CVI / PVI / SoVI
}
DATASET_GROUPS = tuple(DATA_FILES)
INDEX_GROUP = 'indices'

# Attributes shown at the top of every popup
SEGMENT_ID_FIELD = 'SegmentID'
COUNTY_FIELD = 'County'

# =============================================================================
# FIELD MAP
# =============================================================================
INDICATOR_FIELDS: Dict[str, Dict[str, IndicatorField]] = {
    'physical': {
        'SLR': IndicatorField('grid_cod_1', 'RANK_SLR', 'Sea-Level Rise (ranked)'),
        'SWH': IndicatorField('MEAN_SIG_W', 'RANK_SIGWA', 'Mean Significant Wave Height (ranked)'),
        'SLOPE': IndicatorField('grid_code1', 'RANK_SLOPE', 'Coastal Slope (ranked)'),
        'GEOM': IndicatorField('CLASS', 'RANK_GEOMO', 'Geomorphology (ranked)'),
        'SLC': IndicatorField('WLR', 'RANK_SLC', 'Shoreline Change (ranked)'),
        'BATHY': IndicatorField('grid_code', 'RANK_BATHY', 'Bathymetry (ranked)'),
        'TIDE': IndicatorField('TIDAL_RANG', 'RANK_TIDAL', 'Mean Tidal Range (ranked)'),
        'ELEV': IndicatorField('grid_code_', 'RANK_ELEVA', 'Coastal Elevation (ranked)'),
    },
    'socio': {
        'LULC': IndicatorField('LULC_Class', 'RANK_LULC', 'Land Use / Land Cover (ranked)'),
        'POP': IndicatorField('gridcode', 'RANK_POP', 'Population Density (ranked)'),
        'ROAD': IndicatorField('NEAR_DIST', 'RANK_ROADS', 'Distance from Roads (ranked)'),
    },
}

INDEX_FIELDS: Dict[str, IndexField] = {
    'CVI': IndexField('CVI', 'Coastal Vulnerability Index'),
    'PVI': IndexField('PVI_nrm', 'Physical Vulnerability Index'),
    'SoVI': IndexField('SVI_nrm', 'Social Vulnerability Index'),
}

DEFAULT_INDEX = 'CVI'

GROUP_TITLES = {
    'physical': 'Physical indicators',
    'socio': 'Socio-economic indicators',
}


def get_indicator_field(group: str, key: str) -> Optional[IndicatorField]:
    """Look up an indicator descriptor, None if the group or key is unknown."""
    return INDICATOR_FIELDS.get(group, {}).get(key)


def get_index_field(index_key: str) -> Optional[IndexField]:
    """Look up a composite index descriptor, None if unknown."""
    return INDEX_FIELDS.get(index_key)


def iter_descriptors():
    """Yield (descriptor id, dataset group, descriptor) for every configured view."""
    for group, fields in INDICATOR_FIELDS.items():
        for key, field in fields.items():
            yield f"{group}.{key}", group, field
    for key, field in INDEX_FIELDS.items():
        yield f"{INDEX_GROUP}.{key}", INDEX_GROUP, field


def validate_fields(available: Dict[str, Iterable[str]]) -> Dict[str, List[str]]:
    """
    Check the field map against the attributes actually present in the data.

    Run once at startup. Missing attributes don't stop the app: affected
    features simply render with the missing-value defaults.

    Args:
        available: Dataset group -> attribute names found in that dataset

    Returns:
        Descriptor id (e.g. 'physical.SLR') -> configured attributes not found
    """
    missing = {}
    for descriptor_id, group, field in iter_descriptors():
        present = set(available.get(group, ()))
        absent = [attr for attr in field.attributes if attr not in present]
        if absent:
            missing[descriptor_id] = absent
            logger.warning(f"{descriptor_id}: attributes not found in '{group}' data: {absent}")

    return missing
