import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


def make_segment(index, **properties):
    lng = 39.0 + index * 0.1
    lat = -4.0 + index * 0.1
    return {
        'type': 'Feature',
        'geometry': {
            'type': 'LineString',
            'coordinates': [[lng, lat], [lng + 0.05, lat + 0.05]],
        },
        'properties': {'SegmentID': index + 1, 'County': 'Kwale' if index % 2 == 0 else 'Mombasa', **properties},
    }


def collection(features):
    return {'type': 'FeatureCollection', 'features': list(features)}


@pytest.fixture
def indices_geojson():
    return collection(
        make_segment(i, CVI=i + 1, PVI_nrm=(i + 1) / 10, SVI_nrm='n/a')
        for i in range(10)
    )


@pytest.fixture
def physical_geojson():
    return collection([
        make_segment(0, grid_cod_1=0.1, RANK_SLR=4),
        make_segment(1, grid_cod_1=9.9, RANK_SLR=1),
        make_segment(2, grid_cod_1=None, RANK_SLR='5'),
    ])


@pytest.fixture
def socio_geojson():
    return collection([
        make_segment(0, gridcode=120, RANK_POP=2),
        make_segment(1, gridcode=5400, RANK_POP=5),
    ])


@pytest.fixture
def datasets(physical_geojson, socio_geojson, indices_geojson):
    return {
        'physical': physical_geojson,
        'socio': socio_geojson,
        'indices': indices_geojson,
    }
