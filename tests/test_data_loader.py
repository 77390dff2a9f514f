import json

import pytest

from utils.data_loader import (
    attribute_names,
    get_county_options,
    load_datasets,
    load_feature_collection,
    properties_frame,
)
from utils.field_config import DATA_FILES


def write_json(path, data):
    path.write_text(json.dumps(data), encoding='utf-8')
    return path


def test_load_datasets_reads_all_groups(tmp_path, datasets):
    for group, filename in DATA_FILES.items():
        write_json(tmp_path / filename, datasets[group])

    loaded = load_datasets(tmp_path)

    assert set(loaded) == {'physical', 'socio', 'indices'}
    assert len(loaded['indices']['features']) == 10
    assert loaded['physical'] == datasets['physical']


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_datasets(tmp_path)


def test_non_collection_raises(tmp_path):
    path = write_json(tmp_path / 'CVI.json', {'type': 'Feature', 'geometry': None})

    with pytest.raises(ValueError):
        load_feature_collection(path)


def test_attribute_names(indices_geojson):
    names = attribute_names(indices_geojson)

    assert {'SegmentID', 'County', 'CVI', 'PVI_nrm', 'SVI_nrm'} <= names
    assert attribute_names({'features': []}) == set()


def test_properties_frame(physical_geojson):
    df = properties_frame(physical_geojson)

    assert len(df) == 3
    assert list(df['RANK_SLR']) == [4, 1, '5']


def test_county_options(indices_geojson):
    assert get_county_options(indices_geojson) == ['Kwale', 'Mombasa']
    assert get_county_options({'features': [{'properties': {'CVI': 1}}]}) == []
