import math

import numpy as np
import pytest

from utils.classification import (
    DEFAULT_CLASS,
    classify_equal,
    compute_equal_breaks,
    extract_values,
    format_value,
    to_number,
)


def test_equal_breaks_example():
    breaks = compute_equal_breaks([1, 2, 3, 4, 5, 6, 7, 8, 9, 10])

    assert len(breaks) == 6
    assert list(breaks) == pytest.approx([1, 2.8, 4.6, 6.4, 8.2, 10])


@pytest.mark.parametrize(
    'values',
    [
        [0.0, 1.0],
        [3, -7, 12.5, 0.25],
        [0.112, 0.87, 0.5, 0.33, 0.61],
        list(np.linspace(-50, 250, 37)),
    ],
)
def test_equal_breaks_span_min_to_max_in_equal_steps(values):
    breaks = compute_equal_breaks(values)

    assert breaks[0] == min(values)
    assert breaks[5] == max(values)
    widths = np.diff(breaks)
    assert list(widths) == pytest.approx([widths[0]] * 5)


def test_equal_breaks_degenerate_input():
    assert compute_equal_breaks([2.5, 2.5, 2.5]) == (2.5,) * 6


def test_equal_breaks_empty_input_returns_none():
    assert compute_equal_breaks([]) is None
    assert compute_equal_breaks(np.array([])) is None


def test_classify_example_boundaries():
    breaks = compute_equal_breaks(range(1, 11))

    assert classify_equal(2.8, breaks) == 1
    assert classify_equal(2.9, breaks) == 2
    assert classify_equal(10, breaks) == 5
    assert classify_equal(breaks[1], breaks) == 1
    assert classify_equal(breaks[5], breaks) == 5


def test_classify_out_of_range_values():
    breaks = (0.0, 1.0, 2.0, 3.0, 4.0, 5.0)

    assert classify_equal(-100, breaks) == 1
    assert classify_equal(4.0001, breaks) == 5
    assert classify_equal(1e9, breaks) == 5


@pytest.mark.parametrize('value', [None, float('nan'), 'abc', '', True])
def test_classify_missing_values_default_to_middle_class(value):
    assert classify_equal(value, (0, 1, 2, 3, 4, 5)) == DEFAULT_CLASS == 3


def test_classify_numeric_strings():
    assert classify_equal('4.5', (0, 1, 2, 3, 4, 5)) == 5


def test_classify_is_monotonic_and_bounded():
    breaks = compute_equal_breaks([0.13, 0.98, 0.41, 0.77])

    classes = [classify_equal(v, breaks) for v in np.linspace(-1, 2, 301)]

    assert all(1 <= c <= 5 for c in classes)
    assert classes == sorted(classes)


def test_classify_degenerate_breaks():
    breaks = compute_equal_breaks([7, 7, 7])

    assert classify_equal(7, breaks) == 1
    assert classify_equal(8, breaks) == 5


def test_to_number():
    assert to_number(3) == 3.0
    assert to_number(' 2.5 ') == 2.5
    assert to_number(None) is None
    assert to_number('') is None
    assert to_number('Sandy beach') is None
    assert to_number(float('nan')) is None
    assert to_number(False) is None


def test_extract_values_drops_unusable_entries():
    geojson = {
        'type': 'FeatureCollection',
        'features': [
            {'properties': {'CVI': 1.5}},
            {'properties': {'CVI': '2.5'}},
            {'properties': {'CVI': None}},
            {'properties': {'CVI': 'n/a'}},
            {'properties': {'CVI': float('inf')}},
            {'properties': {}},
            {'properties': None},
        ],
    }

    assert list(extract_values(geojson, 'CVI')) == [1.5, 2.5]


def test_extract_values_handles_missing_collection():
    assert extract_values(None, 'CVI').size == 0
    assert extract_values({'features': []}, 'CVI').size == 0


def test_format_value():
    assert format_value(3.14159) == '3.14'
    assert format_value('7') == '7.00'
    assert format_value(None) == '—'
    assert format_value('') == '—'
    assert format_value('Sandy beach') == '—'
    assert format_value(math.nan) == '—'
