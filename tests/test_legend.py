import pytest

from components.legend import (
    HIGHEST_CLASS_NOTE,
    PENDING_BREAKS_NOTE,
    Legend,
    LegendItem,
    build_legend,
    legend_to_html,
)
from utils.breakpoint_cache import BreakpointCache
from utils.color_schemes import RAMP5
from utils.view_state import IndexView, IndicatorView


def test_indicator_legend_is_fixed_rank_list():
    legend = build_legend(IndicatorView('physical', 'SLR'), BreakpointCache())

    assert legend.title == 'Sea-Level Rise (ranked)'
    assert legend.note is None
    assert [item.label for item in legend.items] == [
        'Rank 1 – Very Low',
        'Rank 2 – Low',
        'Rank 3 – Moderate',
        'Rank 4 – High',
        'Rank 5 – Very High',
    ]
    assert [item.color for item in legend.items] == [RAMP5[i] for i in range(1, 6)]


def test_index_legend_lists_cached_ranges(indices_geojson):
    cache = BreakpointCache()
    cache.ensure('CVI', indices_geojson)

    legend = build_legend(IndexView('CVI'), cache)

    assert legend.title == 'Coastal Vulnerability Index'
    assert [item.label for item in legend.items] == [
        '1.00 – 2.80',
        '2.80 – 4.60',
        '4.60 – 6.40',
        '6.40 – 8.20',
        f'8.20 – 10.00 {HIGHEST_CLASS_NOTE}',
    ]
    assert legend.items[-1].color == RAMP5[5]


def test_index_legend_placeholder_without_breaks():
    legend = build_legend(IndexView('PVI'), BreakpointCache())

    assert legend.title == 'Physical Vulnerability Index'
    assert legend.items == []
    assert legend.note == PENDING_BREAKS_NOTE


@pytest.mark.parametrize('view', [None, IndexView('XYZ'), IndicatorView('socio', 'SLR')])
def test_unconfigured_view_has_no_legend(view):
    assert build_legend(view, BreakpointCache()) is None


def test_legend_html_escapes_text():
    legend = Legend(
        title='Land Use / Land Cover <ranked>',
        items=[LegendItem('#f7fbff', 'Rank 1 – Very Low')],
        note='pending & soon',
    )

    html = legend_to_html(legend)

    assert '&lt;ranked&gt;' in html
    assert 'background:#f7fbff' in html
    assert 'Rank 1 – Very Low' in html
    assert 'pending &amp; soon' in html
