"""
The currently selected map view.

Exactly one view is active at a time: either a single ranked indicator from
the physical / socio datasets, or a single composite index from the combined
indices dataset.
"""
from dataclasses import dataclass
from typing import Optional, Union

from .field_config import (
    INDEX_GROUP,
    IndexField,
    IndicatorField,
    get_index_field,
    get_indicator_field,
)


@dataclass(frozen=True)
class IndicatorView:
    group: str
    key: str

    kind = 'indicator'

    @property
    def dataset_group(self) -> str:
        return self.group


@dataclass(frozen=True)
class IndexView:
    index_key: str

    kind = 'index'

    @property
    def dataset_group(self) -> str:
        return INDEX_GROUP


ViewState = Union[IndicatorView, IndexView]


def resolve_view(view: Optional[ViewState]) -> Optional[Union[IndicatorField, IndexField]]:
    """Field descriptor behind a view, None if the view is not configured."""
    if isinstance(view, IndicatorView):
        return get_indicator_field(view.group, view.key)
    if isinstance(view, IndexView):
        return get_index_field(view.index_key)
    return None
