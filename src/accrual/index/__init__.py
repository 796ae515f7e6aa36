"""Rate index date mapping."""

from accrual.index.fx_index import (
    FxIndexDateMapper,
    available_fx_indices,
    get_fx_index,
    register_fx_index,
)

__all__ = [
    "FxIndexDateMapper",
    "available_fx_indices",
    "get_fx_index",
    "register_fx_index",
]
