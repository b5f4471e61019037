"""
Dependence strategies: which blocks relate to a given block.

All strategies share one horizontal footprint: the 3x3 neighborhood
``i-1..i+1`` by ``j-1..j+1`` around the center, clamped to the grid so it
never underflows at 0 or runs past the horizontal extent. Candidates are
produced in row-major order (``i`` outer, ``j`` inner). The strategies differ
only in the layer they target and in whether they filter by occupancy:

- :class:`Predecessors`: layer ``k + 1`` (below), unfiltered.
- :class:`Successors`: layer ``k - 1`` (above), unfiltered.
- :class:`Adjacency`: layer ``k``, occupied cells only, center included.

New footprint rules plug in by subclassing :class:`DependenceStrategy`; the
container never needs to change.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from .contracts.block import BlockIndex

if TYPE_CHECKING:
    from .model import BlockModel


def footprint(model: BlockModel[Any], index: BlockIndex, k: int) -> list[BlockIndex]:
    """Return the clamped 3x3 footprint around ``index`` on layer ``k``."""
    nx, ny, _ = model.shape

    i_low = max(index.i - 1, 0)
    i_high = min(index.i + 2, nx)
    j_low = max(index.j - 1, 0)
    j_high = min(index.j + 2, ny)

    return [
        BlockIndex(i=i, j=j, k=k) for i in range(i_low, i_high) for j in range(j_low, j_high)
    ]


class DependenceStrategy(ABC):
    """A pure function ``(model, index) -> ordered list of related indices``."""

    name: str = "abstract"

    @abstractmethod
    def inds(self, model: BlockModel[Any], index: BlockIndex) -> list[BlockIndex]:
        """Return the indices related to ``index`` under this rule."""

    def __call__(self, model: BlockModel[Any], index: BlockIndex) -> list[BlockIndex]:
        return self.inds(model, index)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))


class Predecessors(DependenceStrategy):
    """Footprint on the layer below (``k + 1``), occupied or not."""

    name = "preds"

    def inds(self, model: BlockModel[Any], index: BlockIndex) -> list[BlockIndex]:
        k = index.k + 1
        if k >= model.shape[2]:
            return []
        return footprint(model, index, k)


class Successors(DependenceStrategy):
    """Footprint on the layer above (``k - 1``), occupied or not."""

    name = "succs"

    def inds(self, model: BlockModel[Any], index: BlockIndex) -> list[BlockIndex]:
        if index.k == 0:
            return []
        return footprint(model, index, index.k - 1)


class Adjacency(DependenceStrategy):
    """Occupied footprint cells on the same layer, the center included."""

    name = "adj"

    def inds(self, model: BlockModel[Any], index: BlockIndex) -> list[BlockIndex]:
        return [cand for cand in footprint(model, index, index.k) if model.block(cand) is not None]


class Dependence(StrEnum):
    """Name-based selection of the built-in strategies (CLI, config)."""

    PREDS = "preds"
    SUCCS = "succs"
    ADJ = "adj"

    def strategy(self) -> DependenceStrategy:
        return _BY_NAME[self.value]()


_BY_NAME: dict[str, type[DependenceStrategy]] = {
    Predecessors.name: Predecessors,
    Successors.name: Successors,
    Adjacency.name: Adjacency,
}


__all__ = [
    "Adjacency",
    "Dependence",
    "DependenceStrategy",
    "Predecessors",
    "Successors",
    "footprint",
]
