"""Core package for blockmodel.

Re-exports the container, contracts and strategies so callers can do:
    from blockmodel.core import BlockModel, BlockIndex, GridBlock, Predecessors
"""

from __future__ import annotations

from .contracts.block import (
    BlockCoordinates,
    BlockIndex,
    BlockLike,
    BlockSize,
    GridBlock,
)
from .dependence import (
    Adjacency,
    Dependence,
    DependenceStrategy,
    Predecessors,
    Successors,
)
from .errors import (
    BlockIndexOutOfRangeError,
    BlockLoadError,
    BlockModelError,
    EmptyModelError,
    InconsistentBlockSizeError,
    MisalignedCoordinateError,
    UnindexedBlockError,
)
from .model import BlockCell, BlockModel

__all__ = [
    "Adjacency",
    "BlockCell",
    "BlockCoordinates",
    "BlockIndex",
    "BlockIndexOutOfRangeError",
    "BlockLike",
    "BlockLoadError",
    "BlockModel",
    "BlockModelError",
    "BlockSize",
    "Dependence",
    "DependenceStrategy",
    "EmptyModelError",
    "GridBlock",
    "InconsistentBlockSizeError",
    "MisalignedCoordinateError",
    "Predecessors",
    "Successors",
    "UnindexedBlockError",
]
