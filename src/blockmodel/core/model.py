"""
BlockModel: a dense 3D grid of optional block payloads.

The container owns a numpy object array of shape ``(max_i+1, max_j+1, max_k+1)``
whose cells hold either a payload or ``None``. ``None`` marks a grid position
inside the bounding box that has no real block (e.g. outside the deposit).

Construction
------------
- :meth:`BlockModel.from_indexed`: payloads paired with their indices. Later
  pairs overwrite earlier ones at the same index (last write wins).
- :meth:`BlockModel.from_unindexed`: payloads carrying only coordinates. The
  origin is the per-axis minimum coordinate, every block must share one size,
  and each ``(coordinate - origin) / size`` must be an exact integer. The
  computed index is written back onto each payload before delegating to
  :meth:`from_indexed`.

The shape is fixed after construction; cell contents may be replaced through
:meth:`BlockModel.block_mut`.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from typing import Generic, TypeVar

import numpy as np
import numpy.typing as npt

from .contracts.block import BlockCoordinates, BlockIndex, BlockLike, BlockSize
from .dependence import DependenceStrategy
from .errors import (
    BlockIndexOutOfRangeError,
    EmptyModelError,
    InconsistentBlockSizeError,
    MisalignedCoordinateError,
)
from .settings import get_logger, load_settings

B = TypeVar("B", bound=BlockLike)

logger = get_logger(__name__)


class BlockCell(Generic[B]):
    """Mutable handle over one grid slot, returned by :meth:`BlockModel.block_mut`."""

    __slots__ = ("_model", "_index")

    def __init__(self, model: BlockModel[B], index: BlockIndex) -> None:
        self._model = model
        self._index = index

    @property
    def index(self) -> BlockIndex:
        return self._index

    @property
    def occupied(self) -> bool:
        return self.get() is not None

    def get(self) -> B | None:
        return self._model._cells[self._index.as_tuple()]  # type: ignore[no-any-return]

    def set(self, block: B | None) -> None:
        self._model._cells[self._index.as_tuple()] = block

    def clear(self) -> None:
        self.set(None)


class BlockModel(Generic[B]):
    """
    A regular grid of blocks addressed by :class:`BlockIndex`.

    Attributes
    ----------
    origin : BlockCoordinates | None
        Index-zero reference point; known only for unindexed construction.
    block_size : BlockSize | None
        Shared block size; known only for unindexed construction.
    """

    def __init__(
        self,
        cells: npt.NDArray[np.object_],
        *,
        origin: BlockCoordinates | None = None,
        block_size: BlockSize | None = None,
    ) -> None:
        if cells.ndim != 3:
            raise ValueError(f"cells must be a 3D array, got {cells.ndim} dimensions")
        self._cells = cells
        self.origin = origin
        self.block_size = block_size

    # ----------------------------------------------------------------------
    # Construction
    # ----------------------------------------------------------------------

    @classmethod
    def from_indexed(cls, blocks: Sequence[B], inds: Sequence[BlockIndex]) -> BlockModel[B]:
        """Build a model placing ``blocks[n]`` at ``inds[n]``; later entries win."""
        if len(blocks) != len(inds):
            raise ValueError(
                f"blocks and indices differ in length: {len(blocks)} != {len(inds)}"
            )

        max_i = max((ind.i for ind in inds), default=0)
        max_j = max((ind.j for ind in inds), default=0)
        max_k = max((ind.k for ind in inds), default=0)
        shape = (max_i + 1, max_j + 1, max_k + 1)

        cells = np.full(shape, None, dtype=object)
        for block, ind in zip(blocks, inds, strict=True):
            cells[ind.i, ind.j, ind.k] = block

        logger.debug("built block model of shape %s from %d indexed blocks", shape, len(blocks))
        return cls(cells)

    @classmethod
    def from_unindexed(cls, blocks: Sequence[B]) -> BlockModel[B]:
        """
        Build a model by deriving each block's index from its coordinates.

        Raises
        ------
        EmptyModelError
            If ``blocks`` is empty.
        InconsistentBlockSizeError
            If any block reports a size different from the first one.
        MisalignedCoordinateError
            If a block's offset from the origin is not a whole number of sizes.
        """
        if not blocks:
            raise EmptyModelError("cannot derive a grid from zero blocks")

        coords = [b.coordinates() for b in blocks]
        origin = BlockCoordinates(
            x=min(c.x for c in coords),
            y=min(c.y for c in coords),
            z=min(c.z for c in coords),
        )

        block_size = blocks[0].size()
        for position, block in enumerate(blocks[1:], start=1):
            found = block.size()
            if found != block_size:
                raise InconsistentBlockSizeError(block_size, found, position)

        inds = cls._gen_inds(coords, origin, block_size)
        for block, ind in zip(blocks, inds, strict=True):
            block.set_index(ind)

        model = cls.from_indexed(blocks, inds)
        model.origin = origin
        model.block_size = block_size
        return model

    @staticmethod
    def _gen_inds(
        coords: Sequence[BlockCoordinates], origin: BlockCoordinates, block_size: BlockSize
    ) -> list[BlockIndex]:
        """Map each coordinate onto the grid implied by ``origin`` and ``block_size``."""
        tolerance = load_settings().alignment_tolerance
        inds: list[BlockIndex] = []
        for position, c in enumerate(coords):
            axes = (
                ("x", c.x, origin.x, block_size.x_size),
                ("y", c.y, origin.y, block_size.y_size),
                ("z", c.z, origin.z, block_size.z_size),
            )
            ijk: list[int] = []
            for axis, value, low, step in axes:
                quotient = (value - low) / step
                nearest = round(quotient)
                if not math.isfinite(quotient) or abs(quotient - nearest) > tolerance:
                    raise MisalignedCoordinateError(position, axis, value, quotient)
                ijk.append(int(nearest))
            inds.append(BlockIndex.from_iterable(ijk))
        return inds

    # ----------------------------------------------------------------------
    # Shape & access
    # ----------------------------------------------------------------------

    @property
    def shape(self) -> tuple[int, int, int]:
        nx, ny, nz = self._cells.shape
        return (int(nx), int(ny), int(nz))

    def contains(self, index: BlockIndex) -> bool:
        """Return True if ``index`` addresses a cell inside the grid."""
        nx, ny, nz = self.shape
        return index.i < nx and index.j < ny and index.k < nz

    def _check(self, index: BlockIndex) -> None:
        if not self.contains(index):
            raise BlockIndexOutOfRangeError(index, self.shape)

    def block(self, index: BlockIndex) -> B | None:
        """Return the payload at ``index``, or ``None`` for an absent cell."""
        self._check(index)
        return self._cells[index.as_tuple()]  # type: ignore[no-any-return]

    def block_mut(self, index: BlockIndex) -> BlockCell[B]:
        """Return a mutable handle over the cell at ``index``."""
        self._check(index)
        return BlockCell(self, index)

    def __getitem__(self, index: BlockIndex) -> B | None:
        return self.block(index)

    def __setitem__(self, index: BlockIndex, block: B | None) -> None:
        self.block_mut(index).set(block)

    # ----------------------------------------------------------------------
    # Iteration
    # ----------------------------------------------------------------------

    def occupancy(self) -> npt.NDArray[np.bool_]:
        """Return a boolean array of the grid shape, True where a block is present."""
        present = [cell is not None for cell in self._cells.flat]
        return np.array(present, dtype=bool).reshape(self._cells.shape)

    def indices(self) -> Iterator[BlockIndex]:
        """Yield every grid index, occupied or not, in lexicographic order."""
        nx, ny, nz = self.shape
        for i in range(nx):
            for j in range(ny):
                for k in range(nz):
                    yield BlockIndex(i=i, j=j, k=k)

    def iter_blocks(self) -> Iterator[tuple[BlockIndex, B]]:
        """Yield ``(index, block)`` for occupied cells in lexicographic order."""
        for i, j, k in zip(*np.nonzero(self.occupancy()), strict=True):
            yield BlockIndex(i=int(i), j=int(j), k=int(k)), self._cells[i, j, k]

    def __len__(self) -> int:
        return int(np.count_nonzero(self.occupancy()))

    def __repr__(self) -> str:
        return f"BlockModel(shape={self.shape}, occupied={len(self)})"

    # ----------------------------------------------------------------------
    # Dependencies
    # ----------------------------------------------------------------------

    def dependent_block_inds(
        self, index: BlockIndex, strategy: DependenceStrategy
    ) -> list[BlockIndex]:
        """Return the indices related to ``index`` under ``strategy``."""
        self._check(index)
        return strategy.inds(self, index)

    def dependency_map(self, strategy: DependenceStrategy) -> dict[BlockIndex, list[BlockIndex]]:
        """Return ``dependent_block_inds`` for every occupied cell."""
        return {ind: strategy.inds(self, ind) for ind, _ in self.iter_blocks()}


__all__ = ["BlockCell", "BlockModel"]
