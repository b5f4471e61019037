"""Error taxonomy for block model construction, access and loading.

Every failure the package can report derives from :class:`BlockModelError`
so callers can catch the whole family at once, while each kind stays
distinguishable:

- :class:`InconsistentBlockSizeError`: blocks in one unindexed batch disagree on size.
- :class:`MisalignedCoordinateError`: a coordinate is not an exact grid multiple.
- :class:`BlockIndexOutOfRangeError`: an index addresses a cell outside the grid.
- :class:`EmptyModelError`: an unindexed batch contained no blocks at all.
- :class:`UnindexedBlockError`: a block was asked for an index it never received.
- :class:`BlockLoadError`: I/O or per-row deserialization failure during bulk load.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class BlockModelError(Exception):
    """Base class for all block model failures."""


class InconsistentBlockSizeError(BlockModelError):
    """Raised when blocks of one model do not share an identical size."""

    def __init__(self, expected: Any, found: Any, position: int) -> None:
        self.expected = expected
        self.found = found
        self.position = position
        super().__init__(
            f"inconsistent block size at position {position}: expected {expected!r}, found {found!r}"
        )


class MisalignedCoordinateError(BlockModelError):
    """Raised when a block coordinate does not fall on the implied grid."""

    def __init__(self, position: int, axis: str, coordinate: float, quotient: float) -> None:
        self.position = position
        self.axis = axis
        self.coordinate = coordinate
        self.quotient = quotient
        super().__init__(
            f"misaligned coordinate at position {position}: "
            f"{axis}={coordinate!r} gives non-integral grid offset {quotient!r}"
        )


class BlockIndexOutOfRangeError(BlockModelError, IndexError):
    """Raised when an index addresses a cell outside the allocated grid."""

    def __init__(self, index: Any, shape: tuple[int, int, int]) -> None:
        self.index = index
        self.shape = shape
        super().__init__(f"block index {index!r} out of range for grid shape {shape}")


class EmptyModelError(BlockModelError):
    """Raised when an unindexed model is requested from zero blocks."""


class UnindexedBlockError(BlockModelError):
    """Raised when a block's index is read before one has been assigned."""


class BlockLoadError(BlockModelError):
    """Raised (or wrapped in ``Err``) when a bulk load cannot read its source."""

    def __init__(self, path: Path, message: str, row: int | None = None) -> None:
        self.path = path
        self.row = row
        where = f"{path}" if row is None else f"{path}, row {row}"
        super().__init__(f"{where}: {message}")


__all__ = [
    "BlockIndexOutOfRangeError",
    "BlockLoadError",
    "BlockModelError",
    "EmptyModelError",
    "InconsistentBlockSizeError",
    "MisalignedCoordinateError",
    "UnindexedBlockError",
]
