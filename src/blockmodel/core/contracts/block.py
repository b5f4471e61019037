"""
Block contracts: positions, sizes, grid addresses and the block capability.

This module defines the small value types shared by every block model and the
minimal surface a payload type must offer to be stored in one.

- :class:`BlockCoordinates`: real-valued world position of a block.
- :class:`BlockSize`: real-valued cell dimensions, identical across one model.
- :class:`BlockIndex`: non-negative integer ``(i, j, k)`` grid address,
  hashable and ordered lexicographically so it works as a dict or sort key.
- :class:`BlockLike`: the capability protocol the container depends on.
- :class:`GridBlock`: the stock pydantic payload implementing ``BlockLike``.

Notes
-----
- The three value types are frozen Pydantic v2 models: equality is structural
  and instances are hashable.
- ``GridBlock`` keeps unknown CSV columns (grade, material, ...) as extras so
  payload data survives a load untouched.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, Self, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator

from ..errors import UnindexedBlockError

# --------------------------------------------------------------------------- #
# Value types
# --------------------------------------------------------------------------- #


class BlockCoordinates(BaseModel):
    """World-space position of a block (corner or centroid, consistently)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


class BlockSize(BaseModel):
    """Dimensions of one block along each axis."""

    model_config = ConfigDict(frozen=True)

    x_size: float = Field(gt=0.0)
    y_size: float = Field(gt=0.0)
    z_size: float = Field(gt=0.0)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x_size, self.y_size, self.z_size)


class BlockIndex(BaseModel):
    """
    Integer grid address of a block.

    Indices are compared lexicographically on ``(i, j, k)``. ``k`` grows with
    depth, so layer ``k + 1`` lies below layer ``k``.
    """

    model_config = ConfigDict(frozen=True)

    i: NonNegativeInt
    j: NonNegativeInt
    k: NonNegativeInt

    @classmethod
    def of(cls, i: int, j: int, k: int) -> BlockIndex:
        """Positional shorthand for ``BlockIndex(i=i, j=j, k=k)``."""
        return cls(i=i, j=j, k=k)

    @classmethod
    def from_iterable(cls, values: Iterable[int]) -> BlockIndex:
        i, j, k = values
        return cls(i=i, j=j, k=k)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.i, self.j, self.k)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BlockIndex):
            return NotImplemented
        return self.as_tuple() < other.as_tuple()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BlockIndex):
            return NotImplemented
        return self.as_tuple() <= other.as_tuple()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BlockIndex):
            return NotImplemented
        return self.as_tuple() > other.as_tuple()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BlockIndex):
            return NotImplemented
        return self.as_tuple() >= other.as_tuple()

    def __str__(self) -> str:
        return f"({self.i}, {self.j}, {self.k})"


# --------------------------------------------------------------------------- #
# Capability contract
# --------------------------------------------------------------------------- #


@runtime_checkable
class BlockLike(Protocol):
    """
    What :class:`~blockmodel.core.model.BlockModel` needs from a payload.

    ``coordinates()`` and ``size()`` must be pure queries. ``index()`` and
    ``set_index()`` form a mutable slot the container fills after placing the
    block. Implementations also compare by value and build themselves from one
    raw record of the bulk-load source via ``from_row``.
    """

    def coordinates(self) -> BlockCoordinates: ...

    def size(self) -> BlockSize: ...

    def index(self) -> BlockIndex: ...

    def set_index(self, index: BlockIndex) -> None: ...

    def __eq__(self, other: object) -> bool: ...

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Self: ...


# --------------------------------------------------------------------------- #
# Stock payload
# --------------------------------------------------------------------------- #


class GridBlock(BaseModel):
    """
    A block record as found in a block model CSV.

    Required columns are ``x, y, z`` and ``x_size, y_size, z_size``. The grid
    address ``i, j, k`` is optional: unindexed sources leave it blank and the
    container assigns it. Any other column is kept as an extra attribute.
    """

    model_config = ConfigDict(extra="allow")

    x: float = Field(description="Easting of the block reference point.")
    y: float = Field(description="Northing of the block reference point.")
    z: float = Field(description="Vertical position of the block reference point.")

    x_size: float = Field(gt=0.0, description="Block extent along x.")
    y_size: float = Field(gt=0.0, description="Block extent along y.")
    z_size: float = Field(gt=0.0, description="Block extent along z.")

    i: NonNegativeInt | None = Field(default=None, description="Grid column, once placed.")
    j: NonNegativeInt | None = Field(default=None, description="Grid row, once placed.")
    k: NonNegativeInt | None = Field(default=None, description="Grid layer, once placed.")

    @field_validator("i", "j", "k", mode="before")
    @classmethod
    def _blank_is_unset(cls, v: Any) -> Any:
        """CSV cells for a missing index arrive as empty strings."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # ----- BlockLike ---------------------------------------------------------
    def coordinates(self) -> BlockCoordinates:
        return BlockCoordinates(x=self.x, y=self.y, z=self.z)

    def size(self) -> BlockSize:
        return BlockSize(x_size=self.x_size, y_size=self.y_size, z_size=self.z_size)

    def index(self) -> BlockIndex:
        if self.i is None or self.j is None or self.k is None:
            raise UnindexedBlockError(
                f"block at ({self.x}, {self.y}, {self.z}) has no grid index assigned"
            )
        return BlockIndex(i=self.i, j=self.j, k=self.k)

    def set_index(self, index: BlockIndex) -> None:
        self.i, self.j, self.k = index.i, index.j, index.k

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Self:
        """Validate one raw record (string values are coerced)."""
        return cls.model_validate(dict(row))


__all__ = ["BlockCoordinates", "BlockIndex", "BlockLike", "BlockSize", "GridBlock"]
