"""Outcome of a block model load: the model, or the reason there is none.

A load can fail in three places: opening the file, parsing a row, or the
size/alignment checks of :class:`~blockmodel.core.model.BlockModel`. The
loaders fold all of them into one value so callers branch once:

>>> res = load_unindexed_csv("deposit.csv")
>>> if res.is_err():
...     print(res.unwrap_err())
... else:
...     model = res.unwrap()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


class Result(Generic[T, E]):
    """Either ``Ok(model)`` or ``Err(error)``."""

    def is_ok(self) -> bool:
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        return isinstance(self, Err)

    def unwrap(self) -> T:
        """Return the loaded value, or raise the error the load stopped on."""
        if isinstance(self, Ok):
            return self.value
        assert isinstance(self, Err)
        raise self.error

    def unwrap_err(self) -> E:
        """Return the error; a successful load has none to give."""
        if isinstance(self, Err):
            return self.error
        raise RuntimeError(f"load succeeded, no error to unwrap: {self!r}")


@dataclass(frozen=True)
class Ok(Result[T, E]):
    value: T


@dataclass(frozen=True)
class Err(Result[T, E]):
    error: E


def ok(value: T) -> Result[T, E]:
    return Ok(value)


def err(error: E) -> Result[T, E]:
    return Err(error)
