"""
CSV bulk loaders for block models.

Each row of the source deserializes into one payload through its
``from_row`` classmethod (see :class:`~blockmodel.core.contracts.block.BlockLike`).
The model is only built once every row has been read, so a failure part-way
through never leaves a half-populated model behind.

Both loaders return a :class:`~blockmodel.core.result.Result` instead of
raising: ``Ok(model)`` on success, ``Err(error)`` for an I/O failure, a bad
row, or a domain check raised by the constructor.

Usage
-----
>>> res = load_unindexed_csv("deposit.csv")
>>> if res.is_ok():
...     model = res.unwrap()
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, TypeVar

from pydantic import ValidationError

from .contracts.block import BlockIndex, BlockLike, GridBlock
from .errors import BlockLoadError, BlockModelError
from .model import BlockModel
from .result import Result, err, ok
from .settings import get_logger, load_settings

B = TypeVar("B", bound=BlockLike)

logger = get_logger(__name__)


def _row_message(exc: ValidationError) -> str:
    """Condense a pydantic error into one line naming the offending columns."""
    parts = []
    for e in exc.errors():
        loc = ".".join(str(p) for p in e.get("loc", ())) or "<row>"
        parts.append(f"{loc}: {e.get('msg', 'invalid value')}")
    return "; ".join(parts)


def read_blocks(path: str | Path, block_type: type[B]) -> list[B]:
    """
    Read every row of ``path`` into a ``block_type`` payload.

    Raises
    ------
    BlockLoadError
        If the file cannot be opened or decoded, or a row fails validation.
        ``row`` on the error is the 1-based data row (header excluded).
    """
    path = Path(path)
    cfg = load_settings()
    blocks: list[B] = []
    row_no = 0
    try:
        with path.open("r", encoding=cfg.csv_encoding, newline="") as f:
            reader = csv.DictReader(f, delimiter=cfg.csv_delimiter)
            if reader.fieldnames is None:
                raise BlockLoadError(path, "file is empty (no header row)")
            for row_no, row in enumerate(reader, start=1):
                if None in row:
                    raise BlockLoadError(path, "row has more fields than the header", row_no)
                blocks.append(block_type.from_row(row))
    except ValidationError as exc:
        raise BlockLoadError(path, _row_message(exc), row_no) from exc
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise BlockLoadError(path, str(exc), row_no or None) from exc
    except (KeyError, TypeError, ValueError) as exc:
        # custom block types may reject a row without going through pydantic
        raise BlockLoadError(path, f"{type(exc).__name__}: {exc}", row_no) from exc

    logger.debug("read %d blocks from %s", len(blocks), path)
    return blocks


def load_unindexed_csv(
    path: str | Path, block_type: type[Any] = GridBlock
) -> Result[BlockModel[Any], BlockModelError]:
    """Load blocks without indices and place them by coordinate."""
    try:
        blocks = read_blocks(path, block_type)
        model: BlockModel[Any] = BlockModel.from_unindexed(blocks)
    except BlockModelError as exc:
        logger.debug("unindexed load failed: %s", exc)
        return err(exc)
    logger.info("loaded %r from %s", model, path)
    return ok(model)


def load_indexed_csv(
    path: str | Path, block_type: type[Any] = GridBlock
) -> Result[BlockModel[Any], BlockModelError]:
    """Load blocks that carry their own ``i, j, k`` and place them there."""
    try:
        blocks = read_blocks(path, block_type)
        inds: list[BlockIndex] = []
        for row_no, block in enumerate(blocks, start=1):
            try:
                inds.append(block.index())
            except BlockModelError as exc:
                raise BlockLoadError(Path(path), str(exc), row_no) from exc
        model: BlockModel[Any] = BlockModel.from_indexed(blocks, inds)
    except BlockModelError as exc:
        logger.debug("indexed load failed: %s", exc)
        return err(exc)
    logger.info("loaded %r from %s", model, path)
    return ok(model)


__all__ = ["load_indexed_csv", "load_unindexed_csv", "read_blocks"]
