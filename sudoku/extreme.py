"""
Packed dataset of 17-given puzzles used for the Extreme level.

Each record is ``RECORD_SIZE`` bytes holding (row, col, value) nibble triples,
two nibbles per byte with the high nibble first, in row-major order. Unused
trailing nibbles are zero. Records carry no length field: the decoder walks
the grid and consumes the next triple whenever its (row, col) matches the
current cell.
"""

import io
import logging
import os
import random
from functools import lru_cache
from importlib import resources
from typing import BinaryIO, List, Optional, Tuple, Union

from .grid import Board, empty_board, from_line

logger = logging.getLogger(__name__)

RECORD_SIZE = 26  # 17 givens * 1.5 bytes, rounded up
DATASET_RESOURCE = ("data", "sudoku17.dat")

Source = Union[None, str, os.PathLike]


def _nibbles(buf: bytes) -> List[int]:
    out = []
    for b in buf:
        out.append((b >> 4) & 0x0F)
        out.append(b & 0x0F)
    return out


def decode_record(buf: bytes, width: int = 9) -> Tuple[Board, int]:
    nibbles = _nibbles(buf)
    board = empty_board(width)
    given = 0
    i = 0
    for y in range(width):
        for x in range(width):
            # a triple must lie entirely inside the record
            if i + 2 >= len(nibbles):
                continue
            if nibbles[i] == y and nibbles[i + 1] == x and 1 <= nibbles[i + 2] <= width:
                board[y][x] = nibbles[i + 2]
                i += 3
                given += 1
    return board, given


def encode_record(line: str, width: int = 9, record_size: int = RECORD_SIZE) -> bytes:
    board = from_line(line, width)
    nibbles = []
    for y, row in enumerate(board):
        for x, v in enumerate(row):
            if v:
                nibbles.extend((y, x, v))
    if any(n > 0x0F for n in nibbles):
        raise ValueError("cells do not fit in 4-bit fields")
    if len(nibbles) > record_size * 2:
        raise ValueError(f"{len(nibbles) // 3} givens do not fit in a {record_size}-byte record")
    nibbles.extend([0] * (record_size * 2 - len(nibbles)))
    return bytes((nibbles[i] << 4) | nibbles[i + 1] for i in range(0, len(nibbles), 2))


def encode_file(in_path: Union[str, os.PathLike], out_path: Union[str, os.PathLike], append: bool = True) -> int:
    written = 0
    with open(in_path, "r", encoding="ascii") as src, open(out_path, "ab" if append else "wb") as dst:
        for line in src:
            line = line.strip()
            if not line:
                break
            dst.write(encode_record(line))
            written += 1
    logger.info("Encoded %d records from %s into %s", written, in_path, out_path)
    return written


def _open_source(source: Source) -> BinaryIO:
    if source is None:
        resource = resources.files(__package__)
        for part in DATASET_RESOURCE:
            resource = resource / part
        return resource.open("rb")
    return open(source, "rb")


@lru_cache(maxsize=None)
def record_count(source: Source = None) -> int:
    with _open_source(source) as stream:
        stream.seek(0, io.SEEK_END)
        return stream.tell() // RECORD_SIZE


def load_extreme(
    width: int = 9, rng: Optional[random.Random] = None, source: Source = None
) -> Optional[Tuple[Board, int]]:
    """
    Pick a random record from the dataset and decode it.

    Returns ``(board, given_count)`` or None when the dataset cannot be read.
    """
    rng = rng or random.Random()
    try:
        count = record_count(source)
        if count == 0:
            logger.warning("Extreme dataset %s holds no records", source or "resource")
            return None
        index = rng.randrange(count)
        with _open_source(source) as stream:
            stream.seek(index * RECORD_SIZE)
            buf = stream.read(RECORD_SIZE)
    except OSError:
        logger.warning("Failed to load extreme dataset %s", source or "resource", exc_info=True)
        return None
    if len(buf) != RECORD_SIZE:
        logger.warning("Short read of record %d (%d bytes)", index, len(buf))
        return None
    return decode_record(buf, width)
