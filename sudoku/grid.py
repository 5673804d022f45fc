from math import isqrt
from typing import Iterator, List, Sequence, Tuple

Board = List[List[int]]


def box_size(width: int) -> int:
    box = isqrt(width) if width > 0 else 0
    if box == 0 or box * box != width:
        raise ValueError(f"width must be a positive perfect square, got {width}")
    return box


def empty_board(width: int) -> Board:
    box_size(width)
    return [[0] * width for _ in range(width)]


def copy_board(board: Sequence[Sequence[int]]) -> Board:
    return [list(row) for row in board]


def clear_board(board: Board) -> None:
    for row in board:
        for x in range(len(row)):
            row[x] = 0


def box_origin(y: int, x: int, box: int) -> Tuple[int, int]:
    return (y // box) * box, (x // box) * box


def box_index(y: int, x: int, box: int) -> int:
    return (y // box) * box + x // box


def box_cells(y: int, x: int, box: int) -> Iterator[Tuple[int, int]]:
    by, bx = box_origin(y, x, box)
    for i in range(by, by + box):
        for j in range(bx, bx + box):
            yield i, j


def conflicts(board: Sequence[Sequence[int]], y: int, x: int, value: int) -> bool:
    """True when ``value`` already sits in the row, column or box of (y, x)."""
    width = len(board)
    if any(board[y][i] == value for i in range(width)):
        return True
    if any(board[i][x] == value for i in range(width)):
        return True
    box = box_size(width)
    return any(board[i][j] == value for i, j in box_cells(y, x, box))


def count_givens(board: Sequence[Sequence[int]]) -> int:
    return sum(1 for row in board for v in row if v != 0)


def is_consistent(board: Sequence[Sequence[int]]) -> bool:
    width = len(board)
    box = box_size(width)
    for y in range(width):
        for x in range(width):
            v = board[y][x]
            if v == 0:
                continue
            if not 1 <= v <= width:
                return False
            for i in range(width):
                if i != x and board[y][i] == v:
                    return False
                if i != y and board[i][x] == v:
                    return False
            for i, j in box_cells(y, x, box):
                if (i, j) != (y, x) and board[i][j] == v:
                    return False
    return True


def is_solved(board: Sequence[Sequence[int]]) -> bool:
    width = len(board)
    full = set(range(1, width + 1))
    box = box_size(width)
    for i in range(width):
        if set(board[i]) != full:
            return False
        if {board[y][i] for y in range(width)} != full:
            return False
    for by in range(0, width, box):
        for bx in range(0, width, box):
            if {board[y][x] for y, x in box_cells(by, bx, box)} != full:
                return False
    return True


def to_line(board: Sequence[Sequence[int]]) -> str:
    return "".join(str(v) for row in board for v in row)


def from_line(line: str, width: int = 9) -> Board:
    line = line.strip()
    if len(line) != width * width:
        raise ValueError(f"expected {width * width} cells, got {len(line)}")
    board = empty_board(width)
    for i, ch in enumerate(line):
        if ch == ".":
            continue
        if not ch.isdigit():
            raise ValueError(f"invalid cell {ch!r} at position {i}")
        value = int(ch)
        if value > width:
            raise ValueError(f"value {value} at position {i} exceeds width {width}")
        board[i // width][i % width] = value
    return board


def format_board(board: Sequence[Sequence[int]]) -> str:
    width = len(board)
    box = box_size(width)
    cell = len(str(width))
    rule = "+" + "+".join("-" * ((cell + 1) * box + 1) for _ in range(box)) + "+"
    lines = []
    for y, row in enumerate(board):
        if y % box == 0:
            lines.append(rule)
        parts = []
        for bx in range(0, width, box):
            chunk = " ".join(str(v).rjust(cell) if v else ".".rjust(cell) for v in row[bx:bx + box])
            parts.append(" " + chunk + " ")
        lines.append("|" + "|".join(parts) + "|")
    lines.append(rule)
    return "\n".join(lines)
