import logging
import time
from enum import Enum
from typing import List, Optional, Sequence

from .grid import Board, box_index, box_size, copy_board, is_consistent

logger = logging.getLogger(__name__)

MAX_SOLVE_MILLIS = 2000


class Mode(Enum):
    FRESH = "fresh"
    CONTINUE = "continue"


class SearchState:
    """
    Working state of one backtracking search.

    Holds the problem (whose non-zero cells are fixed), the working board the
    search fills in and the row/column/box occupancy masks. A state is owned
    by a single caller; ``solve`` mutates it in place.
    """

    def __init__(self, problem: Sequence[Sequence[int]]):
        self.width = len(problem)
        self.box = box_size(self.width)
        self.problem = copy_board(problem)
        self.fixed = [[v != 0 for v in row] for row in self.problem]
        self.board: Board = copy_board(self.problem)
        self.solved = False
        self.timed_out = False
        self._rows: List[int] = []
        self._cols: List[int] = []
        self._boxes: List[int] = []
        self.reset()

    def reset(self) -> None:
        self.board = copy_board(self.problem)
        self.solved = False
        self.timed_out = False
        self._rows = [0] * self.width
        self._cols = [0] * self.width
        self._boxes = [0] * self.width
        for y, row in enumerate(self.board):
            for x, v in enumerate(row):
                if v:
                    self._mark(y, x, v)

    def solution(self) -> Optional[Board]:
        return copy_board(self.board) if self.solved else None

    def _mark(self, y: int, x: int, value: int) -> None:
        bit = 1 << value
        self._rows[y] |= bit
        self._cols[x] |= bit
        self._boxes[box_index(y, x, self.box)] |= bit

    def _unmark(self, y: int, x: int, value: int) -> None:
        bit = ~(1 << value)
        self._rows[y] &= bit
        self._cols[x] &= bit
        self._boxes[box_index(y, x, self.box)] &= bit

    def _find_value(self, y: int, x: int) -> bool:
        current = self.board[y][x]
        if current:
            self._unmark(y, x, current)
        used = self._rows[y] | self._cols[x] | self._boxes[box_index(y, x, self.box)]
        for value in range(current + 1, self.width + 1):
            if not used & (1 << value):
                self.board[y][x] = value
                self._mark(y, x, value)
                return True
        self.board[y][x] = 0
        return False

    def _is_fixed(self, pos: int) -> bool:
        y, x = divmod(pos, self.width)
        return self.fixed[y][x]

    def _retreat(self, pos: int) -> int:
        pos -= 1
        while pos >= 0 and self._is_fixed(pos):
            pos -= 1
        return pos

    def _last_open(self) -> int:
        return self._retreat(self.width * self.width)


def solve(state: SearchState, mode: Mode = Mode.FRESH, max_millis: int = MAX_SOLVE_MILLIS) -> bool:
    """
    Run the backtracking search on ``state``.

    ``Mode.FRESH`` restarts from the problem and looks for a first completion.
    ``Mode.CONTINUE`` keeps the held completion and backtracks from the last
    open cell, so a success means a different completion exists.

    Returns False when the search space is exhausted or ``max_millis`` ran out.
    """
    total = state.width * state.width
    if mode is Mode.FRESH:
        state.reset()
        if not is_consistent(state.problem):
            logger.debug("Givens conflict, nothing to solve")
            return False
        pos = 0
    else:
        if not state.solved:
            return False
        state.solved = False
        state.timed_out = False
        pos = state._last_open()

    deadline = time.monotonic() + max_millis / 1000.0
    while True:
        if pos < 0:
            return False
        if time.monotonic() > deadline:
            logger.debug("Solve gave up after %d ms at cell %s", max_millis, divmod(pos, state.width))
            state.timed_out = True
            return False
        y, x = divmod(pos, state.width)
        if state.fixed[y][x] or state._find_value(y, x):
            pos += 1
            if pos >= total:
                state.solved = True
                return True
        else:
            pos = state._retreat(pos)


def solve_board(board: Sequence[Sequence[int]], max_millis: int = MAX_SOLVE_MILLIS) -> Optional[Board]:
    state = SearchState(board)
    if solve(state, Mode.FRESH, max_millis):
        return state.solution()
    return None


def has_unique_solution(board: Sequence[Sequence[int]], max_millis: int = MAX_SOLVE_MILLIS) -> bool:
    # one FRESH success and one exhausted CONTINUE; a CONTINUE that ran out
    # of time proves nothing
    state = SearchState(board)
    if not solve(state, Mode.FRESH, max_millis):
        return False
    return not solve(state, Mode.CONTINUE, max_millis) and not state.timed_out
