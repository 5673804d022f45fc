import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from .errors import GenerationError
from .extreme import Source, load_extreme
from .grid import Board, box_size, clear_board, conflicts, copy_board, empty_board
from .levels import EXTREME, DifficultyLevel, get_level
from .solver import MAX_SOLVE_MILLIS, has_unique_solution, solve_board

logger = logging.getLogger(__name__)

SEED_COUNT = 10
MAX_SEED_ROUNDS = 10
MAX_REDUCE_RETRIES = 20
MAX_GENERATION_ATTEMPTS = 50
EXTREME_WIDTH = 9

Grid = Tuple[Tuple[int, ...], ...]


def _freeze(board: Sequence[Sequence[int]]) -> Grid:
    return tuple(tuple(row) for row in board)


@dataclass(frozen=True)
class Puzzle:
    width: int
    level: DifficultyLevel
    problem: Grid
    answer: Grid
    actual_initial: int

    def to_dict(self) -> dict:
        return {
            "level": self.level.name,
            "width": self.width,
            "given": self.actual_initial,
            "puzzle": [list(row) for row in self.problem],
            "solution": [list(row) for row in self.answer],
        }


def set_random_value(board: Board, y: int, x: int, rng: random.Random) -> bool:
    width = len(board)
    rejected = set()
    while len(rejected) < width:
        value = rng.randint(1, width)
        if value in rejected:
            continue
        if not conflicts(board, y, x, value):
            board[y][x] = value
            return True
        rejected.add(value)
    return False


def place_seeds(board: Board, seed_count: int = SEED_COUNT, rng: Optional[random.Random] = None) -> bool:
    width = len(board)
    total = width * width
    if seed_count > total:
        raise ValueError(f"cannot place {seed_count} seeds on a {width}x{width} board")
    rng = rng or random.Random()

    clear_board(board)
    placed = 1 if set_random_value(board, 0, 0, rng) else 0
    attempts = 0
    while placed < seed_count:
        if attempts >= total * MAX_SEED_ROUNDS:
            logger.debug("Placed only %d of %d seeds", placed, seed_count)
            return False
        attempts += 1
        y, x = divmod(rng.randrange(total), width)
        if board[y][x] == 0 and set_random_value(board, y, x, rng):
            placed += 1
    return True


def default_seed_count(width: int) -> int:
    # small boards cannot take SEED_COUNT random givens and stay solvable
    return min(SEED_COUNT, width * width // 4)


def generate_full_board(
    width: int = 9,
    rng: Optional[random.Random] = None,
    seed_count: int = SEED_COUNT,
    max_millis: int = MAX_SOLVE_MILLIS,
) -> Optional[Board]:
    board = empty_board(width)
    if not place_seeds(board, seed_count, rng):
        return None
    return solve_board(board, max_millis)


def reduce_puzzle(
    answer: Sequence[Sequence[int]],
    target: int,
    rng: Optional[random.Random] = None,
    max_retries: int = MAX_REDUCE_RETRIES,
    max_millis: int = MAX_SOLVE_MILLIS,
) -> Tuple[Board, int]:
    """
    Clear mirror pairs from a solved board while it keeps a single solution.

    Stops once ``target`` givens remain or after ``max_retries`` rejected pairs
    in a row, so the returned given count may stay above ``target``.
    """
    rng = rng or random.Random()
    width = len(answer)
    problem = copy_board(answer)
    known = width * width

    if target % 2 == 0:
        # the center is cleared without a uniqueness check
        center = width // 2
        problem[center][center] = 0
        known -= 1

    retry = 0
    while known > target and retry < max_retries:
        filled = [(y, x) for y in range(width) for x in range(width) if problem[y][x]]
        if not filled:
            break
        y, x = rng.choice(filled)
        pair = {(y, x), (width - y - 1, width - x - 1)}
        removed = sum(1 for py, px in pair if problem[py][px])
        for py, px in pair:
            problem[py][px] = 0

        if has_unique_solution(problem, max_millis):
            known -= removed
            retry = 0
        else:
            for py, px in pair:
                problem[py][px] = answer[py][px]
            retry += 1

    return problem, known


def _generate_standard(
    width: int, level: DifficultyLevel, rng: random.Random, seed_count: int, max_millis: int
) -> Optional[Tuple[Board, Board, int]]:
    answer = generate_full_board(width, rng, seed_count, max_millis)
    if answer is None:
        return None
    problem, known = reduce_puzzle(answer, level.initial_given, rng, max_millis=max_millis)
    return problem, answer, known


def _generate_extreme(
    width: int, rng: random.Random, max_millis: int, dataset: Source
) -> Optional[Tuple[Board, Board, int]]:
    loaded = load_extreme(width, rng, dataset)
    if loaded is None:
        return None
    problem, given = loaded
    answer = solve_board(problem, max_millis)
    if answer is None:
        return None
    return problem, answer, given


def generate_puzzle(
    level: Union[str, DifficultyLevel] = "easy",
    width: int = 9,
    rng: Optional[random.Random] = None,
    seed_count: int = SEED_COUNT,
    max_millis: int = MAX_SOLVE_MILLIS,
    max_attempts: int = MAX_GENERATION_ATTEMPTS,
    dataset: Source = None,
) -> Puzzle:
    level = get_level(level)
    box_size(width)
    if level == EXTREME and width != EXTREME_WIDTH:
        raise ValueError(f"{EXTREME.name} puzzles are {EXTREME_WIDTH}x{EXTREME_WIDTH} only")
    rng = rng or random.Random()

    for attempt in range(1, max_attempts + 1):
        if level == EXTREME:
            result = _generate_extreme(width, rng, max_millis, dataset)
        else:
            result = _generate_standard(width, level, rng, seed_count, max_millis)
        if result is not None:
            problem, answer, given = result
            return Puzzle(width, level, _freeze(problem), _freeze(answer), given)
        logger.debug("Attempt %d for %s %dx%d failed, starting over", attempt, level.name, width, width)

    logger.error("Gave up on %s %dx%d after %d attempts", level.name, width, width, max_attempts)
    raise GenerationError(f"could not generate a {level.name} puzzle in {max_attempts} attempts")
