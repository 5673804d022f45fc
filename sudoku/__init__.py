from .errors import DuplicateLevelError, GenerationError, SudokuError, UnknownLevelError
from .extreme import RECORD_SIZE, decode_record, encode_file, encode_record, load_extreme
from .generator import (
    MAX_GENERATION_ATTEMPTS,
    MAX_REDUCE_RETRIES,
    SEED_COUNT,
    Puzzle,
    generate_full_board,
    generate_puzzle,
    place_seeds,
    reduce_puzzle,
)
from .grid import Board, box_size, format_board, is_solved
from .levels import EASY, EXTREME, HARD, LEVELS, MEDIUM, DifficultyLevel, get_level
from .solver import MAX_SOLVE_MILLIS, Mode, SearchState, has_unique_solution, solve, solve_board

__version__ = "1.0.0"
