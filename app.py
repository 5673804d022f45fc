import os

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest

from sudoku import EXTREME, LEVELS, DifficultyLevel, GenerationError, UnknownLevelError, generate_puzzle, get_level
from sudoku.generator import EXTREME_WIDTH, MAX_GENERATION_ATTEMPTS, default_seed_count
from sudoku.grid import box_size
from sudoku.solver import MAX_SOLVE_MILLIS

load_dotenv()

app = Flask(__name__)

# Generator config
SOLVE_MILLIS = int(os.getenv("SUDOKU_SOLVE_MILLIS", str(MAX_SOLVE_MILLIS)))
SEEDS = int(os.getenv("SUDOKU_SEED_COUNT", "0"))  # 0 picks a count from the width
MAX_ATTEMPTS = int(os.getenv("SUDOKU_MAX_ATTEMPTS", str(MAX_GENERATION_ATTEMPTS)))
DATASET_PATH = os.getenv("SUDOKU_DATASET") or None
DEFAULT_LEVEL = os.getenv("SUDOKU_DEFAULT_LEVEL", "easy")
MAX_WIDTH = 9  # 16x16 boards take close to a minute to reduce


@app.errorhandler(BadRequest)
def bad_request(e):
    return jsonify({"error": e.description}), 400


@app.errorhandler(GenerationError)
def generation_failed(e):
    app.logger.error("Puzzle generation failed: %s", e)
    return jsonify({"error": str(e)}), 503


def read_width() -> int:
    raw = request.args.get("width", "9")
    try:
        width = int(raw)
    except ValueError:
        raise BadRequest(f"width must be an integer, got {raw!r}")
    if not 1 <= width <= MAX_WIDTH:
        raise BadRequest(f"width must be between 1 and {MAX_WIDTH}")
    try:
        box_size(width)
    except ValueError as e:
        raise BadRequest(str(e))
    return width


def read_level(width: int) -> DifficultyLevel:
    try:
        level = get_level(request.args.get("level", DEFAULT_LEVEL))
    except UnknownLevelError as e:
        raise BadRequest(str(e))
    if level == EXTREME and width != EXTREME_WIDTH:
        raise BadRequest(f"{EXTREME.name} puzzles are {EXTREME_WIDTH}x{EXTREME_WIDTH} only")
    return level


@app.route("/api/levels")
def api_levels():
    return jsonify([{"name": lv.name, "initial_given": lv.initial_given} for lv in LEVELS.values()])


@app.route("/api/new_puzzle")
def api_new_puzzle():
    width = read_width()
    level = read_level(width)
    puzzle = generate_puzzle(
        level,
        width,
        seed_count=SEEDS or default_seed_count(width),
        max_millis=SOLVE_MILLIS,
        max_attempts=MAX_ATTEMPTS,
        dataset=DATASET_PATH,
    )
    app.logger.info("Generated %s %dx%d with %d givens", puzzle.level.name, width, width, puzzle.actual_initial)
    return jsonify(puzzle.to_dict())


if __name__ == "__main__":
    app.run(debug=True)
