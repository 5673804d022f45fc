import argparse
import logging
import sys

from .errors import SudokuError
from .extreme import encode_file
from .generator import default_seed_count, generate_puzzle
from .grid import format_board


def main(argv=None):
    parser = argparse.ArgumentParser(prog="python -m sudoku", description="Sudoku puzzle generator")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    gen = commands.add_parser("generate", help="generate a puzzle and print it")
    gen.add_argument("--level", "-l", default="easy", help="Easy, Medium, Hard or Extreme (default: easy)")
    gen.add_argument("--width", "-w", type=int, default=9, help="board width, a perfect square (default: 9)")
    gen.add_argument("--seeds", "-s", type=int, help="random givens placed before solving")

    enc = commands.add_parser("encode", help="pack 81-character puzzle lines into dataset records")
    enc.add_argument("input", help="text file, one puzzle per line")
    enc.add_argument("output", help="dataset file to append to")
    enc.add_argument("--overwrite", action="store_true", help="truncate the output file first")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "generate":
            puzzle = generate_puzzle(args.level, args.width, seed_count=args.seeds or default_seed_count(args.width))
            print(f"{puzzle.level.name} ({puzzle.actual_initial} givens)")
            print(format_board(puzzle.problem))
            print("\nSolution")
            print(format_board(puzzle.answer))
        else:
            count = encode_file(args.input, args.output, append=not args.overwrite)
            print(f"Wrote {count} records to {args.output}")
    except (SudokuError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
