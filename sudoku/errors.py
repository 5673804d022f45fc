class SudokuError(Exception):
    pass


class DuplicateLevelError(SudokuError, KeyError):
    def __init__(self, name: str):
        super().__init__(f"Sudoku level ({name}) is already defined")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


class UnknownLevelError(SudokuError, ValueError):
    def __init__(self, name: str):
        super().__init__(f"Invalid Sudoku level - {name}")
        self.name = name


class GenerationError(SudokuError, RuntimeError):
    """Raised when every generation attempt failed."""
