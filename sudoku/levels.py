from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Union

from .errors import DuplicateLevelError, UnknownLevelError


@dataclass(frozen=True, eq=False)
class DifficultyLevel:
    name: str
    initial_given: int
    key: str = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "key", self.name.lower())

    def __eq__(self, other):
        if isinstance(other, DifficultyLevel):
            return self.key == other.key
        return NotImplemented

    def __hash__(self):
        return hash(self.key)


EASY = DifficultyLevel("Easy", 38)
MEDIUM = DifficultyLevel("Medium", 32)
HARD = DifficultyLevel("Hard", 21)
# given count comes from the dataset record, not from reduction
EXTREME = DifficultyLevel("Extreme", 17)


def build_levels(levels: Iterable[DifficultyLevel]) -> Mapping[str, DifficultyLevel]:
    table = {}
    for level in levels:
        if level.key in table:
            raise DuplicateLevelError(level.name)
        table[level.key] = level
    return MappingProxyType(table)


LEVELS = build_levels([EASY, MEDIUM, HARD, EXTREME])


def get_level(level: Union[str, DifficultyLevel]) -> DifficultyLevel:
    if isinstance(level, DifficultyLevel):
        return level
    found = LEVELS.get(str(level).strip().lower())
    if found is None:
        raise UnknownLevelError(level)
    return found
