"""Path command types produced by the tokenizer.

A PathCommand is one drawing instruction with exactly one operand group;
implicitly repeated commands in the source text become separate instances.
"""

from dataclasses import dataclass
from enum import Enum


class CommandKind(Enum):
    """Path command, keyed by its SVG letter."""

    MOVE_ABS = "M"
    MOVE_REL = "m"
    LINE_ABS = "L"
    LINE_REL = "l"
    HLINE_ABS = "H"
    HLINE_REL = "h"
    VLINE_ABS = "V"
    VLINE_REL = "v"
    CUBIC_ABS = "C"
    CUBIC_REL = "c"
    SMOOTH_CUBIC_ABS = "S"
    SMOOTH_CUBIC_REL = "s"
    QUAD_ABS = "Q"
    QUAD_REL = "q"
    SMOOTH_QUAD_ABS = "T"
    SMOOTH_QUAD_REL = "t"
    ARC_ABS = "A"
    ARC_REL = "a"
    CLOSE_ABS = "Z"
    CLOSE_REL = "z"

    @property
    def letter(self) -> str:
        return self.value

    @property
    def is_relative(self) -> bool:
        return self.value.islower()

    @property
    def arity(self) -> int:
        """Number of operands in one group of this command."""
        return OPERAND_COUNTS[self.value.upper()]

    @classmethod
    def from_letter(cls, letter: str) -> "CommandKind":
        return cls(letter)


OPERAND_COUNTS: dict[str, int] = {
    "M": 2,
    "L": 2,
    "H": 1,
    "V": 1,
    "C": 6,
    "S": 4,
    "Q": 4,
    "T": 2,
    "A": 7,
    "Z": 0,
}


@dataclass(frozen=True, slots=True)
class PathCommand:
    """A single path instruction with its operands.

    Attributes:
        kind: Which command this is
        operands: Exactly kind.arity numbers
    """

    kind: CommandKind
    operands: tuple[float, ...] = ()

    @property
    def letter(self) -> str:
        return self.kind.letter

    @property
    def is_relative(self) -> bool:
        return self.kind.is_relative
