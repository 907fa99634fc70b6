"""Path data tokenizer.

Splits an SVG path string into PathCommand instances, one per operand group.

Rules reproduced from the SVG path grammar:
- A command letter followed by several operand groups repeats that command.
- Extra coordinate pairs after M/m are implicit L/l (polyline shorthand).
- Numbers may run together ("1.5.5" is 1.5 and .5, "10-5" is 10 and -5).
- Arc flags are single digits and may be written without separators.

Malformed input degrades instead of failing: a chunk that holds no number
reads as 0.0, an incomplete trailing operand group is dropped, and text before
the first command letter is ignored.
"""

import math
import re

import structlog

from laseroutline.domain import CommandKind, PathCommand

logger = structlog.get_logger(__name__)

COMMAND_LETTERS = "MmLlHhVvCcSsQqTtAaZz"

_SEGMENT_RE = re.compile(rf"([{COMMAND_LETTERS}])([^{COMMAND_LETTERS}]*)")
_CHUNK_RE = re.compile(r"[^\s,]+")
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_FLAG_RE = re.compile(r"\s*,?\s*([01])")

# Operand indices of the two flags inside one arc group
_ARC_FLAG_SLOTS = (3, 4)


def parse_numbers(text: str) -> list[float]:
    """Read every number in an operand string.

    Chunks separated by whitespace or commas are scanned for SVG numbers; a
    chunk with no number at all, or a non-finite value, contributes 0.0.

    Args:
        text: Operand text following a command letter

    Returns:
        List of parsed numbers in order
    """
    values: list[float] = []
    for chunk in _CHUNK_RE.findall(text):
        matches = _NUMBER_RE.findall(chunk)
        if not matches:
            logger.debug("Malformed numeric token", token=chunk)
            values.append(0.0)
            continue
        for match in matches:
            value = float(match)
            if not math.isfinite(value):
                logger.debug("Non-finite numeric token", token=match)
                value = 0.0
            values.append(value)
    return values


def _parse_arc_numbers(text: str) -> list[float]:
    """Read arc operands, where flags are single digits that may be packed."""
    values: list[float] = []
    pos = 0
    length = len(text)
    while pos < length:
        slot = len(values) % 7
        if slot in _ARC_FLAG_SLOTS:
            flag = _FLAG_RE.match(text, pos)
            if flag is not None:
                values.append(float(flag.group(1)))
                pos = flag.end()
                continue
        chunk = _CHUNK_RE.search(text, pos)
        if chunk is None:
            break
        number = _NUMBER_RE.match(chunk.group(0))
        if number is None:
            logger.debug("Malformed numeric token", token=chunk.group(0))
            values.append(0.0)
            pos = chunk.end()
            continue
        value = float(number.group(0))
        values.append(value if math.isfinite(value) else 0.0)
        pos = chunk.start() + number.end()
    return values


def tokenize(path_data: str) -> list[PathCommand]:
    """Tokenize SVG path data into one command per operand group.

    Args:
        path_data: SVG path "d" attribute

    Returns:
        Ordered list of PathCommand instances

    Examples:
        >>> [c.letter for c in tokenize("M0 0 10 0 10 10z")]
        ['M', 'L', 'L', 'z']
    """
    commands: list[PathCommand] = []
    if not path_data:
        return commands

    for letter, operand_text in _SEGMENT_RE.findall(path_data):
        kind = CommandKind.from_letter(letter)
        arity = kind.arity

        if arity == 0:
            commands.append(PathCommand(kind=kind))
            continue

        if letter in "Aa":
            numbers = _parse_arc_numbers(operand_text)
        else:
            numbers = parse_numbers(operand_text)

        group_count = len(numbers) // arity
        if len(numbers) % arity:
            logger.debug(
                "Dropping incomplete operand group",
                command=letter,
                operands=len(numbers),
                arity=arity,
            )

        for i in range(group_count):
            operands = tuple(numbers[i * arity : (i + 1) * arity])
            if i > 0 and kind is CommandKind.MOVE_ABS:
                group_kind = CommandKind.LINE_ABS
            elif i > 0 and kind is CommandKind.MOVE_REL:
                group_kind = CommandKind.LINE_REL
            else:
                group_kind = kind
            commands.append(PathCommand(kind=group_kind, operands=operands))

    return commands
