"""Win and draw detection.

``evaluate`` is the only place the winning lines are checked. The game uses it
to validate moves and the search uses it to detect terminal positions.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final, TypeAlias, cast

from py_time_travel_ttt.board import Cell, PlayerSymbol

WINNING_LINES: Final[tuple[tuple[int, int, int], ...]] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


@dataclass(frozen=True, slots=True)
class InProgress:
    pass


@dataclass(frozen=True, slots=True)
class Win:
    winner: PlayerSymbol


@dataclass(frozen=True, slots=True)
class Draw:
    pass


Outcome: TypeAlias = InProgress | Win | Draw

IN_PROGRESS: Final = InProgress()
DRAW: Final = Draw()


def winning_line(cells: Sequence[Cell]) -> tuple[int, int, int] | None:
    """Return the first line holding three identical marks, in ``WINNING_LINES`` order."""
    for line in WINNING_LINES:
        a, b, c = line
        if cells[a] is not None and cells[a] == cells[b] == cells[c]:
            return line
    return None


def evaluate(cells: Sequence[Cell]) -> Outcome:
    """Return the outcome of a 9-cell board (a ``Board`` or any sequence laid out the same way)."""
    line = winning_line(cells)
    if line is not None:
        return Win(cast("PlayerSymbol", cells[line[0]]))
    if all(cell is not None for cell in cells):
        return DRAW
    return IN_PROGRESS


def is_terminal(cells: Sequence[Cell]) -> bool:  # noqa: D103
    return not isinstance(evaluate(cells), InProgress)
