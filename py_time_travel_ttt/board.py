from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Final, Literal, TypeAlias, overload

from py_time_travel_ttt.exception import IllegalMoveError

BOARD_SIZE: Final = 3
CELL_COUNT: Final = BOARD_SIZE * BOARD_SIZE
PlayerSymbol: TypeAlias = Literal["X", "O"]
Cell: TypeAlias = PlayerSymbol | None


def opponent(side: PlayerSymbol) -> PlayerSymbol:  # noqa: D103
    return "O" if side == "X" else "X"


@dataclass(frozen=True, slots=True)
class Board(Sequence[Cell]):
    """Immutable 3x3 grid, cells indexed 0-8 in row-major order."""

    cells: tuple[Cell, ...] = (None,) * CELL_COUNT

    def __post_init__(self) -> None:
        if len(self.cells) != CELL_COUNT:
            msg = f"Board must have {CELL_COUNT} cells, got {len(self.cells)}."
            raise ValueError(msg)
        for cell in self.cells:
            if cell not in (None, "X", "O"):
                msg = f"Invalid cell value: {cell!r}."
                raise ValueError(msg)

    @classmethod
    def empty(cls) -> "Board":  # noqa: D102
        return cls()

    @overload
    def __getitem__(self, index: int) -> Cell: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Cell, ...]: ...

    def __getitem__(self, index: int | slice) -> Cell | tuple[Cell, ...]:
        return self.cells[index]

    def __len__(self) -> int:
        return CELL_COUNT

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def apply(self, index: int, side: PlayerSymbol) -> "Board":
        """Return a new board with ``side`` placed at ``index``. The board itself is left untouched."""
        if isinstance(index, bool) or not isinstance(index, int) or not (0 <= index < CELL_COUNT):
            msg = f"Move out of bounds: {index}."
            raise IllegalMoveError(msg)

        if self.cells[index] is not None:
            raise IllegalMoveError("Cell occupied.")

        cells = list(self.cells)
        cells[index] = side
        return Board(tuple(cells))

    def is_full(self) -> bool:  # noqa: D102
        return all(cell is not None for cell in self.cells)

    def available_positions(self) -> list[int]:  # noqa: D102
        return [index for index, cell in enumerate(self.cells) if cell is None]

    def rows(self) -> list[tuple[Cell, ...]]:  # noqa: D102
        return [self.cells[r * BOARD_SIZE : (r + 1) * BOARD_SIZE] for r in range(BOARD_SIZE)]


def apply(board: Board, index: int, side: PlayerSymbol) -> Board:  # noqa: D103
    return board.apply(index, side)


def is_full(board: Board) -> bool:  # noqa: D103
    return board.is_full()
