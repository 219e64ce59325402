import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Final, Literal, TypeAlias

from py_time_travel_ttt.board import Board, PlayerSymbol
from py_time_travel_ttt.exception import IllegalMoveError, ModeError, OutOfRangeError
from py_time_travel_ttt.outcome import InProgress, Outcome, evaluate
from py_time_travel_ttt.search import best_move

logger = logging.getLogger(__name__)

Mode: TypeAlias = Literal["undetermined", "single-player", "multiplayer"]

PLAYABLE_MODES: Final[tuple[Mode, ...]] = ("single-player", "multiplayer")


@dataclass(frozen=True, slots=True)
class Status:
    outcome: Outcome
    side_to_move: PlayerSymbol


@dataclass(frozen=True, slots=True)
class HistoryLabel:
    move_index: int
    is_start: bool


class Game:
    """Move history, current position and mode of one tic-tac-toe session.

    Every accepted move (human or computer) goes through the same
    truncate-append-advance step: history beyond the current pointer is
    dropped, the new board is appended and the pointer moves to it. The side
    to move is derived from the pointer, so it cannot drift from the history.
    """

    def __init__(self, ai_side: PlayerSymbol = "O") -> None:
        if ai_side not in ("X", "O"):
            msg = f"Unknown computer side: {ai_side!r}. Choose from 'X', 'O'."
            raise ValueError(msg)
        self._ai_side: PlayerSymbol = ai_side
        self._history: list[Board] = [Board.empty()]
        self._pointer = 0
        self._mode: Mode = "undetermined"
        self._lock = threading.Lock()

    @property
    def ai_side(self) -> PlayerSymbol:
        return self._ai_side

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def is_started(self) -> bool:
        return self._mode != "undetermined"

    @property
    def pointer(self) -> int:
        return self._pointer

    @property
    def history(self) -> tuple[Board, ...]:
        return tuple(self._history)

    @property
    def current_board(self) -> Board:
        return self._history[self._pointer]

    @property
    def side_to_move(self) -> PlayerSymbol:
        return "X" if self._pointer % 2 == 0 else "O"

    @property
    def outcome(self) -> Outcome:
        return evaluate(self.current_board)

    @property
    def status(self) -> Status:
        return Status(self.outcome, self.side_to_move)

    @property
    def history_labels(self) -> list[HistoryLabel]:
        return [HistoryLabel(move_index, move_index == 0) for move_index in range(len(self._history))]

    def get_current_board(self) -> Board:  # noqa: D102
        return self.current_board

    def get_status(self) -> Status:  # noqa: D102
        return self.status

    def get_history_labels(self) -> list[HistoryLabel]:  # noqa: D102
        return self.history_labels

    def is_computer_turn(self) -> bool:  # noqa: D102
        return self._mode == "single-player" and self.side_to_move == self._ai_side

    def choose_mode(self, mode: Mode) -> None:
        """Start the session in ``mode``. The computer opens if it plays X in single player."""
        if mode not in PLAYABLE_MODES:
            msg = f"Unknown mode: {mode!r}. Choose from {', '.join(PLAYABLE_MODES)}."
            raise ModeError(msg)

        with self._mutation():
            if self.is_started:
                msg = f"Mode already chosen: {self._mode}."
                raise ModeError(msg)

            self._mode = mode
            logger.info("Mode chosen: %s (computer plays %s)", mode, self._ai_side)
            self._play_computer_moves()

    def request_move(self, index: int) -> None:
        """Play ``index`` for the human whose turn it is, then let the computer answer if needed."""
        with self._mutation():
            if not self.is_started:
                raise IllegalMoveError("Game not started.")
            if not isinstance(self.outcome, InProgress):
                raise IllegalMoveError("Game over.")
            if self.is_computer_turn():
                raise IllegalMoveError("Not your turn.")

            self._advance(self.current_board.apply(index, self.side_to_move))
            self._play_computer_moves()

    def play_computer_turn(self) -> None:
        """Let the computer move from the current snapshot (e.g. after jumping back to one of its turns)."""
        with self._mutation():
            if self._mode != "single-player":
                raise IllegalMoveError("No computer player in this mode.")
            if not isinstance(self.outcome, InProgress):
                raise IllegalMoveError("Game over.")
            if not self.is_computer_turn():
                raise IllegalMoveError("Not the computer's turn.")

            self._play_computer_moves()

    def jump_to(self, move_index: int) -> None:
        """Point at an earlier (or later) snapshot. History is kept until the next accepted move."""
        with self._mutation():
            last_index = len(self._history) - 1
            if isinstance(move_index, bool) or not isinstance(move_index, int) or not (0 <= move_index <= last_index):
                msg = f"Move index {move_index} out of range 0-{last_index}."
                raise OutOfRangeError(msg)

            self._pointer = move_index
            logger.debug("Jumped to move %d of %d", move_index, len(self._history) - 1)

    def reset(self) -> None:  # noqa: D102
        with self._mutation():
            self._history = [Board.empty()]
            self._pointer = 0
            self._mode = "undetermined"
            logger.info("Game reset")

    @contextmanager
    def _mutation(self) -> Iterator[None]:
        # One mutation at a time; a request arriving mid-search is rejected, not queued.
        if not self._lock.acquire(blocking=False):
            raise IllegalMoveError("Computer move pending.")
        try:
            yield
        finally:
            self._lock.release()

    def _advance(self, board: Board) -> None:
        del self._history[self._pointer + 1 :]
        self._history.append(board)
        self._pointer = len(self._history) - 1
        logger.debug("Move %d accepted: %s", self._pointer, "".join(cell or "." for cell in board))

    def _play_computer_moves(self) -> None:
        while self.is_computer_turn() and isinstance(self.outcome, InProgress):
            index = best_move(self.current_board, self.side_to_move, self._ai_side)
            logger.debug("Computer (%s) plays %d", self._ai_side, index)
            self._advance(self.current_board.apply(index, self.side_to_move))

    def __repr__(self) -> str:
        return (
            f"Game(mode={self._mode!r}, ai_side={self._ai_side!r}, "
            f"pointer={self._pointer}, history_length={len(self._history)})"
        )
