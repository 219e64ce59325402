import logging
from collections.abc import Callable

from py_time_travel_ttt.board import Board, PlayerSymbol
from py_time_travel_ttt.exception import GameError, LogicError
from py_time_travel_ttt.game import Game, HistoryLabel, Mode, Status

logger = logging.getLogger(__name__)


class GameEngine:
    """Front door for the UIs.

    Forwards requests to the ``Game``. A rejected request leaves the game
    untouched, is reported to the error callbacks and returns ``False``; an
    accepted one notifies the board-updated callbacks and returns ``True``.
    ``LogicError`` means the engine itself is inconsistent and is not caught.
    """

    def __init__(self, ai_side: PlayerSymbol = "O") -> None:
        self._game = Game(ai_side)
        self._board_updated_cbs: list[Callable[[], None]] = []
        self._on_error_cbs: list[Callable[[Exception], None]] = []

    @property
    def game(self) -> Game:
        return self._game

    def add_board_updated_cb(self, callback: Callable[[], None]) -> None:
        self._board_updated_cbs.append(callback)

    def add_on_error_cb(self, callback: Callable[[Exception], None]) -> None:
        self._on_error_cbs.append(callback)

    def start(self) -> None:
        """Render the initial state."""
        self._notify_board_updated()

    def get_current_board(self) -> Board:  # noqa: D102
        return self._game.current_board

    def get_status(self) -> Status:  # noqa: D102
        return self._game.status

    def get_history_labels(self) -> list[HistoryLabel]:  # noqa: D102
        return self._game.history_labels

    def choose_mode(self, mode: Mode) -> bool:  # noqa: D102
        return self._run("choose_mode", lambda: self._game.choose_mode(mode))

    def request_move(self, index: int) -> bool:  # noqa: D102
        return self._run("request_move", lambda: self._game.request_move(index))

    def play_computer_turn(self) -> bool:  # noqa: D102
        return self._run("play_computer_turn", self._game.play_computer_turn)

    def jump_to(self, move_index: int) -> bool:  # noqa: D102
        return self._run("jump_to", lambda: self._game.jump_to(move_index))

    def reset(self) -> bool:  # noqa: D102
        return self._run("reset", self._game.reset)

    def _run(self, name: str, action: Callable[[], None]) -> bool:
        try:
            action()
        except LogicError:
            # Serious logic error, let it propagate.
            raise
        except GameError as e:
            logger.warning("%s rejected: %s", name, e)
            self._notify_on_error(e)
            return False

        self._notify_board_updated()
        return True

    def _notify_board_updated(self) -> None:
        for callback in list(self._board_updated_cbs):
            callback()

    def _notify_on_error(self, exception: Exception) -> None:
        """Notify error callbacks when a request is rejected."""
        for callback in list(self._on_error_cbs):
            callback(exception)
