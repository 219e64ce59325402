from abc import ABC, abstractmethod

from py_time_travel_ttt.game import HistoryLabel, Status
from py_time_travel_ttt.game_engine import GameEngine
from py_time_travel_ttt.outcome import Draw, InProgress, Win


def status_text(status: Status) -> str:  # noqa: D103
    match status.outcome:
        case Win(winner=winner):
            return f"Winner: {winner}"
        case Draw():
            return "Draw"
        case InProgress():
            return f"Next player: {status.side_to_move}"


def history_label_text(label: HistoryLabel) -> str:  # noqa: D103
    if label.is_start:
        return "Go to game start"
    return f"Go to move #{label.move_index}"


class Ui(ABC):
    def __init__(self, game_engine: GameEngine) -> None:
        self._game_engine = game_engine
        self._running = False
        self._game_engine.add_board_updated_cb(self.on_board_updated)
        self._game_engine.add_on_error_cb(self.on_error)

    @property
    def running(self) -> bool:
        return self._running

    def run(self) -> None:
        self._running = True
        self._game_engine.start()

    def _stop(self) -> None:
        self._running = False

    def on_board_updated(self) -> None:
        if not self._running:
            return
        self._render_board()
        game = self._game_engine.game
        if game.is_started:
            self._show_status(status_text(game.status))

    def on_error(self, exception: Exception) -> None:
        if not self._running:
            return
        self._on_input_error(exception)

    @abstractmethod
    def _render_board(self) -> None:
        pass

    @abstractmethod
    def _show_status(self, message: str) -> None:
        pass

    @abstractmethod
    def _on_input_error(self, exception: Exception) -> None:
        pass
