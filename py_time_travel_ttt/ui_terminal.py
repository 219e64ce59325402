# ruff: noqa: T201

from typing import Final

from py_time_travel_ttt.board import CELL_COUNT
from py_time_travel_ttt.game_engine import GameEngine
from py_time_travel_ttt.ui import Ui, history_label_text

HELP: Final = (
    "Commands: 1-9 play a cell | j N go to move N | h list moves | "
    "c let the computer move | r start over | exit"
)


class TerminalUi(Ui):
    def __init__(self, game_engine: GameEngine) -> None:
        super().__init__(game_engine)

    def run(self) -> None:
        super().run()
        while self._running:
            self._prompt()
            self._get_input()
        print("Terminal UI stopped", flush=True)

    def _prompt(self) -> None:
        if not self._game_engine.game.is_started:
            print("Choose a mode: [s]ingle player or [m]ultiplayer: ", end="", flush=True)
        else:
            print("> ", end="", flush=True)

    def _get_input(self) -> None:
        try:
            input_str = input().strip()
        except (KeyboardInterrupt, EOFError):
            self._stop()
            return

        if input_str == "exit":
            self._stop()
            return

        self._handle_command(input_str)

    def _handle_command(self, command: str) -> None:
        game = self._game_engine.game

        if not game.is_started:
            match command:
                case "s":
                    self._game_engine.choose_mode("single-player")
                case "m":
                    self._game_engine.choose_mode("multiplayer")
                case _:
                    self._on_input_error(ValueError("Type 's' or 'm'"))
            return

        match command.split():
            case ["h"]:
                self._show_history()
            case ["r"]:
                self._game_engine.reset()
            case ["c"]:
                self._game_engine.play_computer_turn()
            case ["j", move]:
                try:
                    move_index = int(move)
                except ValueError:
                    self._on_input_error(ValueError("Not an integer"))
                    return
                self._game_engine.jump_to(move_index)
            case [cell]:
                try:
                    board_position = int(cell)
                except ValueError:
                    self._on_input_error(ValueError(HELP))
                    return
                if not (1 <= board_position <= CELL_COUNT):
                    self._on_input_error(ValueError(f"Not between 1 and {CELL_COUNT}"))
                    return
                self._game_engine.request_move(board_position - 1)
            case _:
                self._on_input_error(ValueError(HELP))

    def _show_history(self) -> None:
        game = self._game_engine.game
        for label in game.history_labels:
            marker = "*" if label.move_index == game.pointer else " "
            print(f"{marker} {label.move_index}: {history_label_text(label)}", flush=True)

    def _render_board(self) -> None:
        game = self._game_engine.game
        if not game.is_started:
            print(HELP, flush=True)
            return

        board = game.current_board

        def _cell_value(index: int) -> str:
            value = board[index]
            return value if value is not None else str(index + 1)

        rows = []
        for r, row in enumerate(board.rows()):
            start = r * len(row)
            line = " | ".join(_cell_value(start + i) for i in range(len(row)))
            rows.append(f" {line} ")

        separator = "\n-----------\n"
        output = separator.join(rows)
        print(f"\n{output}\n", flush=True)

    def _show_status(self, message: str) -> None:
        game = self._game_engine.game
        if game.pointer < len(game.history) - 1:
            message = f"{message} (viewing move #{game.pointer}, {len(game.history) - 1} played)"
        print(message, flush=True)

    def _on_input_error(self, exception: Exception) -> None:
        print(str(exception), flush=True)
