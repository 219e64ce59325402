import argparse
import logging
from typing import TYPE_CHECKING, Final

from py_time_travel_ttt.game_engine import GameEngine
from py_time_travel_ttt.ui_terminal import TerminalUi

if TYPE_CHECKING:
    from py_time_travel_ttt.ui import Ui

LOG_FORMAT: Final = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _create_ui(name: str, game_engine: GameEngine) -> "Ui":
    match name:
        case "terminal":
            return TerminalUi(game_engine)
        case "pygame":
            # Imported lazily so the terminal UI runs without a display.
            from py_time_travel_ttt.ui_pygame import PygameUi  # noqa: PLC0415

            return PygameUi(game_engine)
        case _:
            msg = f"Unknown UI: {name}. Choose from 'terminal', 'pygame'."
            raise ValueError(msg)


def main() -> None:
    args = _parse_args()

    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    game_engine = GameEngine(ai_side=args.ai_side)
    ui = _create_ui(args.ui, game_engine)

    if args.mode is not None:
        game_engine.choose_mode(args.mode)

    ui.run()


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="py-time-travel-ttt", description="Tic-tac-toe with time travel.")

    parser.add_argument("--ui", choices=("terminal", "pygame"), required=True)
    parser.add_argument("--mode", choices=("single-player", "multiplayer"))
    parser.add_argument("--ai-side", choices=("X", "O"), default="O", help="side the computer plays in single-player")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
    )

    return parser.parse_args(argv)


if __name__ == "__main__":
    main()
