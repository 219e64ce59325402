from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

import pygame

from py_time_travel_ttt.board import BOARD_SIZE, Board
from py_time_travel_ttt.game_engine import GameEngine
from py_time_travel_ttt.outcome import winning_line
from py_time_travel_ttt.ui import Ui, history_label_text


@dataclass(frozen=True, slots=True)
class _Button:
    rect: pygame.Rect
    label: str
    action: Callable[[], None]
    highlighted: bool = False


class PygameUi(Ui):
    TITLE: Final = "Tic-Tac-Toe (Pygame)"
    BOARD_PIXELS: Final = 480
    CELL_SIZE: Final = BOARD_PIXELS // BOARD_SIZE
    PANEL_WIDTH: Final = 260
    STATUS_HEIGHT: Final = 60
    WINDOW_SIZE: Final = (BOARD_PIXELS + PANEL_WIDTH, BOARD_PIXELS + STATUS_HEIGHT)
    LINE_WIDTH: Final = 4
    BUTTON_HEIGHT: Final = 32
    BUTTON_MARGIN: Final = 8

    BG_COLOR: Final = (0, 0, 0)
    LINE_COLOR: Final = (127, 127, 127)
    WIN_LINE_COLOR: Final = (63, 191, 63)
    X_COLOR: Final = (191, 63, 63)
    O_COLOR: Final = (63, 63, 191)
    TEXT_COLOR: Final = (255, 255, 255)
    ERROR_COLOR: Final = (255, 127, 127)
    BUTTON_COLOR: Final = (63, 63, 63)
    BUTTON_ACTIVE_COLOR: Final = (95, 95, 159)

    def __init__(self, game_engine: GameEngine) -> None:
        super().__init__(game_engine)
        self._board = self._game_engine.game.current_board
        self._status = ""
        self._error = ""
        self._buttons: list[_Button] = []

    def run(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode(self.WINDOW_SIZE)
        pygame.display.set_caption(self.TITLE)

        self._font = pygame.font.SysFont(None, 96)
        self._small_font = pygame.font.SysFont(None, 36)
        self._button_font = pygame.font.SysFont(None, 24)

        super().run()
        self._main_loop()

    def _main_loop(self) -> None:
        clock = pygame.time.Clock()
        while self._running:
            clock.tick(30)
            self._handle_events()
            self._render()
        pygame.quit()

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            match event.type:
                case pygame.QUIT:
                    self._stop()
                case pygame.MOUSEBUTTONDOWN if event.button == 1:
                    self._on_click(event.pos)

    def _on_click(self, pos: tuple[int, int]) -> None:
        for button in self._buttons:
            if button.rect.collidepoint(pos):
                button.action()
                return

        x, y = pos
        if not (0 <= x < self.BOARD_PIXELS and 0 <= y < self.BOARD_PIXELS):
            return
        if not self._game_engine.game.is_started:
            return
        row, col = y // self.CELL_SIZE, x // self.CELL_SIZE
        self._game_engine.request_move(row * BOARD_SIZE + col)

    def _render_board(self) -> None:
        self._board = self._game_engine.game.current_board
        self._error = ""
        self._status = "" if self._game_engine.game.is_started else "Choose a mode"
        self._buttons = self._layout_buttons()

    def _show_status(self, message: str) -> None:
        self._status = message

    def _on_input_error(self, exception: Exception) -> None:
        self._error = str(exception)

    def _layout_buttons(self) -> list[_Button]:
        game = self._game_engine.game
        engine = self._game_engine
        entries: list[tuple[str, Callable[[], None], bool]] = []

        if not game.is_started:
            entries.append(("Single Player", lambda: engine.choose_mode("single-player"), False))
            entries.append(("Multiplayer", lambda: engine.choose_mode("multiplayer"), False))
        else:
            entries.append(("Start Over", engine.reset, False))
            if game.is_computer_turn():
                entries.append(("Computer Move", engine.play_computer_turn, False))
            for label in game.history_labels:
                entries.append(
                    (
                        history_label_text(label),
                        lambda move_index=label.move_index: engine.jump_to(move_index),
                        label.move_index == game.pointer,
                    ),
                )

        left = self.BOARD_PIXELS + self.BUTTON_MARGIN
        width = self.PANEL_WIDTH - 2 * self.BUTTON_MARGIN
        buttons = []
        for i, (text, action, highlighted) in enumerate(entries):
            top = self.BUTTON_MARGIN + i * (self.BUTTON_HEIGHT + self.BUTTON_MARGIN // 2)
            rect = pygame.Rect(left, top, width, self.BUTTON_HEIGHT)
            buttons.append(_Button(rect, text, action, highlighted))
        return buttons

    def _render(self) -> None:
        self._screen.fill(self.BG_COLOR)
        self._draw_grid()
        self._draw_marks(self._board)
        self._draw_winning_line(self._board)
        self._draw_buttons()
        self._draw_status()
        pygame.display.flip()

    def _draw_grid(self) -> None:
        for i in range(1, BOARD_SIZE):
            pygame.draw.line(
                self._screen,
                self.LINE_COLOR,
                (0, i * self.CELL_SIZE),
                (self.BOARD_PIXELS, i * self.CELL_SIZE),
                self.LINE_WIDTH,
            )
            pygame.draw.line(
                self._screen,
                self.LINE_COLOR,
                (i * self.CELL_SIZE, 0),
                (i * self.CELL_SIZE, self.BOARD_PIXELS),
                self.LINE_WIDTH,
            )

    def _cell_center(self, index: int) -> tuple[int, int]:
        row, col = divmod(index, BOARD_SIZE)
        return col * self.CELL_SIZE + self.CELL_SIZE // 2, row * self.CELL_SIZE + self.CELL_SIZE // 2

    def _draw_marks(self, board: Board) -> None:
        for index, value in enumerate(board):
            if value is None:
                continue
            text = self._font.render(value, True, self.X_COLOR if value == "X" else self.O_COLOR)  # noqa: FBT003
            rect = text.get_rect(center=self._cell_center(index))
            self._screen.blit(text, rect)

    def _draw_winning_line(self, board: Board) -> None:
        line = winning_line(board)
        if line is None:
            return
        pygame.draw.line(
            self._screen,
            self.WIN_LINE_COLOR,
            self._cell_center(line[0]),
            self._cell_center(line[-1]),
            self.LINE_WIDTH * 2,
        )

    def _draw_buttons(self) -> None:
        for button in self._buttons:
            color = self.BUTTON_ACTIVE_COLOR if button.highlighted else self.BUTTON_COLOR
            pygame.draw.rect(self._screen, color, button.rect)
            text = self._button_font.render(button.label, True, self.TEXT_COLOR)  # noqa: FBT003
            self._screen.blit(text, text.get_rect(center=button.rect.center))

    def _draw_status(self) -> None:
        message, color = (self._error, self.ERROR_COLOR) if self._error else (self._status, self.TEXT_COLOR)
        if not message:
            return
        text = self._small_font.render(message, True, color)  # noqa: FBT003
        rect = text.get_rect(center=(self.WINDOW_SIZE[0] // 2, self.BOARD_PIXELS + self.STATUS_HEIGHT // 2))
        self._screen.blit(text, rect)
