"""Exhaustive minimax search for the computer's move.

The search always runs to terminal positions (no depth limit, no heuristic), so
the side it plays for never loses. Moves are explored in ascending index order
and the first move reaching the best score is kept, which makes the choice
deterministic for a given position.
"""

import logging
from collections.abc import Sequence
from typing import Final

from py_time_travel_ttt.board import Board, Cell, PlayerSymbol, opponent
from py_time_travel_ttt.exception import NoLegalMovesError
from py_time_travel_ttt.outcome import Draw, Win, evaluate, is_terminal

logger = logging.getLogger(__name__)

WIN_SCORE: Final = 1
LOSS_SCORE: Final = -1
DRAW_SCORE: Final = 0


class _Search:
    def __init__(self, ai_side: PlayerSymbol) -> None:
        self._ai_side = ai_side
        self.positions_evaluated = 0

    def minimax(self, cells: list[Cell], side: PlayerSymbol) -> tuple[int, int | None]:
        self.positions_evaluated += 1

        match evaluate(cells):
            case Win(winner=winner):
                return (WIN_SCORE if winner == self._ai_side else LOSS_SCORE), None
            case Draw():
                return DRAW_SCORE, None

        is_maximizing = side == self._ai_side
        best_score = LOSS_SCORE - 1 if is_maximizing else WIN_SCORE + 1
        best_index: int | None = None

        for index, cell in enumerate(cells):
            if cell is not None:
                continue
            # Tentative mark on the shared scratch board, reverted before the next sibling
            cells[index] = side
            score, _ = self.minimax(cells, opponent(side))
            cells[index] = None

            if (score > best_score) if is_maximizing else (score < best_score):
                best_score = score
                best_index = index

        return best_score, best_index


def minimax(cells: Sequence[Cell], side: PlayerSymbol, ai_side: PlayerSymbol) -> tuple[int, int | None]:
    """Score ``cells`` with ``side`` to move, from ``ai_side``'s point of view.

    Returns ``(score, index)`` where ``score`` is +1 (AI wins), -1 (AI loses) or 0
    (draw) under optimal play, and ``index`` is the chosen cell, or ``None`` for a
    terminal position. ``cells`` is copied, never modified.
    """
    return _Search(ai_side).minimax(list(cells), side)


def best_move(board: Board, side_to_move: PlayerSymbol, ai_side: PlayerSymbol) -> int:
    """Return the optimal cell index for ``side_to_move``.

    Raises:
        NoLegalMovesError: ``board`` is already won or drawn.
    """
    if is_terminal(board):
        msg = f"No legal moves for {side_to_move}: board is terminal."
        raise NoLegalMovesError(msg)

    search = _Search(ai_side)
    score, index = search.minimax(list(board), side_to_move)
    if index is None:
        msg = f"Search found no move for {side_to_move} on a non-terminal board."
        raise NoLegalMovesError(msg)

    logger.debug(
        "Search for %s evaluated %d positions: best move %d (score %d)",
        side_to_move,
        search.positions_evaluated,
        index,
        score,
    )
    return index
