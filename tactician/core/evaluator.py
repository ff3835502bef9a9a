"""Incremental evaluator: material + piece-square activity + game phase.

Unlike a static evaluator that rescans the board at every leaf, this one
keeps a running score and per-side piece counts and adjusts them by the
delta of each move as the search plays it. The score is always stored
from White's point of view; callers that want the side-to-move view ask
for it via ``current_eval(relative=True, white=...)``.

The search is responsible for undoing changes: it takes a ``snapshot()``
before applying a move and ``restore()``s it afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

import chess

from tactician.config import CONFIG, EvalConfig
from tactician.core.board import ChessBoard
from tactician.core.move import Move
from tactician.core.tables import (
    BASE_TABLES,
    KING_ENDGAME,
    KING_MIDDLEGAME,
    TRACKED_PIECES,
    Table,
    normalized_tables,
    piece_key,
)

WHITE_IDX = 0
BLACK_IDX = 1

PieceCounts = Dict[int, List[int]]


@dataclass(frozen=True)
class EvalState:
    """Value snapshot of the evaluator: white-relative score and piece counts."""

    score: int
    counts: Tuple[Tuple[int, int, int], ...]  # (piece_type, white, black)

    @classmethod
    def capture(cls, score: int, counts: PieceCounts) -> "EvalState":
        return cls(score, tuple((pt, c[WHITE_IDX], c[BLACK_IDX]) for pt, c in sorted(counts.items())))

    def piece_counts(self) -> PieceCounts:
        return {pt: [w, b] for pt, w, b in self.counts}


def _side(white: bool) -> int:
    return WHITE_IDX if white else BLACK_IDX


class Evaluator:
    def __init__(
        self,
        board: ChessBoard,
        config: Optional[EvalConfig] = None,
        tables: Optional[Mapping[str, Table]] = None,
    ):
        self.board = board
        self.cfg = config or CONFIG.eval
        # Each instance owns its scaled tables; the base tables stay untouched.
        self.tables = normalized_tables(self.cfg.activity_factor, BASE_TABLES if tables is None else tables)
        self.values = {pt: self.cfg.value_of(piece_key(pt)) for pt in chess.PIECE_TYPES}
        self._score = 0
        self._counts: PieceCounts = {pt: [0, 0] for pt in TRACKED_PIECES}
        self.reset()

    # -- snapshot / restore primitives ----------------------------------

    def current_eval(self, relative: bool = False, white: bool = True) -> int:
        """White-relative score, or side-relative when ``relative`` is set."""
        if relative and not white:
            return -self._score
        return self._score

    def set_eval(self, value: int):
        self._score = value

    def piece_counts(self, copy: bool = True) -> PieceCounts:
        """Counts per tracked kind as ``[white, black]``; ``copy`` returns a deep copy."""
        if copy:
            return {pt: list(c) for pt, c in self._counts.items()}
        return self._counts

    def set_piece_counts(self, counts: PieceCounts):
        self._counts = {pt: list(c) for pt, c in counts.items()}

    def snapshot(self) -> EvalState:
        return EvalState.capture(self._score, self._counts)

    def restore(self, state: EvalState):
        self._score = state.score
        self._counts = state.piece_counts()

    # -- static initialisation ------------------------------------------

    def reset(self) -> int:
        """Recompute score and counts from scratch for the adapter's position."""
        board = self.board.board
        self._counts = {
            pt: [len(board.pieces(pt, chess.WHITE)), len(board.pieces(pt, chess.BLACK))]
            for pt in TRACKED_PIECES
        }
        score = 0
        for sq, piece in board.piece_map().items():
            white = piece.color == chess.WHITE
            value = self.square_value(piece.piece_type, sq, white)
            if piece.piece_type != chess.KING:
                value += self.values[piece.piece_type]
            score += value if white else -value
        self._score = score
        return score

    # -- incremental update ---------------------------------------------

    def update(self, move: Move, white: bool) -> int:
        """Fold ``move`` (already played on the board by ``white``) into the score."""
        if self.is_draw():
            self._score = 0
            return self._score

        if self.board.is_checkmate():
            king = self.values[chess.KING]
            self._score = king if white else -king
            return self._score

        delta = self.activity_gain(move, white)

        if move.promotion:
            delta += self.values[move.promotion]
            self._counts[move.promotion][_side(white)] += 1

        if move.captured:
            delta += self.values[move.captured]
            if move.captured != chess.PAWN:
                self._counts[move.captured][_side(not white)] -= 1
            # the captured piece loses whatever its square was worth to its owner
            delta += self.square_value(move.captured, move.to_square, not white)

        if white:
            self._score += delta
        else:
            self._score -= delta
        return self._score

    def activity_gain(self, move: Move, white: bool) -> int:
        return (self.square_value(move.piece, move.to_square, white)
                - self.square_value(move.piece, move.from_square, white))

    def square_value(self, piece_type: int, square: int, white: bool) -> int:
        """Positional value of ``piece_type`` on ``square`` for the given side."""
        if piece_type == chess.KING:
            table = self.tables[KING_ENDGAME if self.is_endgame() else KING_MIDDLEGAME]
        else:
            table = self.tables[piece_key(piece_type)]
        row = chess.square_rank(square)
        col = chess.square_file(square)
        if white:
            return table[7 - row][col]
        # mirrored for black
        return table[row][col]

    # -- phase / terminal ------------------------------------------------

    def is_endgame(self) -> bool:
        """No queens, or every side with a queen has at most one other piece."""
        for side in (WHITE_IDX, BLACK_IDX):
            if self._counts[chess.QUEEN][side] > 0:
                others = sum(self._counts[pt][side] for pt in TRACKED_PIECES if pt != chess.QUEEN)
                if others > 1:
                    return False
        return True

    def is_draw(self) -> bool:
        return self.board.is_draw()
