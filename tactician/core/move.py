"""Immutable move descriptor handed from the rules adapter to the search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import chess


@dataclass(frozen=True)
class Move:
    """A legal move plus everything the evaluator and orderer need to know.

    Piece kinds are python-chess piece types (``chess.PAWN`` .. ``chess.KING``).
    ``captured`` is the kind taken by the move (a pawn for en passant) and
    ``promotion`` the kind promoted to; both are ``None`` when absent.
    """

    uci_move: chess.Move
    piece: int
    captured: Optional[int] = None
    promotion: Optional[int] = None
    san: str = ""

    @classmethod
    def from_board(cls, board: chess.Board, move: chess.Move, verbose: bool = True) -> "Move":
        """Describe ``move`` in the context of ``board`` (the position before it)."""
        moving = board.piece_at(move.from_square)
        if moving is None:
            raise ValueError(f"no piece on {chess.square_name(move.from_square)} for {move.uci()}")
        captured = None
        if board.is_en_passant(move):
            captured = chess.PAWN
        else:
            victim = board.piece_at(move.to_square)
            # castling in chess960 encodings lands on the own rook
            if victim is not None and victim.color != moving.color:
                captured = victim.piece_type
        return cls(
            uci_move=move,
            piece=moving.piece_type,
            captured=captured,
            promotion=move.promotion,
            san=board.san(move) if verbose else "",
        )

    @property
    def from_square(self) -> int:
        return self.uci_move.from_square

    @property
    def to_square(self) -> int:
        return self.uci_move.to_square

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_promotion(self) -> bool:
        return self.promotion is not None

    @property
    def is_check(self) -> bool:
        return self.san.endswith(("+", "#"))

    @property
    def is_mate(self) -> bool:
        return self.san.endswith("#")

    def uci(self) -> str:
        return self.uci_move.uci()

    def __str__(self) -> str:
        return self.san or self.uci()
