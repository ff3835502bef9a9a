"""Board wrapper over python-chess: the rules adapter used by the search.

python-chess owns legality, terminal-state detection, FEN and PGN. This
class exposes exactly what the evaluator and search consume: verbose move
descriptors, matched apply/undo, and the draw/checkmate predicates.
"""

from typing import List, Optional

import chess
import chess.pgn

from tactician.core.move import Move


class ChessBoard:
    def __init__(self, fen: Optional[str] = None):
        """Initialize from FEN or the standard starting position."""
        self.board = chess.Board(fen) if fen else chess.Board()
        self._history: List[Move] = []

    def reset(self):
        """Reset to the initial position."""
        self.board.reset()
        self._history.clear()

    def set_fen(self, fen: str):
        """Set board state from a FEN string. Raises ValueError on bad FEN."""
        self.board.set_fen(fen)
        self._history.clear()

    def get_fen(self) -> str:
        """Return the current FEN."""
        return self.board.fen()

    to_fen = get_fen

    @property
    def turn(self) -> bool:
        """True when White is to move."""
        return self.board.turn == chess.WHITE

    # -- move generation -------------------------------------------------

    def legal_moves(self, verbose: bool = True, captures_only: bool = False) -> List[Move]:
        """Legal moves as descriptors, in python-chess generation order."""
        source = self.board.generate_legal_captures() if captures_only else self.board.legal_moves
        return [Move.from_board(self.board, m, verbose) for m in source]

    def get_legal_moves(self) -> List[str]:
        """Return legal moves as UCI strings."""
        return [m.uci() for m in self.board.legal_moves]

    # -- apply / undo ----------------------------------------------------

    def apply(self, move) -> Optional[Move]:
        """Play a Move descriptor or chess.Move. Returns None if illegal."""
        raw = move.uci_move if isinstance(move, Move) else move
        if raw not in self.board.legal_moves:
            return None
        record = move if isinstance(move, Move) else Move.from_board(self.board, raw)
        self.board.push(raw)
        self._history.append(record)
        return record

    def make_move(self, move_str: str) -> bool:
        """Push a UCI move (e.g. 'e2e4'). Returns True if legal."""
        try:
            move = chess.Move.from_uci(move_str)
        except ValueError:
            return False
        return self.apply(move) is not None

    def undo(self):
        """Pop the last move; a no-op on an empty history."""
        if self.board.move_stack:
            self.board.pop()
            if self._history:
                self._history.pop()

    undo_move = undo

    def move_history(self) -> List[Move]:
        """Moves played through this adapter, oldest first."""
        return list(self._history)

    # -- terminal states -------------------------------------------------

    def is_checkmate(self) -> bool:
        return self.board.is_checkmate()

    def is_stalemate(self) -> bool:
        return self.board.is_stalemate()

    def is_insufficient_material(self) -> bool:
        return self.board.is_insufficient_material()

    def is_threefold_repetition(self) -> bool:
        return self.board.is_repetition(3)

    def is_fifty_moves(self) -> bool:
        return self.board.is_fifty_moves()

    def is_draw(self) -> bool:
        """Stalemate, insufficient material, fifty-move rule or threefold repetition."""
        return (
            self.is_stalemate()
            or self.is_insufficient_material()
            or self.is_fifty_moves()
            or self.is_threefold_repetition()
        )

    def is_game_over(self) -> bool:
        """Check if the game has ended."""
        return self.is_checkmate() or self.is_draw()

    def result(self) -> str:
        """PGN result string: "1-0", "0-1", "1/2-1/2" or "*"."""
        if self.is_checkmate():
            return "0-1" if self.turn else "1-0"
        if self.is_draw():
            return "1/2-1/2"
        return "*"

    # -- serialization ---------------------------------------------------

    def to_pgn(self) -> str:
        """Movetext of the game so far."""
        game = chess.pgn.Game.from_board(self.board)
        game.headers["Result"] = self.result()
        return str(game)

    def print_board(self):
        """Print ASCII representation."""
        print(self.board)
