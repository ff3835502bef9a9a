"""Move ordering for alpha-beta pruning.

Moves are sorted into tiers; Python's sort is stable, so moves that tie
keep the order the rules adapter generated them in:

    0. promotions
    1. captures, highest material gain first
       (gain = victim value - attacker value, i.e. MVV-LVA)
    2. checking moves
    3. everything else
"""

from typing import Mapping, Optional, Sequence, List, Tuple

import chess

from tactician.config import CONFIG
from tactician.core.move import Move
from tactician.core.tables import piece_key


def _default_values() -> Mapping[int, int]:
    return {pt: CONFIG.eval.value_of(piece_key(pt)) for pt in chess.PIECE_TYPES}


def capture_gain(move: Move, values: Mapping[int, int]) -> int:
    return values[move.captured] - values[move.piece]


def order_moves(moves: Sequence[Move], values: Optional[Mapping[int, int]] = None) -> List[Move]:
    """Return a reordered copy of ``moves``; the input is left untouched."""
    values = values or _default_values()

    def tier(move: Move) -> Tuple[int, int]:
        if move.is_promotion:
            return (0, 0)
        if move.is_capture:
            return (1, -capture_gain(move, values))
        if move.is_check:
            return (2, 0)
        return (3, 0)

    return sorted(moves, key=tier)
