"""
Static evaluation data: material values and piece-square tables.

The tables are the classic "simplified evaluation function" grids, written
from White's point of view: row 0 is the eighth rank, row 7 the first rank,
column 0 the a-file. Black uses the same grid with the row index mirrored
(see ``Evaluator.square_value``).

The grids below are module-level tuples and therefore immutable. Every
``Evaluator`` derives its own scaled copy through ``normalized_tables`` so
two engines living in one process never share mutable evaluation state.
"""

from typing import Dict, Mapping, Tuple

import chess

from tactician.errors import ConfigurationError

Table = Tuple[Tuple[int, ...], ...]

PAWN_TABLE: Table = (
    (0,   0,   0,   0,   0,   0,   0,   0),
    (50, 50,  50,  50,  50,  50,  50,  50),
    (10, 10,  20,  30,  30,  20,  10,  10),
    (5,   5,  10,  25,  25,  10,   5,   5),
    (0,   0,   0,  20,  20,   0,   0,   0),
    (5,  -5, -10,   0,   0, -10,  -5,   5),
    (5,  10,  10, -20, -20,  10,  10,   5),
    (0,   0,   0,   0,   0,   0,   0,   0),
)

KNIGHT_TABLE: Table = (
    (-50, -40, -30, -30, -30, -30, -40, -50),
    (-40, -20,   0,   0,   0,   0, -20, -40),
    (-30,   0,  10,  15,  15,  10,   0, -30),
    (-30,   5,  15,  20,  20,  15,   5, -30),
    (-30,   0,  15,  20,  20,  15,   0, -30),
    (-30,   5,  10,  15,  15,  10,   5, -30),
    (-40, -20,   0,   5,   5,   0, -20, -40),
    (-50, -40, -30, -30, -30, -30, -40, -50),
)

BISHOP_TABLE: Table = (
    (-20, -10, -10, -10, -10, -10, -10, -20),
    (-10,   0,   0,   0,   0,   0,   0, -10),
    (-10,   0,   5,  10,  10,   5,   0, -10),
    (-10,   5,   5,  10,  10,   5,   5, -10),
    (-10,   0,  10,  10,  10,  10,   0, -10),
    (-10,  10,  10,  10,  10,  10,  10, -10),
    (-10,   5,   0,   0,   0,   0,   5, -10),
    (-20, -10, -10, -10, -10, -10, -10, -20),
)

ROOK_TABLE: Table = (
    (0,   0,  0,  0,  0,  0,  0,  0),
    (5,  10, 10, 10, 10, 10, 10,  5),
    (-5,  0,  0,  0,  0,  0,  0, -5),
    (-5,  0,  0,  0,  0,  0,  0, -5),
    (-5,  0,  0,  0,  0,  0,  0, -5),
    (-5,  0,  0,  0,  0,  0,  0, -5),
    (-5,  0,  0,  0,  0,  0,  0, -5),
    (0,   0,  0,  5,  5,  0,  0,  0),
)

QUEEN_TABLE: Table = (
    (-20, -10, -10, -5, -5, -10, -10, -20),
    (-10,   0,   0,  0,  0,   0,   0, -10),
    (-10,   0,   5,  5,  5,   5,   0, -10),
    (-5,    0,   5,  5,  5,   5,   0,  -5),
    (0,     0,   5,  5,  5,   5,   0,  -5),
    (-10,   5,   5,  5,  5,   5,   0, -10),
    (-10,   0,   5,  0,  0,   0,   0, -10),
    (-20, -10, -10, -5, -5, -10, -10, -20),
)

KING_MIDDLEGAME_TABLE: Table = (
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-20, -30, -30, -40, -40, -30, -30, -20),
    (-10, -20, -20, -20, -20, -20, -20, -10),
    (20,   20,   0,   0,   0,   0,  20,  20),
    (20,   30,  10,   0,   0,  10,  30,  20),
)

KING_ENDGAME_TABLE: Table = (
    (-50, -40, -30, -20, -20, -30, -40, -50),
    (-30, -20, -10,   0,   0, -10, -20, -30),
    (-30, -10,  20,  30,  30,  20, -10, -30),
    (-30, -10,  30,  40,  40,  30, -10, -30),
    (-30, -10,  30,  40,  40,  30, -10, -30),
    (-30, -10,  20,  30,  30,  20, -10, -30),
    (-30, -30,   0,   0,   0,   0, -30, -30),
    (-50, -30, -30, -30, -30, -30, -30, -50),
)

# Keys every table set must provide. The king has one grid per game phase.
KING_MIDDLEGAME = "KING_MG"
KING_ENDGAME = "KING_EG"
REQUIRED_TABLES = ("PAWN", "KNIGHT", "BISHOP", "ROOK", "QUEEN", KING_MIDDLEGAME, KING_ENDGAME)

BASE_TABLES: Mapping[str, Table] = {
    "PAWN": PAWN_TABLE,
    "KNIGHT": KNIGHT_TABLE,
    "BISHOP": BISHOP_TABLE,
    "ROOK": ROOK_TABLE,
    "QUEEN": QUEEN_TABLE,
    KING_MIDDLEGAME: KING_MIDDLEGAME_TABLE,
    KING_ENDGAME: KING_ENDGAME_TABLE,
}

# Piece kinds whose per-side counts are tracked by the evaluator.
TRACKED_PIECES = (chess.KNIGHT, chess.BISHOP, chess.ROOK, chess.QUEEN)


def piece_key(piece_type: int) -> str:
    """python-chess piece type -> config key, e.g. chess.KNIGHT -> "KNIGHT"."""
    return chess.piece_name(piece_type).upper()


def normalized_tables(factor: float, base: Mapping[str, Table] = BASE_TABLES) -> Dict[str, Table]:
    """Return a fresh, scaled copy of ``base``.

    Raises ConfigurationError if a required grid is missing or is not 8x8.
    """
    tables: Dict[str, Table] = {}
    for key in REQUIRED_TABLES:
        grid = base.get(key)
        if grid is None:
            raise ConfigurationError(f"missing piece-square table for {key}")
        if len(grid) != 8 or any(len(row) != 8 for row in grid):
            raise ConfigurationError(f"piece-square table for {key} is not 8x8")
        tables[key] = tuple(tuple(int(round(v * factor)) for v in row) for row in grid)
    return tables
