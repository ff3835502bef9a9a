"""Core engine components: board adapter, evaluator, move ordering and search."""

from .board import ChessBoard
from .move import Move
from .evaluator import Evaluator, EvalState
from .ordering import order_moves
from .search import SearchEngine, SearchStats, MinimaxStrategy, AlphaBetaStrategy
