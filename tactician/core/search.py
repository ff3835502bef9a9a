"""
Move selection: full-width minimax or negamax alpha-beta, with an optional
capture-only quiescence extension.

All searching happens on the single shared ChessBoard. Every child is
visited through ``SearchEngine._play`` which snapshots the evaluator,
applies the move, updates the evaluation, and on every way out of the
block (normal return, beta cutoff, exception) undoes the move and restores
the snapshot. Board, score and piece counts are therefore identical before
and after each child.

Score conventions:
    minimax      scores are White-relative (White maximizes, Black minimizes)
    alpha-beta   scores are relative to the side to move at that node
    quiescence   relative to the side to move (negamax form)
"""

import logging
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from tactician.config import CONFIG, SearchConfig
from tactician.core.board import ChessBoard
from tactician.core.evaluator import Evaluator
from tactician.core.move import Move
from tactician.core.ordering import order_moves
from tactician.core.utils import format_info
from tactician.errors import SearchError, SearchInvariantError

logger = logging.getLogger(__name__)

INF = 1000000


@dataclass
class SearchStats:
    nodes: int = 0
    q_nodes: int = 0
    cutoffs: int = 0
    delta_prunes: int = 0
    elapsed: float = 0.0
    best_score: Optional[int] = None  # White-relative


class SearchStrategy(ABC):
    name = "abstract"

    def __init__(self, engine: "SearchEngine"):
        self.engine = engine

    @abstractmethod
    def select(self, white: bool, depth: int) -> Tuple[Optional[Move], int]:
        """Root entry: best move for ``white`` and its White-relative score."""

    @abstractmethod
    def score(self, white: bool, depth: int, alpha: int, beta: int) -> int:
        """Interior entry: score of the current position."""


class MinimaxStrategy(SearchStrategy):
    name = "minimax"

    def select(self, white, depth):
        engine = self.engine
        best_move = None
        best_eval = -INF if white else INF
        for move in engine._expand(white):
            with engine._play(move, white):
                move_eval = engine.score_node(not white, depth - 1)
            # strict comparison: the first move seen wins ties
            if (white and move_eval > best_eval) or (not white and move_eval < best_eval):
                best_eval = move_eval
                best_move = move
        return best_move, best_eval

    def score(self, white, depth, alpha, beta):
        engine = self.engine
        evaluator = engine.evaluator
        if depth == 0:
            if engine.config.use_quiescence:
                sign = 1 if white else -1
                return sign * engine.quiescence(white, -INF, INF)
            return evaluator.current_eval()
        if engine.board.is_game_over():
            return evaluator.current_eval()

        best_eval = -INF if white else INF
        for move in engine._expand(white):
            with engine._play(move, white):
                move_eval = engine.score_node(not white, depth - 1)
            if (white and move_eval > best_eval) or (not white and move_eval < best_eval):
                best_eval = move_eval
        return best_eval


class AlphaBetaStrategy(SearchStrategy):
    name = "alphabeta"

    def select(self, white, depth):
        engine = self.engine
        alpha, beta = -INF, INF
        best_move = None
        for move in engine._expand(white):
            with engine._play(move, white):
                # negate and swap the window for the opponent
                score = -engine.score_node(not white, depth - 1, -beta, -alpha)
            if score > alpha:
                alpha = score
                best_move = move
        return best_move, alpha if white else -alpha

    def score(self, white, depth, alpha, beta):
        engine = self.engine
        evaluator = engine.evaluator
        if depth == 0:
            if engine.config.use_quiescence:
                return engine.quiescence(white, alpha, beta)
            return evaluator.current_eval(relative=True, white=white)
        if engine.board.is_game_over():
            return evaluator.current_eval(relative=True, white=white)

        for move in engine._expand(white):
            with engine._play(move, white):
                score = -engine.score_node(not white, depth - 1, -beta, -alpha)
            if score >= beta:
                engine.stats.cutoffs += 1
                return beta  # fail hard
            if score > alpha:
                alpha = score
        return alpha


class SearchEngine:
    def __init__(
        self,
        board: ChessBoard,
        evaluator: Optional[Evaluator] = None,
        config: Optional[SearchConfig] = None,
    ):
        self.board = board
        self.evaluator = evaluator or Evaluator(board)
        self.config = config or CONFIG.search
        strategy_cls = AlphaBetaStrategy if self.config.use_alpha_beta else MinimaxStrategy
        self.strategy: SearchStrategy = strategy_cls(self)
        self.big_delta = self.evaluator.cfg.delta_margin
        self.stats = SearchStats()

    @property
    def max_depth(self) -> int:
        return self.config.depth

    def choose_move(self, white: Optional[bool] = None) -> Optional[Move]:
        """Search the current position and return the best move for ``white``.

        ``white`` defaults to the side the engine plays. Returns None if the
        game is already over; the board and evaluator are left unchanged.
        """
        if white is None:
            white = self.config.engine_is_white
        if self.board.is_game_over():
            return None
        if white != self.board.turn:
            raise SearchError(
                "asked to move for the side that is not on move",
                {"white": white, "fen": self.board.get_fen()},
            )

        self.stats = SearchStats()
        start = time.perf_counter()
        best_move, best_score = self.strategy.select(white, self.config.depth)
        self.stats.elapsed = time.perf_counter() - start
        self.stats.best_score = best_score

        logger.info(format_info(self.config.depth, best_score, self.stats.nodes,
                                self.stats.elapsed, best_move,
                                self.stats.q_nodes, self.stats.cutoffs))
        return best_move

    def score_node(self, white: bool, depth: int, alpha: int = -INF, beta: int = INF) -> int:
        """Score the current position with ``depth`` plies left for ``white``."""
        self.stats.nodes += 1
        return self.strategy.score(white, depth, alpha, beta)

    def quiescence(self, white: bool, alpha: int, beta: int, q_depth: int = 0) -> int:
        """Capture-only search, relative to ``white``, fail-hard."""
        self.stats.nodes += 1
        self.stats.q_nodes += 1

        # standing pat: the side to move may decline every capture
        stand_pat = self.evaluator.current_eval(relative=True, white=white)
        if stand_pat >= beta:
            return beta
        # even winning a queen would not lift this line above alpha
        if stand_pat < alpha - self.big_delta:
            self.stats.delta_prunes += 1
            return alpha
        if stand_pat > alpha:
            alpha = stand_pat

        if q_depth >= self.config.q_max_depth:
            return stand_pat

        captures = self._expand(white, captures_only=True, allow_empty=True)
        if not captures:
            return stand_pat

        for move in captures:
            with self._play(move, white):
                score = -self.quiescence(not white, -beta, -alpha, q_depth + 1)
            if score >= beta:
                self.stats.cutoffs += 1
                return beta
            if score > alpha:
                alpha = score
        return alpha

    # -- shared traversal plumbing ----------------------------------------

    def _expand(self, white: bool, captures_only: bool = False, allow_empty: bool = False) -> List[Move]:
        moves = self.board.legal_moves(verbose=True, captures_only=captures_only)
        if not moves and not allow_empty:
            raise SearchInvariantError(
                "no legal moves in a position the rules adapter considers live",
                {"white": white, "fen": self.board.get_fen()},
            )
        if self.config.use_move_ordering:
            moves = order_moves(moves, self.evaluator.values)
        return moves

    @contextmanager
    def _play(self, move: Move, white: bool) -> Iterator[None]:
        state = self.evaluator.snapshot()
        if self.board.apply(move) is None:
            raise SearchError("rules adapter rejected its own move", {"move": move.uci()})
        try:
            self.evaluator.update(move, white)
            yield
        finally:
            self.board.undo()
            self.evaluator.restore(state)
