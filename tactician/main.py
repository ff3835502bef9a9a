import logging
from dataclasses import replace
from typing import Optional, Tuple

from tactician.config import CONFIG, SearchConfig
from tactician.core.board import ChessBoard
from tactician.core.evaluator import Evaluator
from tactician.core.move import Move
from tactician.core.search import SearchEngine
from tactician.core.utils import format_move_log

logger = logging.getLogger(__name__)


class Engine:
    """Glue between a game front-end and the search.

    Owns the board, one evaluator and one search engine. Every move that
    reaches the board, human or computer, also goes through
    ``Evaluator.update`` so the running score tracks the game.
    """

    def __init__(self, depth: Optional[int] = None,
                 use_alpha_beta: Optional[bool] = None,
                 use_quiescence: Optional[bool] = None,
                 use_move_ordering: Optional[bool] = None,
                 engine_is_white: Optional[bool] = None,
                 fen: Optional[str] = None):
        overrides = {
            "depth": depth,
            "use_alpha_beta": use_alpha_beta,
            "use_quiescence": use_quiescence,
            "use_move_ordering": use_move_ordering,
            "engine_is_white": engine_is_white,
        }
        self.config: SearchConfig = replace(
            CONFIG.search, **{k: v for k, v in overrides.items() if v is not None}
        )
        self.board = ChessBoard(fen)
        self.evaluator = Evaluator(self.board)
        self.search = SearchEngine(self.board, self.evaluator, self.config)

    @property
    def is_white(self) -> bool:
        return self.config.engine_is_white

    def make_move(self, move_uci: str) -> bool:
        """Play a human move given in UCI. Returns False if it is illegal."""
        white = self.board.turn
        if not self.board.make_move(move_uci):
            return False
        self.evaluator.update(self.board.move_history()[-1], white)
        return True

    def computer_move(self) -> Optional[Move]:
        """Let the engine pick and play its move. None if the game is over."""
        if self.board.is_game_over():
            return None
        move = self.search.choose_move(self.is_white)
        self.board.apply(move)
        self.evaluator.update(move, self.is_white)
        return move

    def get_best_move(self) -> Tuple[Optional[str], Optional[str], Optional[int]]:
        """Best move for the side on move, without playing it: (uci, san, score)."""
        move = self.search.choose_move(self.board.turn)
        if move is None:
            return None, None, self.evaluator.current_eval()
        return move.uci(), move.san, self.search.stats.best_score

    def set_fen(self, fen: str):
        self.board.set_fen(fen)
        self.evaluator.reset()

    def reset(self):
        self.board.reset()
        self.evaluator.reset()

    def is_game_over(self) -> bool:
        return self.board.is_game_over()

    def result(self) -> str:
        return self.board.result()

    def log_move(self, player: str):
        history = self.board.move_history()
        last = history[-1].san if history else None
        logger.info(format_move_log(player, last, self.evaluator.current_eval(),
                                    self.evaluator.piece_counts(copy=False)))

    def print_board(self):
        self.board.print_board()
