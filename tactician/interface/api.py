"""FastAPI REST interface for the engine."""

import logging
import threading
from dataclasses import replace
from typing import Optional

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from tactician import configure_logging
from tactician.config import CONFIG
from tactician.core.search import SearchEngine
from tactician.errors import TacticianError
from tactician.main import Engine

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

# Shared game: one board and one incremental evaluator across requests.
engine = Engine()
_board_lock = threading.Lock()


class FenRequest(BaseModel):
    fen: str


class MoveRequest(BaseModel):
    move: str  # UCI format e.g. "e2e4"


class SearchRequest(BaseModel):
    depth: Optional[int] = None
    use_alpha_beta: Optional[bool] = None
    use_quiescence: Optional[bool] = None
    use_move_ordering: Optional[bool] = None

    @field_validator("depth")
    @classmethod
    def depth_positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("depth must be >= 1")
        return v


def _state():
    board = engine.board
    return {
        "fen": board.get_fen(),
        "turn": "white" if board.turn else "black",
        "legal_moves": board.get_legal_moves(),
        "is_game_over": board.is_game_over(),
        "result": board.result() if board.is_game_over() else None,
        "eval": engine.evaluator.current_eval(),
    }


@app.get("/board")
def get_board():
    with _board_lock:
        return _state()


@app.post("/position")
def set_position(req: FenRequest):
    with _board_lock:
        try:
            engine.set_fen(req.fen)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"Invalid FEN: {e}")
        return {"fen": engine.board.get_fen(), "eval": engine.evaluator.current_eval()}


@app.post("/move")
def make_move(req: MoveRequest):
    with _board_lock:
        try:
            chess.Move.from_uci(req.move)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid UCI move: {req.move}")
        if not engine.make_move(req.move):
            raise HTTPException(status_code=400, detail=f"Illegal move: {req.move}")
        engine.log_move("Player")
        return {"fen": engine.board.get_fen(), "move": req.move,
                "eval": engine.evaluator.current_eval()}


@app.post("/search")
def search_move(req: SearchRequest = SearchRequest()):
    with _board_lock:
        if engine.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        overrides = {k: v for k, v in req.model_dump().items() if v is not None}
        overrides["engine_is_white"] = engine.board.turn
        try:
            config = replace(engine.config, **overrides)
            searcher = SearchEngine(engine.board, engine.evaluator, config)
            best = searcher.choose_move()
        except TacticianError as e:
            logger.error("search failed: %s", e)
            raise HTTPException(status_code=500, detail=e.message)
        return {
            "best_move": best.uci() if best else None,
            "san": best.san if best else None,
            "score": searcher.stats.best_score,
            "nodes": searcher.stats.nodes,
            "fen": engine.board.get_fen(),
        }


@app.post("/reset")
def reset_board():
    with _board_lock:
        engine.reset()
        return {"fen": engine.board.get_fen()}
