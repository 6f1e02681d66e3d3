"""FastAPI REST interface for the engine."""

import threading

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

from calmtac import __version__
from calmtac.config import CONFIG
from calmtac.core.board import Outcome, SYMBOLS
from calmtac.main import Game

app = FastAPI(title=CONFIG.ui.app_name, version=__version__)

# Shared game instance; the lock serializes access to its board.
game = Game(depth=CONFIG.search.depth)
_game_lock = threading.Lock()


class MoveRequest(BaseModel):
    index: int  # 0-8, row*3 + col


class SearchRequest(BaseModel):
    depth: Optional[int] = None


class DifficultyRequest(BaseModel):
    depth: int


def _board_state():
    outcome = game.outcome()
    return {
        "cells": game.board.cells,
        "board": str(game.board).split("\n"),
        "turn": SYMBOLS[game.human] if game.player_turn else SYMBOLS[game.engine],
        "empty_cells": game.board.empty_cells(),
        "history": game.board.history,
        "outcome": outcome.value,
        "is_game_over": outcome != Outcome.IN_PROGRESS,
        "status": game.status(),
        "difficulty": game.difficulty,
    }


@app.get("/board")
def get_board():
    with _game_lock:
        return _board_state()


@app.post("/move")
def make_move(req: MoveRequest):
    with _game_lock:
        if game.board.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        if not game.player_turn:
            raise HTTPException(status_code=400, detail="Not your turn")
        if not game.human_move(req.index):
            raise HTTPException(status_code=400, detail=f"Illegal move: {req.index}")
        return {"move": req.index, **_board_state()}


@app.post("/search")
def search_move(req: SearchRequest = SearchRequest()):
    with _game_lock:
        if game.board.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        if game.player_turn:
            raise HTTPException(status_code=400, detail="Not the engine's turn")
        depth = req.depth or game.difficulty
        move, score = game.search.search_best_move(game.board, depth)
        game.play_engine_move(move)
        return {"best_move": move, "score": score, "depth": depth, **_board_state()}


@app.post("/undo")
def undo_move():
    with _game_lock:
        if not game.take_back():
            raise HTTPException(status_code=400, detail="Nothing to undo")
        return _board_state()


@app.post("/difficulty")
def set_difficulty(req: DifficultyRequest):
    with _game_lock:
        game.set_difficulty(req.depth)
        return {"difficulty": game.difficulty}


@app.post("/reset")
def reset_board():
    with _game_lock:
        game.restart()
        return _board_state()
