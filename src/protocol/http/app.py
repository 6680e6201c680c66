from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from ...engine.board import Board
from ...engine.game import Game
from ...engine.move import parse_move
from ...engine.perft import perft as perft_nodes
from ...engine.piece import EMPTY, Piece
from ...search.player import MachinePlayer
from ...search.service import DEFAULT_DEPTH, SearchService
from .session import InMemorySessionStore


logger = logging.getLogger(__name__)

MAX_DEPTH = 6


class CreateGameResponse(BaseModel):
    game_id: str
    layout: str


class SetPositionRequest(BaseModel):
    layout: str = Field(..., description="Rows top to bottom joined by '/', then side to move")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Move text, e.g., c1-c3")


class MoveLimitRequest(BaseModel):
    limit: int = Field(..., ge=1, description="Moves per side before a tie")


class SearchRequest(BaseModel):
    depth: Optional[int] = Field(default=None, ge=1, le=MAX_DEPTH)
    movetime_ms: Optional[int] = Field(default=None, ge=1)


class MachineMoveRequest(BaseModel):
    depth: Optional[int] = Field(default=None, ge=1, le=MAX_DEPTH)


class PerftRequest(BaseModel):
    layout: Optional[str] = None
    depth: int = Field(default=1, ge=0, le=4)


class GameState(BaseModel):
    game_id: str
    layout: str
    turn: str
    legal_moves: List[str]
    game_over: bool
    winner: Optional[str]
    moves_made: int
    move_limit: int = Field(..., description="Moves per side before a tie")
    last_move: Optional[str]
    move_history: List[str]
    board: str


def create_app() -> FastAPI:
    app = FastAPI(title="Lines of Action Engine API", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=logging.INFO)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/games")
    async def list_games() -> Dict[str, List[str]]:
        return {"game_ids": store.ids()}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game() -> CreateGameResponse:
        game_id = store.create(Game.new())
        game = _require_game(store, game_id)
        return CreateGameResponse(game_id=game_id, layout=game.to_layout())

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, str]:
        _require_game(store, game_id)
        store.delete(game_id)
        return {"deleted": game_id}

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _state(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        _require_game(store, game_id)
        try:
            store.set(game_id, Game.from_layout(req.layout))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"invalid layout: {e}")
        return _state(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(store, game_id)
        try:
            move = parse_move(req.move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        try:
            game.apply_move(move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/limit", response_model=GameState)
    async def set_limit(game_id: str, req: MoveLimitRequest) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.board.set_move_limit(req.limit)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/search")
    async def search(game_id: str, req: SearchRequest) -> Dict[str, Any]:
        game = _require_game(store, game_id)
        service = SearchService()
        res = service.search(
            game.board, depth=req.depth or DEFAULT_DEPTH, movetime_ms=req.movetime_ms
        )
        return {
            "best_move": str(res.best_move) if res.best_move else None,
            "score": res.score,
            "nodes": res.nodes,
            "cutoffs": res.cutoffs,
            "depth": res.depth,
            "time_ms": res.time_ms,
        }

    @app.post("/api/games/{game_id}/machine", response_model=GameState)
    async def machine_move(game_id: str, req: MachineMoveRequest) -> GameState:
        game = _require_game(store, game_id)
        if game.game_over():
            raise HTTPException(status_code=409, detail="game is over")
        player = MachinePlayer(game.board.turn(), game, depth=req.depth or DEFAULT_DEPTH)
        try:
            text = player.get_move()
            game.apply_move(game.reported[-1])
        except ValueError as e:
            raise HTTPException(status_code=409, detail=str(e))
        logger.info("machine move", extra={"game_id": game_id, "move": text})
        return _state(game_id, game)

    @app.post("/api/perft")
    async def perft(req: PerftRequest) -> Dict[str, Any]:
        try:
            board = Board.from_layout(req.layout) if req.layout else Board.startpos()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"invalid layout: {e}")
        nodes = perft_nodes(board, req.depth)
        return {"nodes": nodes, "depth": req.depth}

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _state(game_id: str, game: Game) -> GameState:
    board = game.board
    winner = game.winner()
    history = game.move_history_str()
    return GameState(
        game_id=game_id,
        layout=board.to_layout(),
        turn=board.turn().full_name,
        legal_moves=[str(m) for m in game.legal_moves()],
        game_over=winner is not None,
        winner=_winner_name(winner),
        moves_made=board.moves_made(),
        move_limit=board.move_limit // 2,
        last_move=history[-1] if history else None,
        move_history=history,
        board=str(board),
    )


def _winner_name(winner: Optional[Piece]) -> Optional[str]:
    if winner is None:
        return None
    if winner is EMPTY:
        return "tie"
    return winner.full_name


# Default app for non-factory servers
app = create_app()
