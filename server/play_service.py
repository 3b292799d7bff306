"""REST service to play Whot! against the engine and its bots."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from bots.baseline_greedy import GreedyBot
from whot.cards import Shape
from whot.config import EngineSettings, load_settings
from whot.errors import GameError
from whot.game import GameMode
from whot.service import GameService, SessionView

logger = logging.getLogger(__name__)

ERROR_STATUS: Dict[str, int] = {
    "not_found": 404,
    "already_terminal": 409,
    "wrong_turn": 409,
}


class StartRequest(BaseModel):
    participant_ids: Optional[List[str]] = None
    mode: GameMode = GameMode.PRACTICE
    perspective: Optional[str] = None
    seed: Optional[int] = None


class PlayRequest(BaseModel):
    participant_id: str = Field(..., min_length=1)
    card_uid: str = Field(..., min_length=1)
    requested_shape: Optional[Shape] = None


class DrawRequest(BaseModel):
    participant_id: str = Field(..., min_length=1)


class BotTurnRequest(BaseModel):
    bot_id: Optional[str] = None
    perspective: Optional[str] = None


def serialize_view(view: SessionView) -> Dict[str, object]:
    return asdict(view)


def create_app(service: Optional[GameService] = None, settings: Optional[EngineSettings] = None) -> FastAPI:
    settings = settings or (service.settings if service else load_settings())
    service = service or GameService(settings=settings)
    logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    opponent = GreedyBot()

    app = FastAPI(title="Whot! Play Service")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.service = service

    @app.exception_handler(GameError)
    def handle_game_error(request: Request, exc: GameError) -> JSONResponse:
        logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc)
        status = ERROR_STATUS.get(exc.code, 400)
        return JSONResponse(status_code=status, content={"code": exc.code, "detail": str(exc)})

    @app.exception_handler(ValueError)
    def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"code": "bad_request", "detail": str(exc)})

    @app.post("/session/start")
    def start_session(request: StartRequest) -> Dict[str, object]:
        view = service.start_session(
            request.participant_ids,
            request.mode,
            seed=request.seed,
            perspective=request.perspective,
        )
        return {"session_id": view.session_id, "state": serialize_view(view)}

    @app.get("/session/{session_id}")
    def get_session(session_id: str, perspective: Optional[str] = None) -> Dict[str, object]:
        return {"state": serialize_view(service.get_session_view(session_id, perspective))}

    @app.post("/session/{session_id}/play")
    def play_card(session_id: str, request: PlayRequest) -> Dict[str, object]:
        view = service.play_card(session_id, request.participant_id, request.card_uid, request.requested_shape)
        return {"state": serialize_view(view)}

    @app.post("/session/{session_id}/draw")
    def draw_card(session_id: str, request: DrawRequest) -> Dict[str, object]:
        view = service.draw_card(session_id, request.participant_id)
        return {"state": serialize_view(view)}

    @app.post("/session/{session_id}/ai-turn")
    def ai_turn(session_id: str, request: BotTurnRequest) -> Dict[str, object]:
        bot_id = request.bot_id or settings.practice_bot_id
        view = service.run_bot_turns(session_id, bot_id, opponent, perspective=request.perspective)
        return {"state": serialize_view(view)}

    return app


app = create_app()
