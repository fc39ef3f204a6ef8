"""Game relay API: clients poll and post the latest move for a game id."""

import logging

from fastapi import APIRouter, Depends, Request

from app.models import GameCreateResponse, GameReply, GameTurn
from models import AccessLevel
from services.id_allocator import allocate_id
from services.roles import require_level
from services.store import GameStore

router = APIRouter(tags=["games"])
logger = logging.getLogger(__name__)


def get_store(request: Request) -> GameStore:
    return request.app.state.store


@router.post(
    "/game",
    response_model=GameCreateResponse,
    status_code=201,
    dependencies=[Depends(require_level(AccessLevel.USER))],
)
def create_game(store: GameStore = Depends(get_store)) -> GameCreateResponse:
    """Reserve a fresh game id. Both players then use it with GET/POST /game/{id}."""
    game_id = allocate_id(store)
    logger.info("[games] Game created: game_id=%s", game_id)
    return GameCreateResponse(game_id=game_id, join_url=f"/game/{game_id}")


@router.get(
    "/game/{game_id}",
    response_model=GameReply,
    dependencies=[Depends(require_level(AccessLevel.USER))],
)
def read_game(game_id: str, store: GameStore = Depends(get_store)) -> GameReply:
    """Latest turn for ``game_id``; ``data`` is null until someone has posted."""
    record = store.get(game_id)
    data = GameTurn.from_record(record) if record is not None else None
    return GameReply(success=True, data=data)


@router.post(
    "/game/{game_id}",
    response_model=GameReply,
    dependencies=[Depends(require_level(AccessLevel.USER))],
)
def write_game(game_id: str, payload: GameTurn, store: GameStore = Depends(get_store)) -> GameReply:
    stored = store.put(game_id, payload.to_record())
    logger.info("[games] Turn posted: game_id=%s turn=%d", game_id, stored.turn)
    return GameReply(success=True, data=GameTurn.from_record(stored))
