from fastapi import APIRouter, Depends

from app.models import GameTurn
from models import AccessLevel
from routes.games import get_store
from services.roles import require_level
from services.store import GameStore

router = APIRouter(tags=["admin"], dependencies=[Depends(require_level(AccessLevel.ADMIN))])


@router.get("/admin/state", response_model=dict[str, GameTurn])
def admin_state(store: GameStore = Depends(get_store)) -> dict[str, GameTurn]:
    """Point-in-time copy of every live game."""
    return {game_id: GameTurn.from_record(record) for game_id, record in store.snapshot().items()}


@router.get("/admin/reset", response_model=dict[str, GameTurn])
def admin_reset(store: GameStore = Depends(get_store)) -> dict[str, GameTurn]:
    store.clear()
    return {}
