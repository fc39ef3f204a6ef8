"""Random game ids that never collide with a live game."""

import logging
import secrets
from typing import Callable

from services.errors import AllocatorExhausted
from services.store import GameStore

logger = logging.getLogger(__name__)

# token_urlsafe(6) -> 8 URL-safe characters
_GAME_ID_BYTES = 6
MAX_ATTEMPTS = 100


def generate_game_id() -> str:
    return secrets.token_urlsafe(_GAME_ID_BYTES)


def allocate_id(
    store: GameStore,
    *,
    max_attempts: int = MAX_ATTEMPTS,
    generator: Callable[[], str] = generate_game_id,
) -> str:
    """
    Reserve and return a game id that is not in ``store``.

    The id is claimed with an empty record in the same step as the membership
    check, so two concurrent callers can never receive the same id.
    Raises AllocatorExhausted after ``max_attempts`` collisions.
    """
    for attempt in range(1, max_attempts + 1):
        game_id = generator()
        if store.reserve(game_id):
            return game_id
        logger.warning("[id_allocator] Collision on %r (attempt %d/%d)", game_id, attempt, max_attempts)
    raise AllocatorExhausted(max_attempts)
