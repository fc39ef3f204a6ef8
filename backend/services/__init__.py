from .errors import AllocatorExhausted, RelayError, Unauthorized
from .id_allocator import allocate_id
from .roles import resolve_role
from .store import GameStore
from .sweeper import ExpirySweeper, start_sweeper

__all__ = [
    "GameStore",
    "allocate_id",
    "resolve_role",
    "start_sweeper",
    "ExpirySweeper",
    "RelayError",
    "Unauthorized",
    "AllocatorExhausted",
]
