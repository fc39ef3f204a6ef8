from .game import AccessLevel, Coordinate, TurnRecord
from .user import Credential, UserEntry

__all__ = [
    "AccessLevel",
    "Coordinate",
    "TurnRecord",
    "Credential",
    "UserEntry",
]
