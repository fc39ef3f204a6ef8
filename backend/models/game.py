from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import IntEnum


class AccessLevel(IntEnum):
    """Authorization rank attached to a request.

    Ordering matters: checks are ``level >= required``, so ADMIN satisfies
    everything USER does.
    """

    GUEST = 0
    USER = 1
    ADMIN = 2


@dataclass(frozen=True)
class Coordinate:
    row: int = 0
    col: int = 0


@dataclass
class TurnRecord:
    from_: Coordinate = field(default_factory=Coordinate)
    to: Coordinate = field(default_factory=Coordinate)
    turn: int = 0                          # caller-supplied, never checked
    updated_at: datetime | None = None     # stamped by GameStore.put

    def copy(self) -> "TurnRecord":
        return replace(self)
