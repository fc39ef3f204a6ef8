from dataclasses import dataclass

from .game import AccessLevel


@dataclass(frozen=True)
class UserEntry:
    name: str
    secret: str
    role: AccessLevel


@dataclass(frozen=True)
class Credential:
    username: str | None
    secret: str
