"""Application settings, read from the environment (and backend/.env)."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from models import AccessLevel, UserEntry

logger = logging.getLogger(__name__)

# The two secrets the relay has always shipped with.
DEFAULT_USERS = "client:s3cr3t:user,admin:ag3nt:admin"

_ROLE_NAMES = {
    "user": AccessLevel.USER,
    "admin": AccessLevel.ADMIN,
}


@dataclass(frozen=True)
class Settings:
    users: tuple[UserEntry, ...] = ()
    game_expiry_seconds: float | None = None
    sweep_interval_seconds: float | None = None
    allowed_origins: tuple[str, ...] = ("*",)


def parse_users(raw: str) -> tuple[UserEntry, ...]:
    """Parse ``name:secret:role`` entries separated by commas."""
    users = []
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        parts = entry.split(":")
        if len(parts) != 3 or not parts[0] or not parts[1]:
            raise ValueError(f"RELAY_USERS entry must be name:secret:role, got {entry!r}")
        name, secret, role_name = parts
        role = _ROLE_NAMES.get(role_name.strip().lower())
        if role is None:
            raise ValueError(f"RELAY_USERS role must be one of {list(_ROLE_NAMES)}, got {role_name!r}")
        users.append(UserEntry(name=name.strip(), secret=secret, role=role))
    return tuple(users)


def _optional_seconds(name: str) -> float | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _origins(raw: str) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def load_settings() -> Settings:
    load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))
    settings = Settings(
        users=parse_users(os.environ.get("RELAY_USERS", DEFAULT_USERS)),
        game_expiry_seconds=_optional_seconds("RELAY_GAME_EXPIRY_SECONDS"),
        sweep_interval_seconds=_optional_seconds("RELAY_SWEEP_INTERVAL_SECONDS"),
        allowed_origins=_origins(os.environ.get("ALLOWED_ORIGINS", "*")),
    )
    logger.info(
        "[config] %d user(s) configured, expiry=%s interval=%s",
        len(settings.users),
        settings.game_expiry_seconds,
        settings.sweep_interval_seconds,
    )
    return settings


@lru_cache
def get_settings() -> Settings:
    return load_settings()
