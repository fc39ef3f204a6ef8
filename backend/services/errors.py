"""Exceptions raised by the relay core. Absent games are ``None``, not errors."""

from models import AccessLevel


class RelayError(Exception):
    pass


class Unauthorized(RelayError):
    def __init__(self, required: AccessLevel, actual: AccessLevel) -> None:
        super().__init__(f"access level {actual.name} is below required {required.name}")
        self.required = required
        self.actual = actual


class AllocatorExhausted(RelayError):
    def __init__(self, attempts: int) -> None:
        super().__init__(f"no free game id after {attempts} attempts")
        self.attempts = attempts
