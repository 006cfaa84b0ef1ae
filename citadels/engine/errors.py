"""Errors raised by the game engine.

Every error carries a short code and a user-facing message. The engine raises
them before mutating anything, so a caught error always leaves the game in the
state it was in before the call.
"""

from typing import Optional


class GameError(Exception):
    """Base exception for game-related errors."""

    code = "GAME_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code or self.code
        self.message = message
        super().__init__(f"[{self.code}] {message}")


class InvalidIndex(GameError):
    """A hand or player index is out of bounds."""

    code = "INVALID_INDEX"


class PreconditionViolation(GameError):
    """An action was attempted at the wrong time (out of turn, twice, ...)."""

    code = "PRECONDITION_VIOLATION"


class UnknownRole(GameError):
    """A name that is not one of the eight roles."""

    code = "UNKNOWN_ROLE"


class RoleUnavailable(GameError):
    """A real role that has already left the selection pool."""

    code = "ROLE_UNAVAILABLE"


class PersistenceError(GameError):
    """A save file could not be written, read or understood."""

    code = "PERSISTENCE_ERROR"
