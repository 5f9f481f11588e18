from __future__ import annotations

from typing import Sequence


class AuthError(Exception):
    """Domain error carrying the HTTP status and the message shown to clients."""

    status_code = 400
    message = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(AuthError):
    status_code = 400
    message = "All fields are required"


class Conflict(AuthError):
    status_code = 409
    message = "Username or email already exists"


class InvalidCredentials(AuthError):
    status_code = 401
    message = "Invalid username or password"


class AccountLocked(AuthError):
    status_code = 403
    message = "Account is locked due to too many failed attempts"


class AccountDeactivated(AuthError):
    status_code = 403
    message = "Account is deactivated"


class WeakPassword(AuthError):
    status_code = 400
    message = "Password is too weak"

    def __init__(self, feedback: Sequence[str], message: str | None = None) -> None:
        super().__init__(message)
        self.feedback = list(feedback)

    def to_dict(self) -> dict:
        return {"error": self.message, "feedback": self.feedback}


class InvalidToken(AuthError):
    status_code = 401
    message = "Invalid token"
