from .errors import (
    AccountDeactivated,
    AccountLocked,
    AuthError,
    Conflict,
    InvalidCredentials,
    InvalidToken,
    ValidationError,
    WeakPassword,
)
from .passwords import PasswordHasher, PasswordStrength, score
from .service import AuthResult, AuthService
from .tokens import TokenPair, TokenService

__all__ = [
    "AccountDeactivated",
    "AccountLocked",
    "AuthError",
    "AuthResult",
    "AuthService",
    "Conflict",
    "InvalidCredentials",
    "InvalidToken",
    "PasswordHasher",
    "PasswordStrength",
    "TokenPair",
    "TokenService",
    "ValidationError",
    "WeakPassword",
    "score",
]
