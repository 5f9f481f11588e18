from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from ipdr_auth.logging import AuditLog, get_logger, log_event
from ipdr_auth.models import LoginLogEntry, User, new_record_id
from ipdr_auth.models.log import UNKNOWN_USER_ID
from ipdr_auth.storage import DuplicateIdentity, UserStore
from ipdr_auth.utils import validate_registration

from . import passwords
from .errors import (
    AccountDeactivated,
    AccountLocked,
    Conflict,
    InvalidCredentials,
    InvalidToken,
    ValidationError,
    WeakPassword,
)
from .passwords import PasswordHasher, PasswordStrength
from .tokens import TokenPair, TokenService

logger = get_logger("auth")

MAX_FAILED_ATTEMPTS = 5
LOGOUT_MESSAGE = "Logout successful"
UNSUPPORTED_PASSWORD = "Password contains unsupported characters"


@dataclass(frozen=True)
class AuthResult:
    user: User
    tokens: TokenPair

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"user": self.user.sanitized()}
        payload.update(self.tokens.as_dict())
        return payload


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _present(*values: Any) -> bool:
    return all(isinstance(value, str) and value.strip() for value in values)


class AuthService:
    def __init__(
        self,
        store: UserStore,
        audit_log: AuditLog,
        tokens: TokenService,
        hasher: PasswordHasher | None = None,
        max_failed_attempts: int = MAX_FAILED_ATTEMPTS,
    ) -> None:
        self.store = store
        self.audit_log = audit_log
        self.tokens = tokens
        self.hasher = hasher or PasswordHasher()
        self.max_failed_attempts = max_failed_attempts

    def register(
        self,
        username: str,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        ip_address: str | None = None,
        location: str | None = None,
    ) -> AuthResult:
        if not _present(username, email, password, first_name, last_name):
            raise ValidationError("All fields are required")
        if self.store.find_by_username_or_email(username, email) is not None:
            raise Conflict()
        validation = validate_registration(username, email)
        if not validation.passed:
            raise ValidationError(validation.first_error)
        strength = passwords.score(password)
        if not passwords.is_acceptable(strength):
            raise WeakPassword(strength.feedback)

        try:
            password_hash = self.hasher.hash(password)
        except ValueError as exc:
            raise ValidationError(UNSUPPORTED_PASSWORD) from exc

        moment = _utcnow()
        user = User(
            id=new_record_id(),
            username=username,
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            registration_date=moment.isoformat(),
            ip_address=ip_address,
            location=location,
        )
        try:
            self.store.insert(user)
        except DuplicateIdentity as exc:
            raise Conflict() from exc
        self._record(user.id, "register", True, ip_address, location, moment)
        logger.info("Registered user %s (%s)", user.username, user.id)
        return AuthResult(user=user, tokens=self.tokens.issue(user, moment))

    def login(
        self,
        username: str,
        password: str,
        ip_address: str | None = None,
        location: str | None = None,
    ) -> AuthResult:
        if not _present(username) or not isinstance(password, str) or not password:
            raise ValidationError("Username and password are required")

        moment = _utcnow()
        user = self.store.find_by_username(username)
        if user is None:
            self._record(UNKNOWN_USER_ID, "login", False, ip_address, location, moment, reason="User not found")
            raise InvalidCredentials()
        if user.account_locked:
            raise AccountLocked()
        if not user.is_active:
            raise AccountDeactivated()

        if not self.hasher.verify(password, user.password_hash):
            user.failed_login_attempts += 1
            if user.failed_login_attempts >= self.max_failed_attempts:
                user.account_locked = True
                logger.warning("Locked account %s after %d failed attempts", user.id, user.failed_login_attempts)
            self.store.update(user)
            self._record(
                user.id,
                "login",
                False,
                ip_address,
                location,
                moment,
                reason="Invalid password",
                failed_attempts=user.failed_login_attempts,
            )
            raise InvalidCredentials()

        user.failed_login_attempts = 0
        user.last_login = moment.isoformat()
        self.store.update(user)
        self._record(user.id, "login", True, ip_address, location, moment)
        return AuthResult(user=user, tokens=self.tokens.issue(user, moment))

    def refresh(self, refresh_token: str | None) -> str:
        if not refresh_token:
            raise InvalidToken("Refresh token is required")
        try:
            access_token = self.tokens.refresh_access(refresh_token, self.store, _utcnow())
        except InvalidToken as exc:
            log_event("refresh", False, reason="invalid_refresh_token")
            raise InvalidToken("Invalid refresh token") from exc
        log_event("refresh", True)
        return access_token

    def logout(
        self,
        refresh_token: str | None = None,
        ip_address: str | None = None,
        location: str | None = None,
    ) -> str:
        """Acknowledge a logout. The refresh token stays valid until it expires."""
        if refresh_token:
            try:
                claims = self.tokens.verify(refresh_token, "refresh")
            except InvalidToken:
                claims = None
            if claims is not None:
                self._record(str(claims["userId"]), "logout", True, ip_address, location, _utcnow())
        return LOGOUT_MESSAGE

    def me(self, access_token: str | None) -> User:
        if not access_token:
            raise InvalidToken("No token provided")
        claims = self.tokens.verify(access_token, "access")
        user = self.store.find_by_id(str(claims["userId"]))
        if user is None or not user.is_active:
            raise InvalidToken()
        return user

    def logs(self) -> list[LoginLogEntry]:
        # Unauthenticated: every user's audit trail is readable by any caller.
        return self.audit_log.list_all()

    def password_strength(self, password: str) -> PasswordStrength:
        if not isinstance(password, str):
            raise ValidationError("Password is required")
        return passwords.score(password)

    def _record(
        self,
        user_id: str,
        action: str,
        success: bool,
        ip_address: str | None,
        location: str | None,
        moment: datetime,
        reason: str | None = None,
        failed_attempts: int | None = None,
    ) -> LoginLogEntry:
        entry = LoginLogEntry(
            id=new_record_id(),
            user_id=user_id,
            action=action,
            timestamp=moment.isoformat(),
            success=success,
            ip_address=ip_address,
            location=location,
            reason=reason,
            failed_attempts=failed_attempts,
        )
        return self.audit_log.append(entry)
