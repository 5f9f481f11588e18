from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import jwt

from ipdr_auth.models import User

from .errors import InvalidToken

if TYPE_CHECKING:
    from ipdr_auth.storage import UserStore

ALGORITHM = "HS256"
ACCESS_TOKEN_TTL = timedelta(minutes=15)
REFRESH_TOKEN_TTL = timedelta(days=7)
CLAIM_NAMES = ("userId", "username", "email", "role")
TOKEN_KINDS = ("access", "refresh")


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str

    def as_dict(self) -> dict:
        return {"accessToken": self.access_token, "refreshToken": self.refresh_token}


def user_claims(user: User) -> dict:
    return {"userId": user.id, "username": user.username, "email": user.email, "role": user.role}


class TokenService:
    """Signs access and refresh tokens with two independent secrets.

    Nothing is stored server side: a token is valid until it expires, and
    logging out does not revoke it.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = ACCESS_TOKEN_TTL,
        refresh_ttl: timedelta = REFRESH_TOKEN_TTL,
    ) -> None:
        if not access_secret or not refresh_secret:
            raise ValueError("Token secrets must be non-empty")
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh secrets must differ")
        self._secrets = {"access": access_secret, "refresh": refresh_secret}
        self._ttls = {"access": access_ttl, "refresh": refresh_ttl}

    def issue(self, user: User, now: datetime | None = None) -> TokenPair:
        moment = now or datetime.now(timezone.utc)
        return TokenPair(
            access_token=self._encode(user, "access", moment),
            refresh_token=self._encode(user, "refresh", moment),
        )

    def issue_access(self, user: User, now: datetime | None = None) -> str:
        return self._encode(user, "access", now or datetime.now(timezone.utc))

    def verify(self, token: str, which: str = "access") -> dict:
        secret = self._secret_for(which)
        if not token or not isinstance(token, str):
            raise InvalidToken()
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "iat", *CLAIM_NAMES]},
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidToken() from exc

    def refresh_access(self, refresh_token: str, store: "UserStore", now: datetime | None = None) -> str:
        payload = self.verify(refresh_token, "refresh")
        user = store.find_by_id(str(payload["userId"]))
        if user is None or not user.is_active:
            raise InvalidToken()
        return self.issue_access(user, now)

    def _encode(self, user: User, which: str, moment: datetime) -> str:
        payload = user_claims(user)
        payload["iat"] = moment
        payload["exp"] = moment + self._ttls[which]
        return jwt.encode(payload, self._secrets[which], algorithm=ALGORITHM)

    def _secret_for(self, which: str) -> str:
        if which not in TOKEN_KINDS:
            raise ValueError(f"Unknown token kind: {which}")
        return self._secrets[which]
