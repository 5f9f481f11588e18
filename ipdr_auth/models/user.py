from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping


@dataclass
class User:
    id: str
    username: str
    email: str
    password_hash: str
    first_name: str
    last_name: str
    registration_date: str
    role: str = "user"
    ip_address: str | None = None
    location: str | None = None
    last_login: str | None = None
    failed_login_attempts: int = 0
    account_locked: bool = False
    is_active: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "passwordHash": self.password_hash,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "role": self.role,
            "ipAddress": self.ip_address,
            "location": self.location,
            "registrationDate": self.registration_date,
            "lastLogin": self.last_login,
            "failedLoginAttempts": self.failed_login_attempts,
            "accountLocked": self.account_locked,
            "isActive": self.is_active,
        }

    def sanitized(self) -> dict[str, Any]:
        """Client-facing view of the record, without the password hash."""
        payload = self.to_dict()
        payload.pop("passwordHash")
        return payload

    def copy(self) -> "User":
        return replace(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        return cls(
            id=str(data["id"]),
            username=data["username"],
            email=data["email"],
            password_hash=data["passwordHash"],
            first_name=data.get("firstName", ""),
            last_name=data.get("lastName", ""),
            registration_date=data.get("registrationDate", ""),
            role=data.get("role") or "user",
            ip_address=data.get("ipAddress"),
            location=data.get("location"),
            last_login=data.get("lastLogin"),
            failed_login_attempts=int(data.get("failedLoginAttempts", 0)),
            account_locked=bool(data.get("accountLocked", False)),
            is_active=bool(data.get("isActive", True)),
        )
