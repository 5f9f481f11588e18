from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

UNKNOWN_USER_ID = "unknown"
LOG_ACTIONS = ("register", "login", "logout")


@dataclass(frozen=True)
class LoginLogEntry:
    """One immutable authentication event; optional keys are omitted when unset."""

    id: str
    user_id: str
    action: str
    timestamp: str
    success: bool
    ip_address: str | None = None
    location: str | None = None
    reason: str | None = None
    failed_attempts: int | None = None

    def __post_init__(self) -> None:
        if self.action not in LOG_ACTIONS:
            raise ValueError(f"Unknown log action: {self.action}")

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "userId": self.user_id,
            "action": self.action,
            "timestamp": self.timestamp,
            "ipAddress": self.ip_address,
            "location": self.location,
            "success": self.success,
        }
        if self.reason is not None:
            payload["reason"] = self.reason
        if self.failed_attempts is not None:
            payload["failedAttempts"] = self.failed_attempts
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LoginLogEntry":
        failed = data.get("failedAttempts")
        return cls(
            id=str(data["id"]),
            user_id=str(data.get("userId", UNKNOWN_USER_ID)),
            action=data["action"],
            timestamp=data["timestamp"],
            success=bool(data["success"]),
            ip_address=data.get("ipAddress"),
            location=data.get("location"),
            reason=data.get("reason"),
            failed_attempts=int(failed) if failed is not None else None,
        )
