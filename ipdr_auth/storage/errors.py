from __future__ import annotations


class StoreError(Exception):
    """Base class for credential-store and audit-log failures."""


class DuplicateIdentity(StoreError):
    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"{field} already exists: {value}")
        self.field = field
        self.value = value


class NotFound(StoreError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class StoreFailure(StoreError):
    pass


class LogWriteError(StoreError):
    pass
