from __future__ import annotations

import json
import logging
import os
import threading

from ipdr_auth.models import LoginLogEntry
from ipdr_auth.storage import JsonDocument, LogWriteError, StoreFailure


class AuditLog:
    """Append-only record of authentication events, oldest first."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("ipdr_auth.audit")

    def append(self, entry: LoginLogEntry) -> LoginLogEntry:
        self._persist(entry)
        self._log_entry(entry)
        return entry

    def list_all(self) -> list[LoginLogEntry]:
        raise NotImplementedError

    def _persist(self, entry: LoginLogEntry) -> None:
        raise NotImplementedError

    def _log_entry(self, entry: LoginLogEntry) -> None:
        payload = {"category": "auth"}
        payload.update(entry.to_dict())
        self.logger.info(json.dumps(payload, default=str))


class InMemoryAuditLog(AuditLog):
    def __init__(self, logger: logging.Logger | None = None) -> None:
        super().__init__(logger)
        self._entries: list[LoginLogEntry] = []
        self._lock = threading.Lock()

    def list_all(self) -> list[LoginLogEntry]:
        with self._lock:
            return list(self._entries)

    def _persist(self, entry: LoginLogEntry) -> None:
        with self._lock:
            self._entries.append(entry)


class JsonAuditLog(AuditLog):
    """Audit entries kept as one JSON array, rewritten on every append."""

    def __init__(self, path: str | os.PathLike[str], logger: logging.Logger | None = None) -> None:
        super().__init__(logger)
        self.document = JsonDocument(path, write_error=LogWriteError)

    def initialize(self) -> None:
        self.document.initialize()

    def list_all(self) -> list[LoginLogEntry]:
        items = self.document.read()
        try:
            return [LoginLogEntry.from_dict(item) for item in items]
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreFailure(f"Malformed log entry in {self.document.path}") from exc

    def _persist(self, entry: LoginLogEntry) -> None:
        with self.document.lock:
            try:
                items = self.document.read()
            except StoreFailure as exc:
                raise LogWriteError(f"Cannot append to {self.document.path}") from exc
            items.append(entry.to_dict())
            self.document.write(items)
