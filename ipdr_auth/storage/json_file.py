from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any

from .errors import StoreError, StoreFailure

logger = logging.getLogger("ipdr_auth.storage")


class JsonDocument:
    """A JSON array kept in one file and rewritten whole on every write.

    The lock serializes read-modify-write cycles within this process only.
    """

    def __init__(self, path: str | os.PathLike[str], write_error: type[StoreError] = StoreFailure) -> None:
        self.path = Path(path)
        self.write_error = write_error
        self.lock = threading.RLock()

    def initialize(self) -> None:
        with self.lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                if not self.path.exists():
                    self.path.write_text("[]", encoding="utf-8")
                    logger.info("Created empty data file %s", self.path)
            except OSError as exc:
                logger.error("Error initializing data file %s: %s", self.path, exc)
                raise StoreFailure(f"Cannot initialize {self.path}") from exc

    def read(self) -> list[dict[str, Any]]:
        with self.lock:
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
            except FileNotFoundError:
                return []
            except (OSError, ValueError) as exc:
                logger.error("Error reading data file %s: %s", self.path, exc)
                raise StoreFailure(f"Cannot read {self.path}") from exc
        if not isinstance(data, list):
            logger.error("Data file %s does not hold a JSON array", self.path)
            raise StoreFailure(f"Malformed document in {self.path}")
        return data

    def write(self, items: list[dict[str, Any]]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with self.lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                tmp_path.write_text(json.dumps(items, indent=2), encoding="utf-8")
                os.replace(tmp_path, self.path)
            except OSError as exc:
                logger.error("Error writing data file %s: %s", self.path, exc)
                raise self.write_error(f"Cannot write {self.path}") from exc
