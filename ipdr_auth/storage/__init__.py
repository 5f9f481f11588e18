from .errors import DuplicateIdentity, LogWriteError, NotFound, StoreError, StoreFailure
from .json_file import JsonDocument
from .users import InMemoryUserStore, JsonUserStore, UserStore

__all__ = [
    "DuplicateIdentity",
    "InMemoryUserStore",
    "JsonDocument",
    "JsonUserStore",
    "LogWriteError",
    "NotFound",
    "StoreError",
    "StoreFailure",
    "UserStore",
]
