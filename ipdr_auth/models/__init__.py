from .ids import new_record_id
from .log import LoginLogEntry
from .user import User

__all__ = ["LoginLogEntry", "User", "new_record_id"]
