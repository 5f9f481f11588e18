from .audit import AuditLog, InMemoryAuditLog, JsonAuditLog
from .logger import configure_logging, get_logger, log_event

__all__ = ["AuditLog", "InMemoryAuditLog", "JsonAuditLog", "configure_logging", "get_logger", "log_event"]
