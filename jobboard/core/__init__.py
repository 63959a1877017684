from .database import init_db, close_db, ensure_indexes, get_db_session
from .config import settings, setup_logging
from .exceptions import (
    job_board_exception_handler,
    custom_http_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)


__all__ = [
    "settings",
    "init_db",
    "close_db",
    "ensure_indexes",
    "get_db_session",
    "setup_logging",
    "job_board_exception_handler",
    "custom_http_exception_handler",
    "validation_exception_handler",
    "unhandled_exception_handler",
]
