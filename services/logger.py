# services/logger.py
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional


class AppLogger:
    """Shared logger registry"""

    _loggers = {}

    @classmethod
    def get_logger(cls, name: str = "pg_manager") -> logging.Logger:
        """Return the named logger, creating its handlers on first use"""
        if name in cls._loggers:
            return cls._loggers[name]

        logger = logging.getLogger(name)
        level = os.getenv("LOG_LEVEL", "INFO").upper()
        logger.setLevel(getattr(logging, level, logging.INFO))

        # handlers already attached by an earlier import
        if logger.handlers:
            cls._loggers[name] = logger
            return logger

        formatter = logging.Formatter(
            '[%(asctime)s] %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        # rotating file: 5 files x 10MB
        log_dir = os.getenv("LOG_DIR", "logs")
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, "app.log"),
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        cls._loggers[name] = logger
        return logger


logger = AppLogger.get_logger()


def log_db_operation(
    operation: str,
    table: str,
    success: bool,
    rows: Optional[int] = None,
    error: Optional[str] = None,
) -> None:
    """Log a store request in one uniform line.

    Args:
        operation: "SELECT", "INSERT", "UPDATE", "DELETE" or "COUNT"
        table: table name
        success: whether the request succeeded
        rows: affected / returned rows
        error: error message on failure
    """
    status = "SUCCESS" if success else "FAILED"
    message = f"[DB] {operation} {table} - {status}"

    if rows is not None:
        message += f" (rows={rows})"

    if error and not success:
        message += f" | error={error}"

    if success:
        logger.debug(message)
    else:
        logger.error(message)


def log_user_action(action: str, user_id: Optional[str], **details) -> None:
    """Log a mutation performed by a signed-in user"""
    extra = ", ".join(f"{k}={v}" for k, v in details.items())
    logger.info(f"👤 {action} by {user_id or 'anonymous'}" + (f" ({extra})" if extra else ""))
