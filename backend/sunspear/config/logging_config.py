"""
Logging Configuration Module

Root logger with a daily rotating file handler and a coloured console handler,
plus the ``log_print`` call-tracing decorator used by the service layer.
"""

import dataclasses
import functools
import inspect
import json
import logging
import os
import re
import time
from datetime import date, datetime
from enum import Enum
from logging.handlers import TimedRotatingFileHandler

from .settings import LogConfig

FILE_FORMATTER = '%(asctime)s.%(msecs)03d | %(levelname)-7s | [PID:%(process)d/TID:%(thread)d] | %(filename)s.%(funcName)s:%(lineno)d | %(message)s'
CONSOLE_FORMATTER = '%(asctime)s.%(msecs)03d | \033[1m%(levelname)-7s\033[0m | %(name)s:%(lineno)d | \033[36m%(message)s\033[0m'

# Chatty at INFO: every engine HTTP request, every SQLite statement
NOISY_LOGGERS = ("urllib3", "docker", "aiosqlite", "sqlalchemy.engine")

# Environment assignments whose value must not reach the log files
SECRET_ASSIGNMENT = re.compile(r"((?:[A-Z0-9_]*)(?:PASSWORD|SECRET|TOKEN|KEY)[A-Z0-9_]*\s*[=:]\s*)([^\s,'\"\]]+)", re.IGNORECASE)

MAX_LOGGED_LENGTH = 500


class LoggingConfig:
    """Logging configuration management"""

    def __init__(self, log_file_name=None, log_level=None, backup_count=None, log_dir=None):
        self.log_file_name = log_file_name or LogConfig.FILE_NAME
        self.log_level = log_level or logging.getLevelName(str(LogConfig.LEVEL).upper())
        self.backup_count = backup_count if backup_count is not None else LogConfig.BACKUP_COUNT
        self.log_dir = log_dir or LogConfig.DIR
        self.logger = logging.getLogger()

    def setup_logging(self):
        """Install the file and console handlers on the root logger"""
        # Re-running replaces handlers instead of stacking them
        self.logger.handlers.clear()
        self.logger.setLevel(self.log_level)

        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMATTER))
        self.logger.addHandler(console_handler)

        try:
            os.makedirs(self.log_dir, exist_ok=True)
        except OSError as e:
            self.logger.error(f"Failed to create log directory {self.log_dir}, logging to console only: {e}")
            return self.logger

        file_handler = TimedRotatingFileHandler(
            os.path.join(self.log_dir, f'{self.log_file_name}.log'),
            when='D',
            interval=1,
            backupCount=self.backup_count,
            encoding='utf-8',
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMATTER))
        self.logger.addHandler(file_handler)

        self.logger.info(f"Logging initialized ({self.log_dir}/{self.log_file_name}.log)")
        return self.logger


def redact(text: str) -> str:
    """Mask the value of anything that looks like ``DB_PASSWORD=...``"""
    return SECRET_ASSIGNMENT.sub(lambda m: m.group(1) + "***", text)


def _clip(text: str, max_length: int = MAX_LOGGED_LENGTH) -> str:
    text = redact(text)
    return text if len(text) <= max_length else text[:max_length] + "... (truncated)"


def _json_default(o):
    if isinstance(o, (datetime, date)):
        return o.isoformat()
    if isinstance(o, Enum):
        return o.value
    if dataclasses.is_dataclass(o) and not isinstance(o, type):
        return dataclasses.asdict(o)
    if hasattr(o, 'model_dump') and callable(o.model_dump):
        return o.model_dump()
    if hasattr(o, '__table__'):
        # ORM rows: columns only, not SQLAlchemy state
        return {c.name: getattr(o, c.name) for c in o.__table__.columns}
    return f"<{type(o).__name__}>"


def summarize(obj) -> str:
    """One-line, size-capped, secret-masked rendering of a call result"""
    if isinstance(obj, Enum):
        return _clip(str(obj.value))
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return _clip(str(obj))
    if isinstance(obj, bytes):
        return f"bytes(len={len(obj)})"
    try:
        return _clip(json.dumps(obj, default=_json_default, ensure_ascii=False))
    except (TypeError, ValueError):
        return _clip(repr(obj))


def log_print(func):
    """Log call arguments, result and elapsed time of a sync or async function"""

    try:
        param_names = list(inspect.signature(func).parameters)
    except (TypeError, ValueError):
        param_names = []
    skip = 1 if param_names and param_names[0] in ("self", "cls") else 0

    def _format_args(args, kwargs):
        params = []
        for i, arg in enumerate(args[skip:], start=skip):
            name = param_names[i] if i < len(param_names) else f"arg{i}"
            params.append(f"{name}={arg!r}")
        params.extend(f"{k}={v!r}" for k, v in kwargs.items())
        return _clip(', '.join(params)) if params else '(no args)'

    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)
        logger.info(f"[Call] {func.__qualname__} ←------------ Args: {_format_args(args, kwargs)}")
        started = time.monotonic()

        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            logger.error(f"[Exception] {func.__qualname__} ! {e.__class__.__name__}: {e}", exc_info=True)
            raise

        logger.info(f"[Return] {func.__qualname__} ({time.monotonic() - started:.3f}s) ------------→ Result: {summarize(result)}")
        return result

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)
        logger.info(f"[Call] {func.__qualname__} ←------------ Args: {_format_args(args, kwargs)}")
        started = time.monotonic()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"[Exception] {func.__qualname__} ! {e.__class__.__name__}: {e}", exc_info=True)
            raise

        logger.info(f"[Return] {func.__qualname__} ({time.monotonic() - started:.3f}s) ------------→ Result: {summarize(result)}")
        return result

    return async_wrapper if inspect.iscoroutinefunction(func) else sync_wrapper
