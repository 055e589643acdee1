"""Logging configuration for sqsmessaging."""

import json
import logging
import os
import sys
import threading
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, cast


class ContextStore:
    """A thread-safe store for logging context."""

    def __init__(self) -> None:
        self._context = threading.local()

    def set(self, data: dict[str, Any]) -> None:
        """Replaces the context data of the current thread.

        Args:
            data: The context data to set.
        """
        self._context.data = data

    def get(self) -> dict[str, Any]:
        """Gets the context data of the current thread.

        Returns:
            The context data.
        """
        return getattr(self._context, "data", {})


_context_store = ContextStore()


class ContextFilter(logging.Filter):
    """Injects the thread context and the 'extra' kwarg into each log record."""

    # These are the standard attributes of a LogRecord
    RESERVED_ATTRS = frozenset(
        logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
        | {"asctime", "message", "taskName"}
    )

    def filter(self, record: logging.LogRecord) -> bool:
        context = _context_store.get().copy()

        extra_context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self.RESERVED_ATTRS and key != "context"
        }

        # The per-call 'extra' context takes precedence.
        context.update(extra_context)
        record.context = context

        return True


class SQSMessagingLogger(logging.Logger):
    """A logger with a 'contextualize' method."""

    @contextmanager
    def contextualize(self, **kwargs: Any) -> Generator[None]:
        """Adds temporary context to every log emitted inside the block.

        Nested blocks extend the outer context and restore it on exit.

        Example:
            with logger.contextualize(destination="https://sqs/queue"):
                logger.info("This log will have the destination.")
        """
        previous = _context_store.get()
        _context_store.set({**previous, **kwargs})
        try:
            yield
        finally:
            _context_store.set(previous)


class TextFormatter(logging.Formatter):
    """Formats logs as a human-readable string."""

    def format(self, record: logging.LogRecord) -> str:
        log_message = super().format(record)

        context = getattr(record, "context", None)
        if context:
            context_text = " ".join(f"{k}={v}" for k, v in context.items() if v is not None)
            if context_text:
                log_message += f" | {context_text}"

        return log_message


class JsonFormatter(logging.Formatter):
    """Formats logs as a JSON string."""

    def format(self, record: logging.LogRecord) -> str:
        log_object = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.thread,
            **getattr(record, "context", {}),
        }

        if record.exc_info:
            log_object["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_object, indent=None, separators=(",", ":"), default=str)


def get_log_level(value: str) -> int:
    """Parses a level given either as a number or as a level name."""
    if value.isdigit():
        return int(value)

    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value}")
    return level


def setup_logger() -> SQSMessagingLogger:
    """Enables and configures the sqsmessaging logger."""
    log_level = get_log_level(os.getenv("SQSMESSAGING_LOG_LEVEL", str(logging.INFO)))
    log_serialize = bool(int(os.getenv("SQSMESSAGING_ENABLE_LOG_SERIALIZE", 0)))

    logging.setLoggerClass(SQSMessagingLogger)
    logger = logging.getLogger("sqsmessaging")
    logging.setLoggerClass(logging.Logger)

    if logger.hasHandlers():
        logger.handlers.clear()

    logger.setLevel(log_level)
    logger.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ContextFilter())

    formatter: logging.Formatter = JsonFormatter()
    if not log_serialize:
        fmt = (
            "%(asctime)s | %(levelname)-8s "
            "| %(thread)d "
            "| %(module)s:%(funcName)s:%(lineno)d "
            "| %(message)s"
        )
        formatter = TextFormatter(fmt)

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return cast(SQSMessagingLogger, logger)


logger: SQSMessagingLogger = setup_logger()
