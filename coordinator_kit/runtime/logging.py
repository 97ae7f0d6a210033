"""Logging pipeline for the ``coordinator_kit`` logger namespace.

Handlers attach to the package logger rather than the root logger so an
application keeps ownership of its own logging setup.
"""

from __future__ import annotations

import json
import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from coordinator_kit.api.logging import CoordinatorLoggingConfig
from coordinator_kit.runtime.config import CoordinatorConfig, load_coordinator_config

NAMESPACE = "coordinator_kit"
_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"
_STANDARD_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_QUEUE_LISTENER: QueueListener | None = None
_INSTALLED_HANDLERS: list[logging.Handler] = []


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` values go under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "msg": record.getMessage(),
        }
        fields = {k: v for k, v in vars(record).items() if k not in _STANDARD_RECORD_FIELDS}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=repr)


def configure_coordinator_logging(config: CoordinatorLoggingConfig) -> logging.Logger:
    """Install handlers on the package logger and return it.

    Replaces handlers from a previous call. While installed, package records do
    not propagate to the root logger. With a file path, console and file output
    run behind a queue listener so delivery threads never block on file I/O.
    """
    global _QUEUE_LISTENER

    shutdown_coordinator_logging()
    logger = logging.getLogger(NAMESPACE)
    logger.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    outputs: list[logging.Handler] = [_with_format(logging.StreamHandler(), config.console_format)]
    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        outputs.append(_with_format(file_handler, config.file_format))

    if len(outputs) == 1:
        installed = outputs
    else:
        log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
        _QUEUE_LISTENER = QueueListener(log_queue, *outputs, respect_handler_level=True)
        _QUEUE_LISTENER.start()
        installed = [QueueHandler(log_queue)]

    for handler in installed:
        logger.addHandler(handler)
    _INSTALLED_HANDLERS.extend(installed)
    logger.propagate = False
    return logger


def shutdown_coordinator_logging() -> None:
    """Flush and detach handlers installed by this module. Idempotent."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        for handler in _QUEUE_LISTENER.handlers:
            handler.close()
        _QUEUE_LISTENER = None
    if not _INSTALLED_HANDLERS:
        return
    logger = logging.getLogger(NAMESPACE)
    for handler in _INSTALLED_HANDLERS:
        logger.removeHandler(handler)
        handler.close()
    _INSTALLED_HANDLERS.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def setup_coordinator_logging(config: CoordinatorConfig | None = None) -> bool:
    """Install console logging at ``config.log_level`` if nothing would emit records.

    Does nothing when the package logger or any ancestor already has handlers.
    Returns whether handlers were installed.
    """
    if _INSTALLED_HANDLERS or logging.getLogger(NAMESPACE).hasHandlers():
        return False
    if config is None:
        config = load_coordinator_config()
    configure_coordinator_logging(CoordinatorLoggingConfig(level_name=config.log_level))
    return True


def _with_format(handler: logging.Handler, kind: str) -> logging.Handler:
    if kind.strip().lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    return handler
