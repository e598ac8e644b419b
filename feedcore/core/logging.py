"""Loguru setup for feedcore, with an optional Slack sink for errors."""

import logging
import sys
from pathlib import Path
from typing import Any

import httpx
from loguru import logger

from feedcore.core.config import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[name]}:{function}:{line} | {message}"

_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}
_KNOWN_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}

_configured = False


class InterceptHandler(logging.Handler):
    """Route stdlib records (httpx, server runners) into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_name == "emit":
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _slack_sink(message: Any) -> None:
    record = message.record
    name = record["extra"].get("name", "feedcore")
    text = f"[{record['level'].name}] {name}:{record['function']}:{record['line']}\n{record['message']}"
    try:
        httpx.post(settings.SLACK_WEBHOOK_URL, json={"text": text}, timeout=5.0)
    except httpx.HTTPError:
        # Logging here would recurse into this sink
        pass


def _resolve_level(raw: str | None) -> str:
    level = (raw or "INFO").strip().upper()
    level = _LEVEL_ALIASES.get(level, level)
    return level if level in _KNOWN_LEVELS else "INFO"


def configure_logging() -> None:
    global _configured
    if _configured:
        return
    _configured = True

    level = _resolve_level(settings.effective_log_level)

    logger.remove()
    logger.configure(extra={"name": "feedcore"})
    logger.add(sys.stdout, level=level, format=LOG_FORMAT, backtrace=False, diagnose=False)

    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level=level,
            format=LOG_FORMAT,
            rotation="10 MB",
            retention="14 days",
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )

    if settings.SLACK_WEBHOOK_URL:
        logger.add(_slack_sink, level="ERROR", enqueue=True)

    # httpx and any server runner log through stdlib logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def get_logger(name: str) -> logger.__class__:
    return logger.bind(name=name)


configure_logging()
