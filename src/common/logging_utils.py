"""Centralized logging helpers.

Provides a single configuration entry point plus small helpers used across
modules for structured DEBUG traces (``extra=`` payloads), secret redaction
and request timing.
"""
from __future__ import annotations

import logging
import os
import re
import time
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from constants import Constants

_SENSITIVE_KEYS = ("token", "access_token", "auth", "key", "password", "secret")
_BEARER_RE = re.compile(r"(?i)\b(bearer|token)\s+[A-Za-z0-9_\-\.=]+")
_GH_TOKEN_RE = re.compile(r"\b(gh[pousr]_[A-Za-z0-9]{10,}|github_pat_[A-Za-z0-9_]{10,})\b")


class ActionsFormatter(logging.Formatter):
    """Render warnings and errors as GitHub Actions workflow commands."""

    _COMMANDS = {
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def format(self, record: logging.LogRecord) -> str:
        command = self._COMMANDS.get(record.levelno)
        if command is None:
            return super().format(record)
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        # Workflow commands are line based; escape as the runner expects.
        message = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"::{command}::{message}"


def _running_in_actions() -> bool:
    return os.environ.get(Constants.ENV_GITHUB_ACTIONS, "").lower() == "true"


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger once for the process.

    Args:
        level: Level name; falls back to BRANCHPRUNE_LOG_LEVEL, then INFO.
        log_file: Optional path receiving a plain-text copy of the log.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler()
    if _running_in_actions():
        console.setFormatter(ActionsFormatter(Constants.LOG_FORMAT))
    else:
        console.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    root.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s " + Constants.LOG_FORMAT))
        root.addHandler(file_handler)

    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by logger."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` payload, dropping unset fields."""
    return {k: v for k, v in fields.items() if v is not None}


def redact(text: str) -> str:
    """Mask bearer tokens and GitHub tokens in free text."""
    if not text:
        return text
    text = _GH_TOKEN_RE.sub("[REDACTED]", text)
    return _BEARER_RE.sub(lambda m: f"{m.group(1)} [REDACTED]", text)


def safe_url(url: str) -> str:
    """Return url with sensitive query parameters and userinfo masked."""
    if not url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return redact(url)
    netloc = parts.netloc
    if "@" in netloc:
        netloc = "[REDACTED]@" + netloc.split("@", 1)[1]
    query = parts.query
    if query:
        pairs = [
            (k, "[REDACTED]" if k.lower() in _SENSITIVE_KEYS else v)
            for k, v in parse_qsl(query, keep_blank_values=True)
        ]
        query = urlencode(pairs, safe="[]")
    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


class Timer:
    """Context manager measuring elapsed wall time."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 2)
