"""Structured operation logging utilities.

Responsibilities:
- Emit concise, deterministic operation-level logs for section mutations.
- Keep manuscript text out of log lines; only counts and identifiers are logged.
"""

from __future__ import annotations

import re
import sys
from typing import TextIO

from loguru import logger as _loguru_logger


_UNSAFE_CHARACTERS_RE = re.compile(r"[^\w.:/-]")


def _context_token(value: object) -> str:
    """Render one context value as a single shell-safe token; blanks become `none`."""

    text = str(value).strip()
    return _UNSAFE_CHARACTERS_RE.sub("_", text) if text else "none"


def _format_context(context: dict[str, object]) -> str:
    """Render `key=value` pairs sorted by key, each preceded by a space."""

    return "".join(f" {key}={_context_token(context[key])}" for key in sorted(context))


class OperationLogger:
    """Emit deterministic operation logs for sectionizer activity."""

    def __init__(self, sink: TextIO | None = None) -> None:
        """Initialize logger sink and configure deterministic formatting."""

        self._sink = sink or sys.stderr
        _loguru_logger.remove()
        _loguru_logger.add(self._sink, format="{message}", level="INFO", colorize=False)

    def _emit(self, level: str, event: str, operation: str, **context: object) -> None:
        """Emit one structured operation log line."""

        line = (
            f"[op] level={level} operation={operation} event={event}"
            f"{_format_context(context)}"
        )
        _loguru_logger.log(level, line)

    def log_operation_start(self, operation: str, **context: object) -> None:
        """Emit an operation-start event."""

        self._emit("INFO", "start", operation, **context)

    def log_operation_complete(self, operation: str, **context: object) -> None:
        """Emit an operation-complete event."""

        self._emit("INFO", "complete", operation, **context)

    def log_operation_failure(self, operation: str, error_type: str) -> None:
        """Emit an operation-failure event without payload details."""

        self._emit("ERROR", "failure", operation, error_type=error_type)

    def log_auto_split(self, section_id: str, piece_count: int, word_count: int) -> None:
        """Emit an event for a section split into several pieces by an edit."""

        self._emit(
            "INFO",
            "auto_split",
            "update_section_content",
            section_id=section_id,
            pieces=piece_count,
            words=word_count,
        )

    def log_unknown_section(self, operation: str, section_id: str) -> None:
        """Emit a warning for an operation addressed to a missing section id."""

        self._emit("WARNING", "unknown_section", operation, section_id=section_id)
