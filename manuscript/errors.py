"""Domain exceptions for section operations and CLI diagnostics."""

from __future__ import annotations


class ManuscriptError(RuntimeError):
    """Base error carrying a user-facing detail and an optional fix hint."""

    def __init__(self, detail: str, hint: str | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.hint = hint


class PreconditionFailed(ManuscriptError):
    """Raised when a section operation would break a document invariant.

    The section list passed to the failing operation is left as it was.
    """

    def __init__(self, *, operation: str, detail: str, hint: str | None = None) -> None:
        super().__init__(detail, hint)
        self.operation = operation


class CommandStageError(ManuscriptError):
    """Raised when one stage of a CLI command (config, load, input) fails."""

    def __init__(self, *, stage: str, detail: str, hint: str | None = None) -> None:
        super().__init__(detail, hint)
        self.stage = stage
