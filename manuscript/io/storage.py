"""Document file storage.

Responsibilities:
- Read chapter text and read/write snapshot JSON below one root directory.
- Report missing or unreadable files as `load` stage command errors.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..errors import CommandStageError


class DocumentStore:
    """Filesystem-backed store for chapter text and document snapshots."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def _resolve(self, relative_path: Path) -> Path:
        return self.root / relative_path

    def _write(self, relative_path: Path, text: str) -> Path:
        """Write UTF-8 text, creating parent directories, and return the path."""

        target = self._resolve(relative_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        return target

    def save_text(self, relative_path: Path, content: str) -> Path:
        """Store chapter text exactly as given."""

        return self._write(relative_path, content)

    def save_json(self, relative_path: Path, payload: dict[str, object]) -> Path:
        """Store a payload as indented JSON with sorted keys for stable diffs."""

        serialized = json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)
        return self._write(relative_path, serialized + "\n")

    def load_text(self, relative_path: Path) -> str:
        """Read a stored text file.

        Raises:
            CommandStageError: If the file does not exist.
        """

        source = self._resolve(relative_path)
        if not source.is_file():
            raise CommandStageError(
                stage="load",
                detail=f"File not found: `{source}`.",
                hint="Verify the path and rerun.",
            )
        return source.read_text(encoding="utf-8")

    def load_json(self, relative_path: Path) -> dict[str, Any]:
        """Read a stored JSON object."""

        source = self._resolve(relative_path)
        try:
            payload = json.loads(self.load_text(relative_path))
        except json.JSONDecodeError as exc:
            raise CommandStageError(
                stage="load",
                detail=f"File `{source}` is not valid JSON: {exc.msg}.",
                hint="Regenerate the snapshot file.",
            ) from exc
        if not isinstance(payload, dict):
            raise CommandStageError(
                stage="load",
                detail=f"File `{source}` must contain a JSON object.",
            )
        return payload
