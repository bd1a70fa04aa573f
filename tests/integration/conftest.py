"""Integration-test fixtures for CLI runs over small chapter files."""

from __future__ import annotations

from collections.abc import Callable
import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from manuscript.cli import app


@pytest.fixture
def small_limit_config(tmp_path: Path) -> Path:
    """Write a config that splits sections above three words."""

    config_path = tmp_path / "manuscript.yml"
    config_path.write_text("max_section_words: 3\n", encoding="utf-8")
    return config_path


@pytest.fixture
def migrated_snapshot(tmp_path: Path, small_limit_config: Path) -> Path:
    """Migrate a seven-word chapter into a snapshot with three sections."""

    chapter_path = tmp_path / "chapter.txt"
    chapter_path.write_text("one two three\nfour five six seven", encoding="utf-8")
    snapshot_path = tmp_path / "snapshots" / "chapter.json"

    result = CliRunner().invoke(
        app,
        [
            "migrate",
            str(chapter_path),
            "--out",
            str(snapshot_path),
            "--config",
            str(small_limit_config),
        ],
    )
    assert result.exit_code == 0, result.output
    return snapshot_path


@pytest.fixture
def read_snapshot() -> Callable[[Path], dict[str, Any]]:
    """Provide a reader for snapshot JSON payloads written by the CLI."""

    def _read(snapshot_path: Path) -> dict[str, Any]:
        """Load a snapshot payload and sort its sections by order."""

        payload = json.loads(snapshot_path.read_text(encoding="utf-8"))
        payload["sections"].sort(key=lambda section: section["order"])
        return payload

    return _read
