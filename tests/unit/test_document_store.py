"""Unit tests for document storage and snapshot payload loading."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from manuscript.errors import CommandStageError
from manuscript.io.storage import DocumentStore
from manuscript.snapshot_artifacts import load_sections, snapshot_payload
from manuscript.text.sections import Sectionizer


def test_document_store_roundtrip_text_and_json(tmp_path: Path) -> None:
    store = DocumentStore(tmp_path / "documents")

    text_path = store.save_text(Path("chapters/one.txt"), "hello")
    json_path = store.save_json(Path("snapshots/one.json"), {"b": 1, "a": "x"})

    assert text_path.exists()
    assert json_path.exists()
    assert store.load_text(Path("chapters/one.txt")) == "hello"
    assert store.load_json(Path("snapshots/one.json")) == {"a": "x", "b": 1}
    assert json_path.read_text(encoding="utf-8").index('"a"') < json_path.read_text(
        encoding="utf-8"
    ).index('"b"')


def test_document_store_reports_missing_and_invalid_files(tmp_path: Path) -> None:
    store = DocumentStore(tmp_path)
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "list.json").write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(CommandStageError, match="File not found") as missing:
        store.load_text(Path("missing.txt"))
    assert missing.value.stage == "load"

    with pytest.raises(CommandStageError, match="is not valid JSON"):
        store.load_json(Path("broken.json"))

    with pytest.raises(CommandStageError, match="must contain a JSON object"):
        store.load_json(Path("list.json"))


def test_snapshot_payload_loads_back_into_equal_sections(
    make_sectionizer: Callable[..., Sectionizer], tmp_path: Path
) -> None:
    """Persisted snapshots should reload into sections equal to the originals."""

    sectionizer = make_sectionizer(max_section_words=2)
    sections = sectionizer.migrate("one two three four five")
    snapshot = sectionizer.snapshot(sections)
    store = DocumentStore(tmp_path)

    store.save_json(Path("doc.json"), snapshot_payload(snapshot))
    payload = store.load_json(Path("doc.json"))

    assert payload["content"] == "one two\n\nthree four\n\nfive"
    assert payload["word_count"] == 5
    assert payload["updated_at"] == "2024-05-17T09:30:00+00:00"
    assert load_sections(payload) == list(snapshot.sections)


def test_load_sections_rejects_malformed_payloads() -> None:
    with pytest.raises(CommandStageError, match="no `sections` list"):
        load_sections({"content": "text"})

    with pytest.raises(CommandStageError, match="malformed section"):
        load_sections({"sections": [{"id": "a", "title": "A"}]})
