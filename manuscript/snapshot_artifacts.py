"""Document snapshot serialization and loading helpers.

Responsibilities:
- Build deterministic JSON payloads for `DocumentSnapshot` records.
- Load snapshot JSON payloads back into typed dataclass structures.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from .errors import CommandStageError
from .models.datatypes import DocumentSnapshot, Section


def section_payload(section: Section) -> dict[str, object]:
    """Serialize one section with ISO-8601 timestamps."""

    return {
        "id": section.id,
        "title": section.title,
        "content": section.content,
        "order": section.order,
        "word_count": section.word_count,
        "created_at": section.created_at.isoformat(),
        "updated_at": section.updated_at.isoformat(),
    }


def snapshot_payload(snapshot: DocumentSnapshot) -> dict[str, object]:
    """Serialize a document snapshot for the persistence collaborator."""

    return {
        "sections": [section_payload(section) for section in snapshot.sections],
        "content": snapshot.content,
        "word_count": snapshot.word_count,
        "updated_at": snapshot.updated_at.isoformat(),
    }


def load_sections(payload: Mapping[str, Any]) -> list[Section]:
    """Load typed sections from a snapshot payload."""

    raw_sections = payload.get("sections")
    if not isinstance(raw_sections, list):
        raise CommandStageError(
            stage="load",
            detail="Snapshot payload has no `sections` list.",
            hint="Create snapshots with `manuscript migrate` first.",
        )
    try:
        return [
            Section(
                id=str(item["id"]),
                title=str(item["title"]),
                content=str(item["content"]),
                order=int(item["order"]),
                word_count=int(item["word_count"]),
                created_at=datetime.fromisoformat(str(item["created_at"])),
                updated_at=datetime.fromisoformat(str(item["updated_at"])),
            )
            for item in raw_sections
        ]
    except (KeyError, TypeError, ValueError) as exc:
        raise CommandStageError(
            stage="load",
            detail=f"Snapshot payload contains a malformed section: {exc}",
            hint="Regenerate the snapshot file.",
        ) from exc
