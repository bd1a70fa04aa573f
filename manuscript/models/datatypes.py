"""Core datatypes shared across manuscript modules.

Responsibilities:
- Represent immutable records exchanged between the aligner, the sectionizer,
  and their callers.
- Provide explicit typing so snapshots compare by value at the boundary.

Key types:
- `DiffEntry`, `AlignedDiff`, `LineDiffEntry`, `Section`, `SectionAddition`,
  and `DocumentSnapshot`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

SAME = "same"
ADDED = "added"
REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class DiffEntry:
    """One classified token of a word-level diff.

    Attributes:
        text: Token text (a whitespace run or a non-whitespace run).
        classification: `same`, `added`, or `removed`.
    """

    text: str
    classification: str


@dataclass(frozen=True, slots=True)
class AlignedDiff:
    """Parallel diff streams for side-by-side rendering.

    Attributes:
        old_stream: Entries of the old text, classified `same` or `removed`.
        new_stream: Entries of the new text, classified `same` or `added`.
    """

    old_stream: tuple[DiffEntry, ...]
    new_stream: tuple[DiffEntry, ...]

    def old_text(self) -> str:
        """Rebuild the old text from its stream."""

        return "".join(entry.text for entry in self.old_stream)

    def new_text(self) -> str:
        """Rebuild the new text from its stream."""

        return "".join(entry.text for entry in self.new_stream)

    def has_changes(self) -> bool:
        """Return whether any entry on either side is not `same`."""

        return any(
            entry.classification != SAME
            for entry in (*self.old_stream, *self.new_stream)
        )


@dataclass(frozen=True, slots=True)
class LineDiffEntry:
    """One line of a unified line-level diff.

    Attributes:
        text: Full line text without the trailing newline.
        classification: `same`, `added`, or `removed`.
        words: Word diff of the changed line pair; empty for unchanged lines.
    """

    text: str
    classification: str
    words: tuple[DiffEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class Section:
    """A bounded-size, individually editable chunk of a chapter.

    Attributes:
        id: Opaque stable identifier.
        title: Organizational title, never part of the flattened text.
        content: Section text.
        order: 0-based position; gapless across one document.
        word_count: Cached word count, consistent with `content`.
        created_at: Creation timestamp (UTC).
        updated_at: Last mutation timestamp (UTC).
    """

    id: str
    title: str
    content: str
    order: int
    word_count: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class SectionAddition:
    """Result of appending a section, naming the section just created."""

    sections: tuple[Section, ...]
    section_id: str


@dataclass(frozen=True, slots=True)
class DocumentSnapshot:
    """Full document state handed to the persistence collaborator.

    Attributes:
        sections: Sections sorted by `order`.
        content: Flattened chapter text regenerated from `sections`.
        word_count: Sum of section word counts.
        updated_at: Snapshot timestamp (UTC).
    """

    sections: tuple[Section, ...]
    content: str
    word_count: int
    updated_at: datetime
