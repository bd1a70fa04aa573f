"""Bounded-size section management for one chapter.

Responsibilities:
- Migrate flat chapter text into sections of at most `max_section_words` words.
- Apply section edits, auto-splitting a section that grows past the limit.
- Add, rename, and delete sections while keeping `order` gapless.
- Convert between the sectioned representation and flat chapter text.

Every operation takes a snapshot of the section list and returns a new list;
input sections are never mutated. Callers serialize writes per document.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime, timezone
import math
from typing import TypeVar
import uuid

from ..config import ManuscriptConfig
from ..errors import PreconditionFailed
from ..models.datatypes import DocumentSnapshot, Section, SectionAddition
from ..telemetry.logger import OperationLogger
from .tokens import count_words, split_words

SECTION_SEPARATOR = "\n\n"

_OperationResult = TypeVar("_OperationResult")


def _utc_now() -> datetime:
    """Return the current aware UTC timestamp."""

    return datetime.now(timezone.utc)


def _new_section_id() -> str:
    """Return a fresh opaque section identifier."""

    return f"section-{uuid.uuid4().hex}"


class Sectionizer:
    """Keep a document's sections bounded, ordered, and consistent with its text."""

    def __init__(
        self,
        config: ManuscriptConfig | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
        run_logger: OperationLogger | None = None,
    ) -> None:
        """Initialize the sectionizer with limits, time/id sources, and logging."""

        self.config = config or ManuscriptConfig()
        self.config.validate()
        self._clock = clock or _utc_now
        self._id_factory = id_factory or _new_section_id
        self._run_logger = run_logger

    @property
    def max_section_words(self) -> int:
        """Return the word count above which a section is auto-split."""

        return self.config.max_section_words

    def migrate(self, content: str) -> list[Section]:
        """Chunk flat chapter text into titled sections.

        Args:
            content: Legacy flat chapter text.

        Returns:
            Sections of at most `max_section_words` words each, in word order,
            titled `Section 1`, `Section 2`, ... Blank content yields one empty
            section.
        """

        def _migrate() -> list[Section]:
            now = self._clock()
            pieces = self._chunk_words(split_words(content))
            if not pieces:
                pieces = [[]]
            return [
                self._new_section(
                    title=self._title(index + 1),
                    words=words,
                    order=index,
                    now=now,
                )
                for index, words in enumerate(pieces)
            ]

        return self._run_operation("migrate", _migrate)

    def open_document(self, content: str, sections: Iterable[Section]) -> list[Section]:
        """Return the section list for a document, migrating flat content once.

        Existing sections are returned sorted with orders renumbered; a
        document without sections is migrated from `content`.
        """

        existing = list(sections)
        if existing:
            return self._renumber(existing)
        return self.migrate(content)

    def update_section_content(
        self,
        sections: Iterable[Section],
        section_id: str,
        new_content: str,
    ) -> list[Section]:
        """Replace a section's content, auto-splitting it when it overflows.

        When the new word count exceeds `max_section_words`, the new content
        is re-chunked. The first piece keeps the section's id, title, and
        creation time; each further piece is a new section with a fresh id
        and a title not used by any other section. Orders are renumbered so
        the pieces sit contiguously.

        Args:
            sections: Current section snapshot.
            section_id: Id of the edited section.
            new_content: Full new content of the section.

        Returns:
            Updated section list sorted by order. An unknown id returns the
            snapshot unchanged.
        """

        ordered = self._renumber(sections)

        def _update() -> list[Section]:
            target = self._find(ordered, section_id)
            if target is None:
                self._log_unknown_section("update_section_content", section_id)
                return ordered

            now = self._clock()
            word_count = count_words(new_content)
            if word_count <= self.max_section_words:
                updated = replace(
                    target,
                    content=new_content,
                    word_count=word_count,
                    updated_at=now,
                )
                return [updated if section.id == section_id else section for section in ordered]

            pieces = self._chunk_words(split_words(new_content))
            taken_titles = {section.title for section in ordered}
            replacement = [
                replace(
                    target,
                    content=" ".join(pieces[0]),
                    word_count=len(pieces[0]),
                    updated_at=now,
                )
            ]
            for words in pieces[1:]:
                title = self._next_free_title(
                    len(ordered) + len(replacement) - 1, taken_titles
                )
                taken_titles.add(title)
                replacement.append(
                    self._new_section(title=title, words=words, order=0, now=now)
                )
            if self._run_logger is not None:
                self._run_logger.log_auto_split(section_id, len(pieces), word_count)

            merged: list[Section] = []
            for section in ordered:
                if section.id == section_id:
                    merged.extend(replacement)
                else:
                    merged.append(section)
            return self._renumber(merged)

        return self._run_operation("update_section_content", _update, section_id=section_id)

    def rename_section(
        self,
        sections: Iterable[Section],
        section_id: str,
        title: str,
    ) -> list[Section]:
        """Change a section title without touching its content."""

        ordered = self._renumber(sections)

        def _rename() -> list[Section]:
            target = self._find(ordered, section_id)
            if target is None:
                self._log_unknown_section("rename_section", section_id)
                return ordered
            updated = replace(target, title=title, updated_at=self._clock())
            return [updated if section.id == section_id else section for section in ordered]

        return self._run_operation("rename_section", _rename, section_id=section_id)

    def add_section(self, sections: Iterable[Section]) -> SectionAddition:
        """Append an empty section at the end of the document.

        Returns:
            The new section list together with the id of the appended section,
            which callers select as the active section.
        """

        ordered = self._renumber(sections)

        def _add() -> SectionAddition:
            taken_titles = {section.title for section in ordered}
            section = self._new_section(
                title=self._next_free_title(len(ordered), taken_titles),
                words=[],
                order=len(ordered),
                now=self._clock(),
            )
            return SectionAddition(sections=tuple([*ordered, section]), section_id=section.id)

        return self._run_operation("add_section", _add)

    def delete_section(self, sections: Iterable[Section], section_id: str) -> list[Section]:
        """Remove a section and shift later sections down by one.

        Raises:
            PreconditionFailed: If the document has one section or fewer.
        """

        ordered = self._renumber(sections)

        def _delete() -> list[Section]:
            if len(ordered) <= 1:
                raise PreconditionFailed(
                    operation="delete_section",
                    detail="a document must keep at least one section",
                    hint="Add another section before deleting this one.",
                )
            target = self._find(ordered, section_id)
            if target is None:
                self._log_unknown_section("delete_section", section_id)
                return ordered
            return [
                replace(section, order=section.order - 1)
                if section.order > target.order
                else section
                for section in ordered
                if section.id != section_id
            ]

        return self._run_operation("delete_section", _delete, section_id=section_id)

    def flatten(self, sections: Iterable[Section]) -> str:
        """Join section contents into flat chapter text.

        Sections are taken in `order`, each content is stripped, empty
        sections are dropped, and the rest are joined by a blank line.
        Titles are never included.
        """

        return flatten(sections)

    def unflatten(self, content: str, sections: Iterable[Section]) -> list[Section]:
        """Redistribute edited flat text over the existing sections.

        The words of `content` are cut into `N` contiguous pieces of
        `ceil(total_words / N)` words, `N` being the number of sections, and
        piece `i` replaces the content of the section at order `i`. Trailing
        pieces may be short or empty. This is lossy: only the section count
        is kept, not where the original section breaks were. A document
        without sections is migrated instead.
        """

        ordered = self._renumber(sections)
        if not ordered:
            return self.migrate(content)

        def _unflatten() -> list[Section]:
            words = split_words(content)
            piece_size = math.ceil(len(words) / len(ordered))
            now = self._clock()
            redistributed = []
            for index, section in enumerate(ordered):
                piece = words[index * piece_size : (index + 1) * piece_size]
                redistributed.append(
                    replace(
                        section,
                        content=" ".join(piece),
                        word_count=len(piece),
                        updated_at=now,
                    )
                )
            return redistributed

        return self._run_operation("unflatten", _unflatten, sections=len(ordered))

    def snapshot(self, sections: Iterable[Section]) -> DocumentSnapshot:
        """Build the document state handed to the persistence collaborator."""

        ordered = self._renumber(sections)
        return DocumentSnapshot(
            sections=tuple(ordered),
            content=flatten(ordered),
            word_count=sum(section.word_count for section in ordered),
            updated_at=self._clock(),
        )

    def is_over_limit(self, text: str) -> bool:
        """Return whether unsaved text would be auto-split when committed."""

        return count_words(text) > self.max_section_words

    def _chunk_words(self, words: list[str]) -> list[list[str]]:
        """Cut a word list into consecutive pieces of at most the section limit."""

        limit = self.max_section_words
        return [words[start : start + limit] for start in range(0, len(words), limit)]

    def _new_section(
        self,
        *,
        title: str,
        words: list[str],
        order: int,
        now: datetime,
    ) -> Section:
        """Create a section from a word piece."""

        return Section(
            id=self._id_factory(),
            title=title,
            content=" ".join(words),
            order=order,
            word_count=len(words),
            created_at=now,
            updated_at=now,
        )

    def _title(self, number: int) -> str:
        """Return the generated title for a 1-based section number."""

        return f"{self.config.section_title_prefix} {number}"

    def _next_free_title(self, section_count: int, taken_titles: set[str]) -> str:
        """Return the first generated title from `section_count + 1` not yet taken."""

        number = section_count + 1
        while self._title(number) in taken_titles:
            number += 1
        return self._title(number)

    @staticmethod
    def _find(sections: list[Section], section_id: str) -> Section | None:
        """Return the section with `section_id`, or `None`."""

        for section in sections:
            if section.id == section_id:
                return section
        return None

    @staticmethod
    def _renumber(sections: Iterable[Section]) -> list[Section]:
        """Sort sections by order and rewrite orders as `0..N-1`."""

        ordered = sorted(sections, key=lambda section: section.order)
        return [
            section if section.order == index else replace(section, order=index)
            for index, section in enumerate(ordered)
        ]

    def _log_unknown_section(self, operation: str, section_id: str) -> None:
        """Report an operation addressed to a section id that does not exist."""

        if self._run_logger is not None:
            self._run_logger.log_unknown_section(operation, section_id)

    def _run_operation(
        self,
        operation: str,
        action: Callable[[], _OperationResult],
        **context: object,
    ) -> _OperationResult:
        """Run one named operation and emit start/complete/failure events."""

        if self._run_logger is not None:
            self._run_logger.log_operation_start(operation, **context)
        try:
            result = action()
        except Exception as exc:
            if self._run_logger is not None:
                self._run_logger.log_operation_failure(operation, type(exc).__name__)
            raise
        if self._run_logger is not None:
            self._run_logger.log_operation_complete(operation, **context)
        return result


def flatten(sections: Iterable[Section]) -> str:
    """Join section contents in order, dropping empty sections."""

    ordered = sorted(sections, key=lambda section: section.order)
    contents = (section.content.strip() for section in ordered)
    return SECTION_SEPARATOR.join(content for content in contents if content)


def migrate_to_sections(content: str) -> list[Section]:
    """Migrate flat chapter text with a default `Sectionizer`."""

    return Sectionizer().migrate(content)


def apply_section_edit(
    sections: Iterable[Section],
    section_id: str,
    new_content: str,
) -> list[Section]:
    """Apply one section edit, auto-splitting on overflow, with a default `Sectionizer`."""

    return Sectionizer().update_section_content(sections, section_id, new_content)
