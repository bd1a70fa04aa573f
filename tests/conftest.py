"""Shared pytest fixtures for the full manuscript test suite."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
import itertools

import pytest

from manuscript.config import ManuscriptConfig
from manuscript.text.sections import Sectionizer

FIXED_NOW = datetime(2024, 5, 17, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Provide a clock that always returns the same UTC timestamp."""

    return lambda: FIXED_NOW


@pytest.fixture
def sequential_ids() -> Callable[[], str]:
    """Provide deterministic section ids `section-1`, `section-2`, ..."""

    counter = itertools.count(1)
    return lambda: f"section-{next(counter)}"


@pytest.fixture
def make_sectionizer(
    fixed_clock: Callable[[], datetime],
    sequential_ids: Callable[[], str],
) -> Callable[..., Sectionizer]:
    """Build sectionizers with deterministic ids and timestamps."""

    def _make(max_section_words: int = 2000, **kwargs: object) -> Sectionizer:
        """Create a sectionizer with an optional custom word limit."""

        return Sectionizer(
            ManuscriptConfig(max_section_words=max_section_words),
            clock=fixed_clock,
            id_factory=sequential_ids,
            **kwargs,
        )

    return _make
