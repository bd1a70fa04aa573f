"""Text alignment and sectioning components.

This package provides the whitespace tokenizer, the word-level aligner, and
the sectionizer that keeps chapter sections bounded and ordered.
"""

from .alignment import Aligner, align
from .sections import (
    SECTION_SEPARATOR,
    Sectionizer,
    apply_section_edit,
    flatten,
    migrate_to_sections,
)
from .tokens import count_words, split_words, tokenize

__all__ = [
    "Aligner",
    "SECTION_SEPARATOR",
    "Sectionizer",
    "align",
    "apply_section_edit",
    "count_words",
    "flatten",
    "migrate_to_sections",
    "split_words",
    "tokenize",
]
