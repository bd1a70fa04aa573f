"""Top-level package for manuscript.

This package provides the deterministic text core of a manuscript-authoring
tool: a word-level aligner for comparing chapter versions and a sectionizer
that keeps chapters split into bounded-size sections. The main entry points
are `align`, `migrate_to_sections`, `apply_section_edit`, and `flatten`.
"""

from .errors import PreconditionFailed
from .text.alignment import Aligner, align
from .text.sections import Sectionizer, apply_section_edit, flatten, migrate_to_sections

__all__ = [
    "Aligner",
    "PreconditionFailed",
    "Sectionizer",
    "__version__",
    "align",
    "apply_section_edit",
    "flatten",
    "migrate_to_sections",
]

__version__ = "0.1.0"
