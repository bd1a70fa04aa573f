"""Shared typed data models for manuscript.

This package contains dataclasses used across the aligner and sectionizer
to avoid cross-module coupling and circular imports.
"""

from .datatypes import (
    ADDED,
    REMOVED,
    SAME,
    AlignedDiff,
    DiffEntry,
    DocumentSnapshot,
    LineDiffEntry,
    Section,
    SectionAddition,
)

__all__ = [
    "ADDED",
    "REMOVED",
    "SAME",
    "AlignedDiff",
    "DiffEntry",
    "DocumentSnapshot",
    "LineDiffEntry",
    "Section",
    "SectionAddition",
]
