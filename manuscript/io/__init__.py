"""Input/output components for manuscript.

This package contains the filesystem store used by the CLI to read chapter
text and read or write document snapshots.
"""

from .storage import DocumentStore

__all__ = ["DocumentStore"]
