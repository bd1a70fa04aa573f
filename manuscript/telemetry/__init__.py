"""Telemetry and observability helpers.

This package emits operation events for deterministic auditing of section edits.
"""

from .logger import OperationLogger

__all__ = ["OperationLogger"]
