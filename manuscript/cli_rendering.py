"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
word and line diffs, and section listings.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import CommandStageError, PreconditionFailed
from .models.datatypes import ADDED, REMOVED, AlignedDiff, DiffEntry, LineDiffEntry, Section


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, CommandStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        hint = exc.hint
    elif isinstance(exc, PreconditionFailed):
        typer.secho(
            f"{command_name} failed at stage `{exc.operation}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        hint = exc.hint
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
        hint = None
    if hint:
        typer.secho(f"Hint: {hint}", fg=typer.colors.YELLOW, err=True)
    raise typer.Exit(code=1) from exc


def render_inline_diff(entries: tuple[DiffEntry, ...] | list[DiffEntry]) -> str:
    """Render diff entries as text with `[-removed-]` and `{+added+}` markers."""

    parts: list[str] = []
    for entry in entries:
        if entry.classification == REMOVED:
            parts.append(f"[-{entry.text}-]")
        elif entry.classification == ADDED:
            parts.append(f"{{+{entry.text}+}}")
        else:
            parts.append(entry.text)
    return "".join(parts)


def echo_aligned_diff(aligned: AlignedDiff) -> None:
    """Print old and new streams one after the other for side-by-side review."""

    typer.echo("--- old")
    typer.echo(render_inline_diff(aligned.old_stream))
    typer.echo("+++ new")
    typer.echo(render_inline_diff(aligned.new_stream))


def echo_line_diff(entries: list[LineDiffEntry]) -> None:
    """Print a unified line diff with `-`/`+` prefixes for changed lines."""

    prefixes = {REMOVED: "- ", ADDED: "+ "}
    for entry in entries:
        typer.echo(f"{prefixes.get(entry.classification, '  ')}{entry.text}")


def echo_section_list(sections: list[Section], max_section_words: int) -> None:
    """Print compact deterministic section rows with word counts."""

    for section in sorted(sections, key=lambda item: item.order):
        warning = " (over limit, will auto-split)" if section.word_count > max_section_words else ""
        typer.echo(
            f"{section.order}. {section.title} [{section.id}] "
            f"{section.word_count} words{warning}"
        )
    total = sum(section.word_count for section in sections)
    typer.echo(f"{len(sections)} section(s), {total} words total")
