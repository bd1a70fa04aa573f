"""Command-line interface for manuscript.

Responsibilities:
- Expose document commands over chapter text files and snapshot JSON files.
- Convert CLI arguments into `ManuscriptConfig` and run one core operation.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import (
    echo_aligned_diff,
    echo_line_diff,
    echo_section_list,
    exit_with_command_error,
    render_inline_diff,
)
from .config import ConfigLoader, ManuscriptConfig
from .errors import CommandStageError
from .io.storage import DocumentStore
from .models.datatypes import Section
from .snapshot_artifacts import load_sections, snapshot_payload
from .telemetry.logger import OperationLogger
from .text.alignment import Aligner
from .text.sections import Sectionizer, flatten

app = typer.Typer(
    name="manuscript",
    no_args_is_help=True,
    help="Manuscript section and diff tools.",
)

_DIFF_MODES = ("side-by-side", "unified", "lines")

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML config file with sectioning settings."),
]


def _load_config(config_path: Path | None) -> ManuscriptConfig:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return ManuscriptConfig()

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc


def _build_sectionizer(config: ManuscriptConfig) -> Sectionizer:
    """Create a sectionizer, attaching operation logging when enabled."""

    run_logger = OperationLogger() if config.log_operations else None
    return Sectionizer(config, run_logger=run_logger)


def _read_text(path: Path) -> str:
    """Read a UTF-8 text file."""

    return DocumentStore(path.parent).load_text(Path(path.name))


def _read_sections(snapshot_path: Path) -> list[Section]:
    """Read the section list stored in a snapshot file."""

    payload = DocumentStore(snapshot_path.parent).load_json(Path(snapshot_path.name))
    return load_sections(payload)


def _write_snapshot(
    snapshot_path: Path, sectionizer: Sectionizer, sections: list[Section]
) -> None:
    """Write the document snapshot for a section list."""

    snapshot = sectionizer.snapshot(sections)
    DocumentStore(snapshot_path.parent).save_json(
        Path(snapshot_path.name), snapshot_payload(snapshot)
    )


@app.command("diff")
def diff_command(
    old_file: Annotated[Path, typer.Argument(help="Older version of the chapter.")],
    new_file: Annotated[Path, typer.Argument(help="Newer version of the chapter.")],
    mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="Rendering mode: `side-by-side`, `unified`, or `lines`.",
        ),
    ] = "side-by-side",
    snapshots: Annotated[
        bool,
        typer.Option(
            "--snapshots",
            help="Treat both inputs as snapshot JSON files and diff their flattened text.",
        ),
    ] = False,
) -> None:
    """Show which words were added, removed, or kept between two versions."""

    try:
        if mode not in _DIFF_MODES:
            raise CommandStageError(
                stage="diff-input",
                detail=f"Unsupported diff mode `{mode}`.",
                hint=f"Use one of: {', '.join(_DIFF_MODES)}.",
            )
        if snapshots:
            old_text = flatten(_read_sections(old_file))
            new_text = flatten(_read_sections(new_file))
        else:
            old_text = _read_text(old_file)
            new_text = _read_text(new_file)
        aligner = Aligner()
        if mode == "side-by-side":
            echo_aligned_diff(aligner.align(old_text, new_text))
        elif mode == "unified":
            typer.echo(render_inline_diff(aligner.diff(old_text, new_text)))
        else:
            echo_line_diff(aligner.diff_lines(old_text, new_text))
    except Exception as exc:
        exit_with_command_error("diff", exc)


@app.command("migrate")
def migrate_command(
    input_file: Annotated[Path, typer.Argument(help="Flat chapter text file.")],
    out: Annotated[Path, typer.Option("--out", help="Snapshot JSON file to write.")],
    config_file: ConfigOption = None,
) -> None:
    """Split a flat chapter into sections and write a snapshot."""

    try:
        config = _load_config(config_file)
        sectionizer = _build_sectionizer(config)
        sections = sectionizer.migrate(_read_text(input_file))
        _write_snapshot(out, sectionizer, sections)
    except Exception as exc:
        exit_with_command_error("migrate", exc)

    typer.echo(f"Snapshot: {out}")
    echo_section_list(sections, config.max_section_words)


@app.command("list-sections")
def list_sections_command(
    snapshot_file: Annotated[Path, typer.Argument(help="Snapshot JSON file.")],
    config_file: ConfigOption = None,
) -> None:
    """List section order, titles, ids, and word counts."""

    try:
        config = _load_config(config_file)
        sections = _read_sections(snapshot_file)
    except Exception as exc:
        exit_with_command_error("list-sections", exc)

    echo_section_list(sections, config.max_section_words)


@app.command("edit-section")
def edit_section_command(
    snapshot_file: Annotated[Path, typer.Argument(help="Snapshot JSON file.")],
    section_id: Annotated[str, typer.Argument(help="Id of the section to replace.")],
    content_file: Annotated[Path, typer.Argument(help="File with the new section content.")],
    config_file: ConfigOption = None,
) -> None:
    """Replace one section's content, auto-splitting it when it overflows."""

    try:
        config = _load_config(config_file)
        sectionizer = _build_sectionizer(config)
        sections = sectionizer.update_section_content(
            _read_sections(snapshot_file), section_id, _read_text(content_file)
        )
        _write_snapshot(snapshot_file, sectionizer, sections)
    except Exception as exc:
        exit_with_command_error("edit-section", exc)

    echo_section_list(sections, config.max_section_words)


@app.command("rename-section")
def rename_section_command(
    snapshot_file: Annotated[Path, typer.Argument(help="Snapshot JSON file.")],
    section_id: Annotated[str, typer.Argument(help="Id of the section to rename.")],
    title: Annotated[str, typer.Argument(help="New section title.")],
    config_file: ConfigOption = None,
) -> None:
    """Change a section title."""

    try:
        config = _load_config(config_file)
        sectionizer = _build_sectionizer(config)
        sections = sectionizer.rename_section(_read_sections(snapshot_file), section_id, title)
        _write_snapshot(snapshot_file, sectionizer, sections)
    except Exception as exc:
        exit_with_command_error("rename-section", exc)

    echo_section_list(sections, config.max_section_words)


@app.command("add-section")
def add_section_command(
    snapshot_file: Annotated[Path, typer.Argument(help="Snapshot JSON file.")],
    config_file: ConfigOption = None,
) -> None:
    """Append an empty section and print its id."""

    try:
        config = _load_config(config_file)
        sectionizer = _build_sectionizer(config)
        addition = sectionizer.add_section(_read_sections(snapshot_file))
        _write_snapshot(snapshot_file, sectionizer, list(addition.sections))
    except Exception as exc:
        exit_with_command_error("add-section", exc)

    typer.echo(f"Added section: {addition.section_id}")


@app.command("delete-section")
def delete_section_command(
    snapshot_file: Annotated[Path, typer.Argument(help="Snapshot JSON file.")],
    section_id: Annotated[str, typer.Argument(help="Id of the section to delete.")],
    config_file: ConfigOption = None,
) -> None:
    """Delete a section; the last remaining section cannot be deleted."""

    try:
        config = _load_config(config_file)
        sectionizer = _build_sectionizer(config)
        sections = sectionizer.delete_section(_read_sections(snapshot_file), section_id)
        _write_snapshot(snapshot_file, sectionizer, sections)
    except Exception as exc:
        exit_with_command_error("delete-section", exc)

    echo_section_list(sections, config.max_section_words)


@app.command("flatten")
def flatten_command(
    snapshot_file: Annotated[Path, typer.Argument(help="Snapshot JSON file.")],
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Write flattened text here instead of stdout."),
    ] = None,
) -> None:
    """Print the chapter text regenerated from its sections."""

    try:
        content = flatten(_read_sections(snapshot_file))
        if out is not None:
            DocumentStore(out.parent).save_text(Path(out.name), content)
    except Exception as exc:
        exit_with_command_error("flatten", exc)

    if out is None:
        typer.echo(content)
    else:
        typer.echo(f"Flattened text: {out}")


@app.command("unflatten")
def unflatten_command(
    snapshot_file: Annotated[Path, typer.Argument(help="Snapshot JSON file.")],
    content_file: Annotated[Path, typer.Argument(help="Edited flat chapter text.")],
    config_file: ConfigOption = None,
) -> None:
    """Spread edited flat text back over the existing sections."""

    try:
        config = _load_config(config_file)
        sectionizer = _build_sectionizer(config)
        sections = sectionizer.unflatten(
            _read_text(content_file), _read_sections(snapshot_file)
        )
        _write_snapshot(snapshot_file, sectionizer, sections)
    except Exception as exc:
        exit_with_command_error("unflatten", exc)

    echo_section_list(sections, config.max_section_words)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
