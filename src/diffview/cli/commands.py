"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from diffview.cli.render import render_conflict_rows, render_display_rows
from diffview.config import Settings, load_config
from diffview.core.conflict import parse_conflicts
from diffview.core.diff import diff_documents
from diffview.core.display import ViewMode, build_conflict_rows, build_display_rows
from diffview.core.document import Document
from diffview.core.patch import unified_patch
from diffview.core.resolve import ConflictResolution, resolve_all, resolve_index
from diffview.core.utils.diff import diff_summary


logger = logging.getLogger(__name__)

ContextOpt = Annotated[Optional[int], typer.Option("--context", "-U", help="Context lines around changes")]
IgnoreWsOpt = Annotated[Optional[bool], typer.Option(
    "--ignore-whitespace/--no-ignore-whitespace", "-w", help="Ignore whitespace when matching lines",
)]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging from it."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail("Invalid configuration", e)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _read(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}", e)


def _diff_files(old: str, new: str, settings: Settings):
    old_doc, new_doc = Document.from_str(_read(old)), Document.from_str(_read(new))
    logger.info("diffing %s (%d lines) against %s (%d lines)", old, old_doc.line_count(), new, new_doc.line_count())
    return old_doc, new_doc, diff_documents(old_doc, new_doc, settings.diff_options())


def _line_of(text: str, offset: int) -> int:
    """1-based line number containing offset."""
    return text.count("\n", 0, offset) + 1


def diff_cmd(
    old: Annotated[str, typer.Argument(help="Old file")],
    new: Annotated[str, typer.Argument(help="New file")],
    context: ContextOpt = None,
    ignore_whitespace: IgnoreWsOpt = None,
    view: Annotated[Optional[ViewMode], typer.Option("--view", help="split or inline")] = None,
    color: Annotated[Optional[bool], typer.Option("--color/--no-color", help="ANSI colors")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Dump the diff model as JSON")] = False,
    ):
    """Show a line diff with intraline highlights."""
    settings = _settings(overrides={
        "context_lines": context, "ignore_whitespace": ignore_whitespace,
        "view_mode": view.value if view else None, "color": color,
    })
    old_doc, new_doc, model = _diff_files(old, new, settings)

    if as_json:
        typer.echo(model.model_dump_json(indent=2))
        return
    if not model.hunks:
        typer.echo("No differences.")
        return

    view_mode = ViewMode(settings.view_mode)
    rows = build_display_rows(model, old_doc.lines(), new_doc.lines(), view_mode)
    for line in render_display_rows(rows, view_mode, settings.color):
        typer.echo(line)


def patch_cmd(
    old: Annotated[str, typer.Argument(help="Old file")],
    new: Annotated[str, typer.Argument(help="New file")],
    path: Annotated[Optional[str], typer.Option("--path", help="Path written in the ---/+++ header")] = None,
    context: ContextOpt = None,
    ignore_whitespace: IgnoreWsOpt = None,
    ):
    """Print a unified patch (empty when the files match)."""
    settings = _settings(overrides={"context_lines": context, "ignore_whitespace": ignore_whitespace})
    _, _, model = _diff_files(old, new, settings)
    typer.echo(unified_patch(path or Path(new).name, model), nl=False)


def stats_cmd(
    old: Annotated[str, typer.Argument(help="Old file")],
    new: Annotated[str, typer.Argument(help="New file")],
    context: ContextOpt = None,
    ignore_whitespace: IgnoreWsOpt = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print counts as JSON")] = False,
    ):
    """Count added, removed, modified and unchanged rows."""
    settings = _settings(overrides={"context_lines": context, "ignore_whitespace": ignore_whitespace})
    _, _, model = _diff_files(old, new, settings)
    counts = diff_summary(model)
    if as_json:
        typer.echo(json.dumps(counts, indent=2))
        return
    typer.echo(
        f"{counts['hunks']} hunk(s): "
        f"{counts['added']} added, "
        f"{counts['removed']} removed, "
        f"{counts['modified']} modified, "
        f"{counts['unchanged']} unchanged"
    )


def conflicts_cmd(
    path: Annotated[str, typer.Argument(help="File containing conflict markers")],
    as_json: Annotated[bool, typer.Option("--json", help="Dump regions as JSON")] = False,
    show: Annotated[bool, typer.Option("--show", help="Print ours/base/theirs side by side")] = False,
    ):
    """List merge-conflict regions. Exits 1 when none are found."""
    _settings()
    text = _read(path)
    conflicts = parse_conflicts(text)

    if as_json:
        typer.echo(json.dumps([c.model_dump() for c in conflicts], indent=2))
    if not conflicts:
        if not as_json:
            typer.echo("No conflict markers found.")
        raise typer.Exit(1)
    if as_json:
        return

    if show:
        for line in render_conflict_rows(build_conflict_rows(text, conflicts)):
            typer.echo(line)
        return
    for i, c in enumerate(conflicts):
        base = ", base" if c.base is not None else ""
        typer.echo(
            f"  #{i} lines {_line_of(text, c.range.start)}-{_line_of(text, c.range.end - 1)}: "
            f"{c.ours_branch_name} <-> {c.theirs_branch_name}{base}"
        )
    typer.echo(f"{len(conflicts)} conflict(s) in {path}")


def resolve_cmd(
    path: Annotated[str, typer.Argument(help="File containing conflict markers")],
    take: Annotated[ConflictResolution, typer.Option("--take", help="Side to keep")],
    index: Annotated[Optional[int], typer.Option("--index", help="Resolve only this conflict (0-based)")] = None,
    all_conflicts: Annotated[bool, typer.Option("--all", help="Resolve every conflict")] = False,
    write: Annotated[bool, typer.Option("--write", help="Write the result back instead of printing it")] = False,
    ):
    """Resolve conflict regions by taking ours, theirs, base, or both."""
    _settings()
    if (index is None) == (not all_conflicts):
        _fail("Pass exactly one of --index or --all")
    text = _read(path)

    try:
        resolved = resolve_all(text, take) if all_conflicts else resolve_index(text, index, take)
    except ValueError as e:
        _fail("Resolve failed", e)

    if not write:
        typer.echo(resolved, nl=False)
        return
    try:
        Path(path).write_text(resolved, encoding="utf-8")
    except OSError as e:
        _fail(f"Cannot write {path}", e)
    remaining = len(parse_conflicts(resolved))
    typer.echo(f"Resolved {path} ({remaining} conflict(s) remaining)")
