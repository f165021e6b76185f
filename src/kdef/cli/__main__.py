from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer

from ..core.config import Config
from ..core.entry import MODULE, Entry
from ..core.errors import KdefError
from ..core.formatter import format as format_config
from ..core.formatter import format_diff
from ..core.operations import diff as diff_configs
from ..core.operations import merge as merge_configs
from ..core.operations import override as override_configs
from ..core.parser import parse_file
from ..core.profile import Profile
from ..core.validator import validate_config

app = typer.Typer(help="kdef - inspect and combine Kconfig files")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(path: Path, prefix: Optional[str]) -> Config:
    try:
        return parse_file(path, prefix=prefix)
    except KdefError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _emit(config: Config, output: Optional[Path], **format_opts) -> None:
    text = format_config(config, **format_opts)
    if output is None:
        typer.echo(text)
        return
    if text and not text.endswith("\n"):
        text += "\n"
    output.write_text(text, encoding="utf-8")
    typer.echo(f"Wrote {output}")


def _entry_json(entry: Entry) -> dict:
    value = "m" if entry.value is MODULE else entry.value
    return {
        "key": entry.key,
        "value": value,
        "kind": entry.kind.value,
        "line": entry.line_number,
        "comment": entry.inline_comment,
    }


@app.command()
def show(
    file: Path,
    prefix: Optional[str] = typer.Option(None, "--prefix"),
    all_entries: bool = typer.Option(False, "--all", help="Include comments and blank lines"),
):
    """Print the parsed entries of FILE as JSON."""
    cfg = _load(file, prefix)
    entries = [e for e in cfg.entries if all_entries or e.is_config]
    typer.echo(json.dumps({
        "prefix": cfg.prefix,
        "entries": [_entry_json(e) for e in entries],
    }, indent=2))


@app.command()
def fmt(
    file: Path,
    prefix: Optional[str] = typer.Option(None, "--prefix"),
    minimal: bool = typer.Option(False, "--minimal", help="Drop comments and sort by key"),
    no_comments: bool = typer.Option(False, "--no-comments"),
    sort: bool = typer.Option(False, "--sort", help="Sort by key (with --no-comments)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
):
    """Re-render FILE."""
    cfg = _load(file, prefix)
    if minimal:
        no_comments, sort = True, True
    _emit(cfg, output, preserve_comments=not no_comments, sort_entries=sort)


@app.command()
def merge(
    base: Path,
    fragments: List[Path],
    prefix: Optional[str] = typer.Option(None, "--prefix"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
):
    """Merge FRAGMENTS into BASE in order; later files win."""
    cfg = _load(base, prefix)
    for fragment in fragments:
        cfg = merge_configs(cfg, _load(fragment, prefix or cfg.prefix))
    _emit(cfg, output)


@app.command()
def override(
    base: Path,
    overlay: Path,
    prefix: Optional[str] = typer.Option(None, "--prefix"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
):
    """Replace values in BASE with OVERLAY without adding new keys."""
    cfg = _load(base, prefix)
    cfg = override_configs(cfg, _load(overlay, prefix or cfg.prefix))
    _emit(cfg, output)


@app.command()
def diff(
    base: Path,
    target: Path,
    prefix: Optional[str] = typer.Option(None, "--prefix"),
    as_json: bool = typer.Option(False, "--json"),
):
    """Compare BASE and TARGET key by key."""
    base_cfg = _load(base, prefix)
    target_cfg = _load(target, prefix or base_cfg.prefix)
    result = diff_configs(base_cfg, target_cfg)
    if as_json:
        typer.echo(json.dumps({
            "added": [_entry_json(e) for e in result.added],
            "removed": [_entry_json(e) for e in result.removed],
            "changed": [
                {"old": _entry_json(old), "new": _entry_json(new)}
                for old, new in result.changed
            ],
            "unchanged_count": result.unchanged_count,
        }, indent=2))
        return
    typer.echo(format_diff(result, base_cfg.prefix))


@app.command()
def validate(file: Path, prefix: Optional[str] = typer.Option(None, "--prefix")):
    """Check FILE for structurally invalid entries."""
    cfg = _load(file, prefix)
    result = validate_config(cfg)
    if not result:
        typer.echo(f"Invalid entry at index {result.index}: {result.reason}", err=True)
        raise typer.Exit(1)
    typer.echo("OK")


@app.command()
def build(
    profile: str,
    config: Optional[Path] = typer.Option(None, "--config", help="Path to kdef.yaml"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
):
    """Assemble PROFILE from the fragments listed in kdef.yaml."""
    try:
        cfg = Profile(profile, config_path=config).get_config()
    except (KdefError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    _emit(cfg, output)


if __name__ == "__main__":
    app()
