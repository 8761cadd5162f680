"""CLI interface for Reclaim."""

from __future__ import annotations

import json
import logging
import sys

import click

from reclaim.core.engine import ReclaimEngine
from reclaim.core.ledger import HistoryLedger
from reclaim.core.sources import FileSource, LocalFileSource, ReclaimError, UriFileSource
from reclaim.models.category import CATEGORIES, parse_category_ids
from reclaim.models.scan_result import ScanSnapshot
from reclaim.settings import ReclaimConfig, load_config
from reclaim.storage import JsonHistoryStore
from reclaim.utils import format_mb, format_relative_time


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _build_engine(config: ReclaimConfig, use_uri: bool = False) -> ReclaimEngine:
    source: FileSource = UriFileSource(config.root) if use_uri else LocalFileSource(config.root)
    ledger = HistoryLedger(JsonHistoryStore(config.history_path))
    return ReclaimEngine(source, ledger, allow_delete=config.allow_delete)


def _unavailable(exc: Exception) -> None:
    click.echo(f"{click.style('Operation unavailable:', fg='red', bold=True)} {exc}", err=True)
    sys.exit(1)


def _print_snapshot(snapshot: ScanSnapshot, show_files: bool = False) -> None:
    for summary in snapshot.categories:
        files = snapshot.files_for(summary.id)
        if files:
            click.echo(
                f"  {click.style('✓', fg='green')} {summary.name:15s} — "
                f"{click.style(format_mb(summary.size_mb), fg='green', bold=True)} "
                f"({len(files):,} files)  {click.style(summary.description, fg='bright_black')}"
            )
        else:
            click.echo(f"  {click.style('·', fg='bright_black')} {summary.name:15s} — nothing to clean")
        if show_files:
            for record in files:
                click.echo(f"      {record.path}")

    click.echo(f"\nTotal used:        {format_mb(snapshot.total_used_mb)} in {snapshot.file_count:,} files")
    click.echo(f"Total reclaimable: {click.style(format_mb(snapshot.total_reclaimable_mb), fg='green', bold=True)}")
    if snapshot.truncated:
        click.echo(click.style("(scan stopped at the file limit, totals are partial)", fg="yellow"))
    click.echo()


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """Reclaim — find and clean reclaimable storage."""
    _setup_logging(verbose)


# ── categories ───────────────────────────────────────────────────────────

@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def categories(as_json: bool) -> None:
    """List the cleanup categories."""
    if as_json:
        data = [{"id": c.id.value, "name": c.name, "description": c.description} for c in CATEGORIES]
        click.echo(json.dumps(data, indent=2))
        return

    for c in CATEGORIES:
        click.echo(f"  {click.style(c.id.value, fg='cyan', bold=True):22s}  {c.name}")
        click.echo(f"    {c.description}")


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("root", required=False, type=click.Path(file_okay=False))
@click.option("--uri", "use_uri", is_flag=True, help="Walk through file:// handles (capped file count)")
@click.option("--files", "show_files", is_flag=True, help="List the files in each category")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scan(root: str | None, use_uri: bool, show_files: bool, as_json: bool) -> None:
    """Scan ROOT for reclaimable files (preview only, never deletes)."""
    config = load_config(root=root)
    engine = _build_engine(config, use_uri)

    try:
        snapshot = engine.get_snapshot()
    except ReclaimError as exc:
        _unavailable(exc)
        return

    if as_json:
        data = snapshot.to_dict(include_files=show_files)
        data["history"] = engine.get_history()["history"]
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"\n{click.style('🔍', bold=True)} Scanned {snapshot.root}\n")
    _print_snapshot(snapshot, show_files)


# ── clean ────────────────────────────────────────────────────────────────

@main.command()
@click.argument("root", required=False, type=click.Path(file_okay=False))
@click.option(
    "--category", "-c", "category_ids", multiple=True,
    type=click.Choice([c.id.value for c in CATEGORIES]),
    help="Category to clean (repeatable). Defaults to all.",
)
@click.option("--apply", "apply_", is_flag=True, help="Really delete files")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--uri", "use_uri", is_flag=True, help="Walk through file:// handles (capped file count)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def clean(
    root: str | None,
    category_ids: tuple[str, ...],
    apply_: bool,
    yes: bool,
    use_uri: bool,
    as_json: bool,
) -> None:
    """Clean categories under ROOT.

    Without --apply (or RECLAIM_ALLOW_DELETE) nothing is deleted and the
    result is a simulation.
    """
    config = load_config(root=root, allow_delete=apply_ or None)
    engine = _build_engine(config, use_uri)
    selected = parse_category_ids(category_ids) if category_ids else [c.id for c in CATEGORIES]

    if config.allow_delete and not yes and not as_json:
        names = ", ".join(c.value for c in selected)
        if not click.confirm(f"Permanently delete {names} files under {config.root}?", default=False):
            click.echo("Aborted.")
            return

    try:
        report = engine.clean(selected)
    except ReclaimError as exc:
        _unavailable(exc)
        return

    if as_json:
        click.echo(json.dumps(report.to_dict(include_files=False), indent=2))
        return

    verb = "Would free" if report.simulated else "Freed"
    click.echo(
        f"\n{click.style('🧹', bold=True)} {verb} "
        f"{click.style(format_mb(report.cleaned_mb), fg='green', bold=True)} "
        f"from {report.cleaned_files:,} files"
    )
    if report.simulated:
        click.echo("(simulation — no files were deleted)")
    elif report.result.skipped_files:
        click.echo(click.style(f"{report.result.skipped_files:,} files could not be removed", fg="yellow"))
    click.echo()
    _print_snapshot(report.snapshot)


# ── history ──────────────────────────────────────────────────────────────

@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def history(as_json: bool) -> None:
    """Show recent clean operations."""
    config = load_config()
    ledger = HistoryLedger(JsonHistoryStore(config.history_path))

    if as_json:
        click.echo(json.dumps(ledger.to_dict(), indent=2))
        return

    entries = ledger.entries
    if not entries:
        click.echo("No cleans recorded yet.")
        return

    click.echo(f"\n{click.style('📊', bold=True)} Recent cleans\n")
    for entry in entries:
        tag = click.style(" [simulated]", fg="bright_black") if entry.simulated else ""
        cats = ", ".join(c.value for c in entry.categories) or "nothing selected"
        click.echo(
            f"  {format_relative_time(entry.time):16s} "
            f"{click.style(format_mb(entry.cleaned_mb), fg='green', bold=True):>10s}  "
            f"{entry.cleaned_files:,} files  ({cats}){tag}"
        )
    click.echo()


# ── service ──────────────────────────────────────────────────────────────

@main.group()
def service() -> None:
    """D-Bus service management."""


@service.command("start")
@click.argument("root", required=False, type=click.Path(file_okay=False))
def service_start(root: str | None) -> None:
    """Start the D-Bus service in foreground."""
    from reclaim.dbus_service import start_service

    config = load_config(root=root)
    click.echo(f"Starting Reclaim D-Bus service for {config.root}...")
    start_service(config)
