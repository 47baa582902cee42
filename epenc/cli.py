"""epenc CLI — rip disc titles to per-episode files with HandBrake."""

from __future__ import annotations

import logging
from datetime import datetime
from functools import partial
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typer.core import TyperGroup

from epenc.analyze import SeasonAggregator, select_episodes
from epenc.config import Settings, load_settings
from epenc.errors import EpencError, ScanFailure
from epenc.export import (
    EncoderOptions,
    build_encode_jobs,
    export_json,
    get_dry_run_commands,
    groups_to_dict,
    jobs_report,
    jobs_to_dict,
    run_encode_jobs,
    titles_report,
)
from epenc.model import EncodeJob
from epenc.prompt import ConsoleOperator
from epenc.scan import scan_disc
from epenc.utils import natural_sorted, resolve_disc_path


class DefaultEncodeGroup(TyperGroup):
    """Treat ``epenc DISC...`` as ``epenc encode DISC...``."""

    def parse_args(self, ctx, args):
        own_options = {opt for param in self.get_params(ctx) for opt in param.opts}
        if not args or (args[0] not in self.commands and args[0] not in own_options):
            args = ["encode", *args]
        return super().parse_args(ctx, args)


app = typer.Typer(name="epenc", help="Disc title selection and episode encoder", cls=DefaultEncodeGroup)
console = Console(stderr=True)
log = logging.getLogger("epenc")

LOG_RECORD_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings, verbose: bool = False) -> Path:
    """Log to the console via rich and to a timestamped debug file in the log dir."""
    log_dir = settings.resolved_log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().astimezone().isoformat(timespec="seconds").replace(":", "-")
    log_file = log_dir / f"debug-{stamp}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_RECORD_FORMAT))

    console_handler = RichHandler(console=console, show_path=False, markup=False)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.addHandler(file_handler)
    root.addHandler(console_handler)
    return log_file


def _setup(discs: list[str] | None, verbose: bool) -> tuple[Settings, list[str]]:
    if not discs:
        console.print("[red]Error:[/red] Must pass paths to discs as arguments")
        raise typer.Exit(1)
    try:
        settings = load_settings()
        settings.ensure_directories()
    except (EpencError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging(settings, verbose)
    return settings, natural_sorted(discs)


def _scan_all(settings: Settings, disc_paths: list[str]) -> SeasonAggregator:
    aggregator = SeasonAggregator(allow_no_subtitles=settings.allow_no_subtitles)
    for disc in disc_paths:
        disc_path = resolve_disc_path(disc, settings.remap_dirs, settings.working_dir)
        with console.status(f"[bold]Scanning {disc_path}…"):
            titles = scan_disc(
                disc_path,
                handbrake=settings.handbrake_path,
                mode=settings.scan_mode,
                language=settings.language,
                min_duration_s=settings.min_scan_seconds,
            )
        log.info("Scanned %s: %d title(s)", disc_path, len(titles))
        aggregator.add_titles(titles)
    return aggregator


def _fail(e: EpencError) -> NoReturn:
    console.print(f"[red]Error:[/red] {e}")
    if isinstance(e, ScanFailure):
        for stream in (e.stdout, e.stderr):
            if stream.strip():
                log.debug("Scanner output:\n%s", stream)
    raise typer.Exit(1)


def _show_progress(current: int, total: int, job: EncodeJob) -> None:
    console.rule(f"[bold]{current}/{total}[/bold] {escape(job.output_filename)}")


@app.command()
def encode(
    discs: list[str] = typer.Argument(None, help="Paths to disc images or folders"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print encoder commands without executing"),
    as_json: bool = typer.Option(False, "--json", help="With --dry-run, print the job plan as JSON to stdout"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on the console"),
):
    """Scan discs, confirm episodes per season, then encode them."""
    settings, disc_paths = _setup(discs, verbose)
    options = EncoderOptions(
        handbrake=settings.handbrake_path,
        extension=settings.extension,
        video_bitrate=settings.video_bitrate,
        audio_bitrate=settings.audio_bitrate,
        encoder_preset=settings.encoder_preset,
    )

    try:
        aggregator = _scan_all(settings, disc_paths)
        select = partial(select_episodes, output_dir=settings.output_dir, extension=settings.extension)
        results = aggregator.confirm_all(ConsoleOperator(console), select)
        jobs = build_encode_jobs(results, settings.language)

        console.print()
        console.print(jobs_report(jobs), markup=False, highlight=False)
        if dry_run and as_json:
            typer.echo(export_json(jobs_to_dict(jobs)))
            return
        if dry_run:
            for plan in get_dry_run_commands(jobs, options):
                note = "  [yellow](exists, will skip)[/yellow]" if plan["exists"] else ""
                console.print(f"\n[bold]Job {plan['index']}[/bold] → {plan['output']}{note}")
                console.print(f"  [dim]{' '.join(plan['command'])}[/dim]")
            return

        created = run_encode_jobs(jobs, options, settings.resolved_log_dir, on_progress=_show_progress)
    except EpencError as e:
        _fail(e)

    for p in created:
        console.print(f"[green]Created:[/green] {p}")
    if not created:
        console.print("[yellow]Nothing was encoded.[/yellow]")


@app.command()
def scan(
    discs: list[str] = typer.Argument(None, help="Paths to disc images or folders"),
    as_json: bool = typer.Option(False, "--json", help="Print scanned titles as JSON to stdout"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on the console"),
):
    """Scan discs and list their titles grouped by season, without encoding."""
    settings, disc_paths = _setup(discs, verbose)
    try:
        aggregator = _scan_all(settings, disc_paths)
    except EpencError as e:
        _fail(e)

    if as_json:
        typer.echo(export_json(groups_to_dict(aggregator)))
        return
    for group in aggregator:
        typer.echo(titles_report(group))
        typer.echo("")


if __name__ == "__main__":
    app()
