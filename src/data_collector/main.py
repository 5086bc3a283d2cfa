"""CLI entrypoint for the data collector reporter."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich import print

from data_collector.adapters import HttpCollectorTransport, RecordingTransport
from data_collector.config import settings, should_register_reporter
from data_collector.errors import DataCollectorError
from data_collector.replay import RecordedNesting, replay_file
from data_collector.reporter import Reporter

app = typer.Typer(help="Data collector run reporter")


def _build_reporter(dry_run: bool) -> tuple[Reporter, RecordingTransport | None]:
    if dry_run:
        recorder = RecordingTransport()
        return Reporter(transport=recorder, config=settings, nested_check=RecordedNesting()), recorder

    transport = HttpCollectorTransport(
        settings.server_url,
        timeout_seconds=settings.timeout_seconds,
        user_agent=settings.app_name,
    )
    return Reporter(transport=transport, config=settings, nested_check=RecordedNesting()), None


@app.command()
def config() -> None:
    """Show effective collector configuration."""
    print(
        {
            "app_name": settings.app_name,
            "enabled": settings.enabled,
            "server_url": settings.server_url,
            "raise_on_failure": settings.raise_on_failure,
            "timeout_seconds": settings.timeout_seconds,
            "registered": should_register_reporter(settings),
        }
    )


@app.command()
def replay(
    events_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON-lines run event log"),
    dry_run: bool = typer.Option(False, help="Record documents locally instead of posting them"),
) -> None:
    """Replay a recorded run through the reporter."""
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if not dry_run and not should_register_reporter(settings):
        print({"error": "Collector is disabled. Set DATA_COLLECTOR_SERVER_URL or use --dry-run."})
        raise typer.Exit(code=1)

    reporter, recorder = _build_reporter(dry_run)
    try:
        events = replay_file(reporter, events_file)
    except (DataCollectorError, ValueError) as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    summary = {
        "events": events,
        "enabled": reporter.enabled,
        "total_resource_count": reporter.total_resource_count,
        "updated_resource_count": len(reporter.updated_resources),
    }
    if recorder is not None:
        summary["documents"] = recorder.documents
    print(summary)


if __name__ == "__main__":
    app()
