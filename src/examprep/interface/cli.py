"""examprep CLI: statistics report and configuration commands."""

import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated

import typer

from examprep.application.config import resolve_settings
from examprep.consts import VERSION
from examprep.domain.exceptions import ConfigurationError
from examprep.interface.serialize import to_camel_dict

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="examprep: study statistics for exam preparation.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage examprep configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for examprep."""
    if verbose >= 1:
        logging.getLogger().setLevel(logging.DEBUG)
    logger.debug(f"examprep v{VERSION}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _parse_now(value: str | None) -> datetime:
    if value is None:
        return datetime.now(UTC)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise typer.BadParameter(f"Not an ISO date/time: {value}", param_hint="--now") from e
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _load_settings(overrides: dict | None = None):
    try:
        return resolve_settings(overrides)
    except ConfigurationError as e:
        typer.secho(f"Configuration error: {e}", fg="red", err=True)
        for error in e.context.get("errors", []):
            loc = ".".join(str(part) for part in error["loc"]) or "settings"
            typer.secho(f"  {loc}: {error['msg']}", fg="red", err=True)
        raise typer.Exit(1) from e


@app.command()
def stats(
    path: Annotated[
        Path | None,
        typer.Argument(
            help="JSON or YAML records export. Defaults to 'records_path' in config."
        ),
    ] = None,
    period: Annotated[
        int | None, typer.Option("--period", min=1, help="Reporting window in days.")
    ] = None,
    include_history: Annotated[
        bool, typer.Option("--include-history", help="Include the most recent reviews.")
    ] = False,
    include_recommendations: Annotated[
        bool,
        typer.Option("--include-recommendations", help="Include study recommendations."),
    ] = False,
    streak: Annotated[
        str | None, typer.Option(help="Streak source: seed (precomputed) or dates.")
    ] = None,
    paper: Annotated[
        list[str] | None, typer.Option("--paper", help="Paper tag to report. Repeatable.")
    ] = None,
    now: Annotated[
        str | None, typer.Option(help="Reference time (ISO 8601). Defaults to now.")
    ] = None,
):
    """Print the [bold green]statistics report[/bold green] as JSON."""
    from examprep.application.stats.service import StatsService
    from examprep.infrastructure.adapters.stats.file_stats import FileStatsRepository

    if streak is not None and streak not in ("seed", "dates"):
        raise typer.BadParameter("Use 'seed' or 'dates'.", param_hint="--streak")

    settings = _load_settings(
        {
            "records_path": path,
            "period_days": period,
            "streak_strategy": streak,
            "papers": paper or None,
        }
    )
    reference = _parse_now(now)

    records_path = settings.records_path
    if records_path is None:
        typer.secho("No records file given and none configured.", fg="red", err=True)
        raise typer.Exit(2)
    if not records_path.is_file():
        typer.secho(f"Records file not found: {records_path}", fg="red", err=True)
        raise typer.Exit(1)

    service = StatsService(FileStatsRepository(records_path), settings=settings)
    report = asyncio.run(
        service.get_report(
            now=reference,
            include_history=include_history,
            include_recommendations=include_recommendations,
        )
    )

    payload = to_camel_dict(report)
    if not include_history:
        payload.pop("recentHistory", None)
    if not include_recommendations:
        payload.pop("recommendations", None)
        payload.pop("topicRecommendations", None)

    typer.echo(json.dumps(payload, indent=2))


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    settings = _load_settings()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in settings.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


def main():
    app()


if __name__ == "__main__":
    main()
