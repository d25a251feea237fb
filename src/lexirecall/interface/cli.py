"""lexirecall CLI: record answers, list due items, and show plans and statistics."""

import asyncio
import dataclasses
import json
import logging
import sqlite3
import sys
from collections.abc import Coroutine
from datetime import datetime, timedelta
from pathlib import Path
from typing import Annotated, Any, TypeVar

import typer

from lexirecall.application.config import AppConfig, resolve_config
from lexirecall.application.factory import get_review_service
from lexirecall.application.planner import generate_daily_study_plan
from lexirecall.consts import VERSION
from lexirecall.domain.models import AnswerEvent, SessionSummary

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="lexirecall: spaced-repetition scheduler for vocabulary learning.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage lexirecall configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

VERBOSITY_LEVELS = {0: logging.ERROR, 1: logging.WARNING, 2: logging.INFO}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def humanize_error(error: Exception) -> str:
    """Turn storage errors into a one-line message for the terminal."""
    if isinstance(error, sqlite3.OperationalError):
        msg = str(error)
        if "unable to open database" in msg:
            return "Could not open the review database. Check 'db_path' in your config."
        if "locked" in msg:
            return "The review database is locked by another process. Try again shortly."
        return f"Database error: {msg}"
    if isinstance(error, sqlite3.DatabaseError):
        return f"The review database looks corrupted: {error}"
    return str(error)


def _resolve_with_overrides(ctx: typer.Context, **overrides: Any) -> AppConfig:
    verbose = ctx.obj.get("verbose", 1) if ctx.obj else 1
    return resolve_config({**overrides, "verbose": verbose})


def _run(coro: Coroutine[Any, Any, T]) -> T:
    try:
        return asyncio.run(coro)
    except sqlite3.Error as e:
        logger.error(f"Storage failure: {e}", exc_info=True)
        typer.secho(humanize_error(e), fg="red", err=True)
        raise typer.Exit(1)


def _to_jsonable(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, list):
        return [_to_jsonable(o) for o in obj]
    return obj


def _echo_json(obj: Any) -> None:
    typer.echo(json.dumps(_to_jsonable(obj), indent=2, default=str))


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 1,
):
    """Global settings for lexirecall."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    logging.getLogger().setLevel(VERBOSITY_LEVELS.get(verbose, logging.DEBUG))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def version():
    """Print the lexirecall version."""
    typer.echo(VERSION)


@app.command()
def answer(
    ctx: typer.Context,
    item_id: Annotated[str, typer.Argument(help="Vocabulary item identifier.")],
    correct: Annotated[
        bool, typer.Option("--correct/--wrong", help="Whether the answer was correct.")
    ],
    time_ms: Annotated[
        int | None, typer.Option("--time-ms", help="Response time in milliseconds.")
    ] = None,
    difficulty: Annotated[
        int,
        typer.Option(
            min=1, max=5, clamp=True, help="Item difficulty 1-5, used for first exposure."
        ),
    ] = 3,
    db_path: Annotated[Path | None, typer.Option(help="Custom review database.")] = None,
):
    """[bold green]Record[/bold green] an answer and schedule the next review."""
    config = _resolve_with_overrides(ctx, db_path=db_path)
    service = get_review_service(config)
    event = AnswerEvent(is_correct=correct, response_time_ms=time_ms)

    record = _run(service.record_answer(item_id, event, difficulty=difficulty))
    _echo_json(record)


@app.command()
def due(
    ctx: typer.Context,
    limit: Annotated[int | None, typer.Option(min=1, help="Maximum items to list.")] = None,
    db_path: Annotated[Path | None, typer.Option(help="Custom review database.")] = None,
):
    """List items due for review, weakest first."""
    config = _resolve_with_overrides(ctx, db_path=db_path, due_limit=limit)
    service = get_review_service(config)

    records = _run(service.get_due_items(config.due_limit))
    _echo_json(records)


@app.command()
def mastery(
    ctx: typer.Context,
    item_id: Annotated[str, typer.Argument(help="Vocabulary item identifier.")],
    db_path: Annotated[Path | None, typer.Option(help="Custom review database.")] = None,
):
    """Show the mastery level of an item."""
    config = _resolve_with_overrides(ctx, db_path=db_path)
    service = get_review_service(config)

    level = _run(service.get_mastery(item_id))
    typer.echo(level.value)


@app.command()
def plan(
    ctx: typer.Context,
    goal: Annotated[int | None, typer.Option(min=0, help="Words to study today.")] = None,
    ratio: Annotated[
        float | None, typer.Option(min=0.0, max=1.0, help="Share of new words.")
    ] = None,
):
    """Split today's goal into new and review words."""
    config = _resolve_with_overrides(ctx, daily_goal=goal, new_words_ratio=ratio)
    _echo_json(generate_daily_study_plan(config.daily_goal, config.new_words_ratio))


@app.command()
def session(
    ctx: typer.Context,
    words: Annotated[int, typer.Option(min=0, help="Words studied.")],
    correct: Annotated[int, typer.Option(min=0, help="Correct answers.")],
    total: Annotated[int, typer.Option(min=0, help="Total answers.")],
    minutes: Annotated[float, typer.Option(min=0.0, help="Session length in minutes.")] = 0.0,
    session_type: Annotated[str, typer.Option("--type", help="Session label.")] = "learn",
    db_path: Annotated[Path | None, typer.Option(help="Custom review database.")] = None,
):
    """Log a finished study session ending now."""
    config = _resolve_with_overrides(ctx, db_path=db_path)
    service = get_review_service(config)

    end = datetime.now()
    start = end - timedelta(minutes=minutes)
    summary = SessionSummary(
        session_date=start.date(),
        start_time=start,
        end_time=end,
        words_studied=words,
        correct_answers=correct,
        total_answers=total,
        session_type=session_type,
    )
    _run(service.log_session(summary))
    typer.secho(f"Logged {session_type} session ({words} words).", fg="green")


@app.command()
def stats(
    ctx: typer.Context,
    window: Annotated[
        int | None, typer.Option(min=0, help="Efficiency window in days.")
    ] = None,
    days: Annotated[int | None, typer.Option(min=0, help="Prediction horizon in days.")] = None,
    db_path: Annotated[Path | None, typer.Option(help="Custom review database.")] = None,
):
    """Show overview, efficiency, progress prediction and advice."""
    config = _resolve_with_overrides(
        ctx, db_path=db_path, efficiency_window_days=window, prediction_days=days
    )
    service = get_review_service(config)

    async def run():
        overview = await service.get_overview()
        efficiency = await service.get_efficiency(config.efficiency_window_days)
        prediction = await service.get_prediction(
            config.prediction_days, config.efficiency_window_days
        )
        advice = await service.get_advice(config.total_words, config.efficiency_window_days)
        return {
            "overview": _to_jsonable(overview),
            "efficiency": _to_jsonable(efficiency),
            "prediction": _to_jsonable(prediction),
            "advice": _to_jsonable(advice),
        }

    _echo_json(_run(run()))


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


if __name__ == "__main__":
    app()
