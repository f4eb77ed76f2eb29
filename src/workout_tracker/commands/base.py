"""Shared CLI utilities."""

import asyncio
import json
from functools import wraps
from pathlib import Path

import click

from ..clients.api import ApiClient
from ..db import SyncQueueRepository, SyncSettingsRepository, get_db_path
from ..errors import InvalidInputError, WorkoutTrackerError
from ..models.workout import BodyProfile, WorkoutRecord
from ..services.sync_engine import SyncEngine


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def handle_errors(f):
    """Report workout-tracker errors as [ERROR] lines with exit code 1."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except WorkoutTrackerError as e:
            echo_error(str(e))
            raise click.exceptions.Exit(1) from e

    return wrapper


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'workout-tracker init' first."
        )
        ctx.exit(1)


async def build_engine(db_path: Path | None = None, recover: bool = False) -> SyncEngine:
    """Create a sync engine over the local database.

    With ``recover``, items stranded in processing by an earlier run are
    returned to pending before the engine is handed out. Only startup
    commands recover, since another process may own those items.
    """
    db_path = db_path or get_db_path()
    engine = SyncEngine(
        queue_repo=SyncQueueRepository(db_path),
        settings_repo=SyncSettingsRepository(db_path),
        transport=ApiClient(),
    )
    if recover:
        await engine.recover_interrupted()
    await engine.reload()
    return engine


def load_export(path: str) -> tuple[str, BodyProfile, list[WorkoutRecord]]:
    """Load a user id, profile and workouts from a JSON export file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        user_id = data["userId"]
        profile = BodyProfile.from_dict({"userId": user_id, **data["profile"]})
        workouts = [
            WorkoutRecord.from_dict({"userId": user_id, **w})
            for w in data.get("workouts", [])
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidInputError(f"Invalid export file {path}: {e}") from e
    return user_id, profile, workouts


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row))
        )

    return "\n".join(lines)
