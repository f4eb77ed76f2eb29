"""Initialize project command."""

import click

from ..config import get_settings
from ..db import get_db_path, init_db
from .base import (
    async_command,
    build_engine,
    echo_info,
    echo_success,
    echo_warning,
    handle_errors,
)


@click.command()
@handle_errors
@async_command
async def init():
    """Initialize the workout-tracker database.

    Creates the data directory and the sync queue schema. Running it
    again is safe and returns interrupted sync items to the queue.
    """
    data_dir = get_settings().data_dir
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing workout-tracker in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    engine = await build_engine(db_path)
    recovered = await engine.recover_interrupted()
    if recovered:
        echo_warning(f"Returned {recovered} interrupted items to the queue")

    status = "enabled" if engine.settings.enabled else "disabled"
    click.echo()
    click.echo(f"Anonymous data sharing is {status}.")
    click.echo()
    click.echo("Next steps:")
    click.echo("  workout-tracker sync queue export.json   # Queue anonymized data")
    click.echo("  workout-tracker sync run                 # Send queued data")
