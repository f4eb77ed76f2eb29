"""Sync queue commands."""

import asyncio
import signal

import click

from ..config import get_settings
from .base import (
    async_command,
    build_engine,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    handle_errors,
    load_export,
)


@click.group()
def sync():
    """Queue and send anonymized workout statistics.

    Data is anonymized before it is queued: the user id is replaced by a
    SHA-256 hash and workouts are reduced to per-exercise totals.
    """
    pass


@sync.command("queue")
@click.argument("export_path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
@handle_errors
@async_command
async def queue(ctx: click.Context, export_path: str):
    """Anonymize an exported profile and workouts and queue them.

    EXPORT_PATH is a JSON file with "userId", "profile" and "workouts".
    """
    ensure_initialized(ctx)

    user_id, profile, workouts = load_export(export_path)

    engine = await build_engine()
    item_id = await engine.queue(user_id, profile, workouts)

    if item_id is None:
        echo_info("Data sharing is disabled. Nothing was queued.")
        return

    echo_success(f"Queued {len(workouts)} workouts as item {item_id}")


@sync.command("run")
@click.pass_context
@handle_errors
@async_command
async def run(ctx: click.Context):
    """Send all pending items once."""
    ensure_initialized(ctx)

    engine = await build_engine()
    result = await engine.drain()

    if result.processed == 0:
        echo_info("Nothing to send.")
        return

    echo_success(f"Sent {result.succeeded} of {result.processed} items")
    if result.failed:
        echo_warning(f"{result.failed} items failed. See 'workout-tracker sync list'.")


@sync.command("retry")
@click.pass_context
@handle_errors
@async_command
async def retry(ctx: click.Context):
    """Return failed items to the pending queue."""
    ensure_initialized(ctx)

    engine = await build_engine()
    count = await engine.retry_failed()

    if count == 0:
        echo_info("No failed items.")
        return

    echo_success(f"Reset {count} failed items. Run 'workout-tracker sync run' to send them.")


@sync.command("status")
@click.option("--check-server", is_flag=True, help="Also check that the backend is reachable")
@click.pass_context
@handle_errors
@async_command
async def status(ctx: click.Context, check_server: bool):
    """Show queue counts and sync settings."""
    ensure_initialized(ctx)

    engine = await build_engine()
    summary = await engine.get_status()
    settings = summary.settings

    click.echo()
    click.echo(click.style("Sync Status", bold=True))
    click.echo("=" * 40)
    click.echo(f"Data sharing: {'enabled' if settings.enabled else 'disabled'}")
    click.echo(f"Auto sync: {'on' if settings.auto_sync else 'off'}")
    click.echo(f"Max retries: {settings.max_retries}")
    click.echo(f"Delay between items: {settings.retry_delay} ms")
    click.echo()
    click.echo(f"Pending: {summary.pending}")
    click.echo(f"Failed: {summary.failed}")
    if summary.processing:
        click.echo(f"Processing: {summary.processing}")

    if check_server:
        click.echo()
        if await engine.transport.health_check():
            echo_success("Backend reachable")
        else:
            echo_warning("Backend unreachable. Items stay queued until it is back.")


@sync.command("list")
@click.pass_context
@handle_errors
@async_command
async def list_items(ctx: click.Context):
    """List queued items."""
    ensure_initialized(ctx)

    engine = await build_engine()
    items = await engine.list_queue()

    if not items:
        echo_info("Queue is empty.")
        return

    rows = [
        [
            str(item.id),
            item.timestamp.strftime("%Y-%m-%d %H:%M"),
            item.status.value,
            str(len(item.payload.workouts)),
            str(item.retry_count),
            (item.last_error or "-")[:40],
        ]
        for item in items
    ]

    click.echo()
    click.echo(
        format_table(
            headers=["ID", "Queued", "Status", "Workouts", "Retries", "Last Error"],
            rows=rows,
        )
    )


@sync.command("clear")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@handle_errors
@async_command
async def clear(ctx: click.Context, yes: bool):
    """Delete every queued item without sending it."""
    ensure_initialized(ctx)

    if not yes and not click.confirm("Delete all queued items?"):
        return

    engine = await build_engine()
    removed = await engine.clear_queue()
    echo_success(f"Removed {removed} items")


@sync.command("config")
@click.option(
    "--max-retries", type=click.IntRange(min=1), help="Failed sends before an item is marked failed"
)
@click.option(
    "--retry-delay", type=click.IntRange(min=0), help="Delay between items in milliseconds"
)
@click.option("--auto-sync/--no-auto-sync", default=None, help="Enable background sync")
@click.pass_context
@handle_errors
@async_command
async def config(
    ctx: click.Context,
    max_retries: int | None,
    retry_delay: int | None,
    auto_sync: bool | None,
):
    """Change retry and background sync settings."""
    ensure_initialized(ctx)

    changes = {
        name: value
        for name, value in (
            ("max_retries", max_retries),
            ("retry_delay", retry_delay),
            ("auto_sync", auto_sync),
        )
        if value is not None
    }

    engine = await build_engine()
    if not changes:
        echo_info("No changes given.")
        return

    settings = await engine.update_settings(**changes)
    echo_success(
        f"Max retries {settings.max_retries}, delay {settings.retry_delay} ms, "
        f"auto sync {'on' if settings.auto_sync else 'off'}"
    )


@sync.command("watch")
@click.option(
    "--interval", type=click.IntRange(min=1000), default=None, help="Milliseconds between sync passes"
)
@click.option("--require-online", is_flag=True, help="Skip passes while the backend is unreachable")
@click.pass_context
@handle_errors
@async_command
async def watch(ctx: click.Context, interval: int | None, require_online: bool):
    """Keep sending queued items in the background until interrupted."""
    ensure_initialized(ctx)

    interval = interval or get_settings().sync_interval
    engine = await build_engine(recover=True)
    handle = await engine.start_background(interval, require_online=require_online)

    if not handle.running:
        echo_info(
            "Auto sync is disabled. Enable it with 'workout-tracker sync config --auto-sync'."
        )
        return

    echo_info(f"Syncing every {interval / 1000:.0f}s. Press Ctrl+C to stop.")

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, handle.stop)
        loop.add_signal_handler(signal.SIGTERM, handle.stop)
    except NotImplementedError:
        # Windows event loops have no signal handlers
        pass

    await handle.wait()
    echo_success(f"Stopped after {handle.runs} sync passes")
