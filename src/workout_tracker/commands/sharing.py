"""Data sharing toggle commands."""

import click

from .base import (
    async_command,
    build_engine,
    echo_info,
    echo_success,
    ensure_initialized,
    handle_errors,
)


@click.group()
def sharing():
    """Control anonymous data sharing.

    While sharing is disabled nothing is queued or sent.
    """
    pass


@sharing.command("enable")
@click.pass_context
@handle_errors
@async_command
async def enable(ctx: click.Context):
    """Enable anonymous data sharing."""
    ensure_initialized(ctx)

    engine = await build_engine()
    await engine.set_sharing_enabled(True)
    echo_success("Anonymous data sharing enabled")


@sharing.command("disable")
@click.pass_context
@handle_errors
@async_command
async def disable(ctx: click.Context):
    """Disable anonymous data sharing.

    Queued items stay in the local queue until sharing is enabled again.
    """
    ensure_initialized(ctx)

    engine = await build_engine()
    await engine.set_sharing_enabled(False)
    echo_success("Anonymous data sharing disabled")


@sharing.command("status")
@click.pass_context
@handle_errors
@async_command
async def status(ctx: click.Context):
    """Show whether anonymous data sharing is enabled."""
    ensure_initialized(ctx)

    engine = await build_engine()
    if await engine.is_sharing_enabled():
        echo_info("Anonymous data sharing is enabled")
    else:
        echo_info("Anonymous data sharing is disabled")
