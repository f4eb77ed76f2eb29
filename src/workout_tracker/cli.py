"""CLI entry point for workout-tracker."""

import logging

import click

from .commands import compare, init, sharing, stats, sync


@click.group()
@click.version_option(version="0.1.0", prog_name="workout-tracker")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """workout-tracker: offline-first workout statistics sharing.

    Workout data is anonymized on this device, queued locally and sent
    to the statistics backend when it is reachable.

    Example usage:

        # Initialize the database
        workout-tracker init

        # Queue anonymized data from an export
        workout-tracker sync queue export.json

        # Send queued data, or keep sending in the background
        workout-tracker sync run
        workout-tracker sync watch
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register commands
main.add_command(init)
main.add_command(sharing)
main.add_command(sync)
main.add_command(stats)
main.add_command(compare)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
