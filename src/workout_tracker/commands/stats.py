"""Workout statistics command."""

import click

from ..services.anonymizer import anonymize_workout
from ..services.statistics import percentile, summarize
from .base import echo_info, handle_errors, load_export


@click.command()
@click.argument("export_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--exercise", "-e", help="Only include this exercise")
@click.option("--percentile", "-p", "pct", type=float, help="Also report this percentile")
@handle_errors
def stats(export_path: str, exercise: str | None, pct: float | None):
    """Summarize per-workout max weights from a JSON export.

    Uses the same aggregates that are shared anonymously, so the numbers
    match what the backend compares against.
    """
    _, _, workouts = load_export(export_path)
    aggregates = [anonymize_workout(w) for w in workouts]
    if exercise:
        aggregates = [a for a in aggregates if a.exercise_name.lower() == exercise.lower()]

    weights = [a.max_weight for a in aggregates]
    if not weights:
        echo_info("No matching workouts.")
        return

    summary = summarize(weights)
    title = exercise or "All exercises"
    click.echo()
    click.echo(click.style(f"{title}: {summary.count} workouts", bold=True))
    click.echo(f"  Mean:   {summary.mean:.1f} kg")
    click.echo(f"  Median: {summary.median:.1f} kg")
    click.echo(f"  P25/P75/P90: {summary.p25:.1f} / {summary.p75:.1f} / {summary.p90:.1f} kg")
    click.echo(f"  Range:  {summary.min:.1f} - {summary.max:.1f} kg")

    if pct is not None:
        click.echo(f"  P{pct:g}: {percentile(weights, pct):.1f} kg")
