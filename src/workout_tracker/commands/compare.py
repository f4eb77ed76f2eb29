"""Compare against similar users."""

import click

from ..clients.api import ApiClient
from ..services.anonymizer import anonymize_profile, anonymize_workout
from ..services.comparison import MIN_SIMILAR_USERS, comparison_rows, has_sufficient_sample
from .base import async_command, echo_info, echo_warning, format_table, handle_errors, load_export


@click.command()
@click.argument("export_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--exercise", "-e", required=True, help="Exercise to compare")
@handle_errors
@async_command
async def compare(export_path: str, exercise: str):
    """Compare your best weight with users of a similar build.

    Only height, weight and weekly frequency are sent; the backend
    answers with the max weight distribution of similar users.
    """
    _, profile, workouts = load_export(export_path)
    matching = [
        anonymize_workout(w) for w in workouts if w.exercise_name.lower() == exercise.lower()
    ]
    if not matching:
        echo_info(f"No workouts for {exercise}.")
        return

    latest = max(matching, key=lambda a: a.date)
    best = max(a.max_weight for a in matching)
    measurements = anonymize_profile(profile)

    data = await ApiClient().fetch_comparison_data(
        latest.body_part,
        latest.exercise_name,
        {
            "height": measurements["height"],
            "weight": measurements["weight"],
            "weeklyFrequency": measurements["weekly_frequency"],
        },
    )

    if not has_sufficient_sample(data):
        echo_warning(
            f"Not enough similar users to compare ({data.sample_size} of {MIN_SIMILAR_USERS})."
        )
        return

    click.echo()
    click.echo(
        click.style(f"{latest.exercise_name}: {data.sample_size} similar users", bold=True)
    )
    rows = [[row.label, f"{row.weight:.1f} kg"] for row in comparison_rows(data, best)]
    click.echo(format_table(headers=["", "Max Weight"], rows=rows))
