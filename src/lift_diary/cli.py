"""CLI entry point for lift-diary."""

from pathlib import Path

import click

from .commands import catalog, init, log
from .config import Settings, get_settings
from .logging_config import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="lift-diary")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Where the diary is stored (env: LIFT_DIARY_DATA_DIR).",
)
@click.option(
    "--backend",
    type=click.Choice(["sqlite", "json", "kv"]),
    default=None,
    help="Storage engine (env: LIFT_DIARY_STORAGE_BACKEND).",
)
@click.pass_context
def main(ctx: click.Context, data_dir: Path | None, backend: str | None):
    """lift-diary: a training diary for the terminal.

    Browse the exercise catalog, log sets, reps, weight and rest, and
    review what you did on any day.

    Example usage:

        # Set up storage
        lift-diary init

        # Find and log an exercise
        lift-diary catalog search press
        lift-diary log add "Bench Press" --set 10x135 --set 8x155+6x115 --rest 90

        # Review and clean up a day
        lift-diary log list --date 2024-01-01
        lift-diary log delete 3
    """
    overrides = {}
    if data_dir is not None:
        overrides["DATA_DIR"] = data_dir
    if backend is not None:
        overrides["STORAGE_BACKEND"] = backend
    settings = Settings(**overrides) if overrides else get_settings()

    configure_logging(settings)
    ctx.obj = settings


# Register commands
main.add_command(init)
main.add_command(log)
main.add_command(catalog)


if __name__ == "__main__":
    main()
