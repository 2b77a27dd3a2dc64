"""Initialize diary command."""

import click

from ..errors import StorageUnavailable
from ..store import create_backend
from .base import async_command, echo_error, echo_info, echo_success, get_settings_from


@click.command()
@click.pass_context
@async_command
async def init(ctx: click.Context):
    """Initialize the diary's data directory and storage.

    Creates the data directory and prepares the configured storage backend
    (SQLite database, JSON file or key-value directory).
    """
    settings = get_settings_from(ctx)
    echo_info(f"Initializing lift-diary in {settings.DATA_DIR}")

    settings.DATA_DIR.mkdir(parents=True, exist_ok=True)

    try:
        async with create_backend(settings):
            pass
    except StorageUnavailable as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Storage ready ({settings.STORAGE_BACKEND})")

    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Find an exercise:")
    click.echo("     lift-diary catalog search bench")
    click.echo()
    click.echo("  2. Log it:")
    click.echo('     lift-diary log add "Bench Press" --set 10x135 --set 8x155+6x115')
    click.echo()
    click.echo("  3. Review the day:")
    click.echo("     lift-diary log list")
