"""Diary log commands."""

from datetime import date, datetime

import click

from ..data import load_catalog, load_custom_exercises
from ..errors import DiaryError, StorageWriteFailed
from ..models.draft import ExerciseDraft
from ..services import CatalogBrowser, DiaryService
from ..store import open_store
from .base import (
    apply_set_specs,
    async_command,
    describe_sets,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
)
from .editor import ExerciseEditor

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S"]


@click.group()
def log():
    """Record and review diary entries.

    Entries are grouped by day. Each exercise appears once per day in the
    listing, even if it was logged more than once.
    """
    pass


@log.command("add")
@click.argument("name")
@click.option(
    "--set",
    "sets",
    multiple=True,
    metavar="REPSxWEIGHT[+REPSxWEIGHT...]",
    help="A working set, with optional drop sets after '+'. Repeatable.",
)
@click.option("--rest", type=int, default=0, show_default=True, help="Rest time in seconds.")
@click.option(
    "--date",
    "when",
    type=click.DateTime(formats=DATE_FORMATS),
    default=None,
    help="When the exercise was done (default: now).",
)
@click.option("--interactive", "-i", is_flag=True, help="Enter sets with prompts.")
@click.pass_context
@async_command
async def add(
    ctx: click.Context,
    name: str,
    sets: tuple[str, ...],
    rest: int,
    when: datetime | None,
    interactive: bool,
):
    """Log an exercise from the catalog.

    Example: lift-diary log add "Bench Press" --set 10x135 --set 8x155+6x115
    """
    settings = ensure_initialized(ctx)

    try:
        browser = CatalogBrowser(
            load_catalog(), load_custom_exercises(settings.custom_catalog_path)
        )
        exercise = browser.find(name)
        if exercise is None:
            echo_error(f"Unknown exercise {name!r}.")
            click.echo("Search with 'lift-diary catalog search' or add it with 'lift-diary catalog add'.")
            ctx.exit(1)

        draft = ExerciseDraft(exercise)
        draft.set_rest_time(rest)
        apply_set_specs(draft, sets)
    except DiaryError as e:
        echo_error(str(e))
        ctx.exit(1)

    if interactive and not await ExerciseEditor(draft).run():
        echo_info("Cancelled, nothing saved.")
        return

    try:
        async with open_store(settings) as store:
            saved = await store.save(draft.to_record(when or datetime.now()))
    except DiaryError as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_success(f"Logged {saved.name} on {saved.day.isoformat()} (key {saved.key})")
    for line in describe_sets(saved):
        click.echo(f"  {line}")


@log.command("list")
@click.option(
    "--date",
    "when",
    type=click.DateTime(formats=DATE_FORMATS),
    default=None,
    help="Day to show (default: today).",
)
@click.option("--verbose", "-v", is_flag=True, help="Show every set.")
@click.pass_context
@async_command
async def list_entries(ctx: click.Context, when: datetime | None, verbose: bool):
    """Show the exercises logged on a day."""
    settings = ensure_initialized(ctx)
    day = when.date() if when else date.today()

    try:
        async with open_store(settings) as store:
            diary = DiaryService(store, today=day)
            entries = await diary.refresh()
    except DiaryError as e:
        echo_error(str(e))
        ctx.exit(1)

    click.echo(click.style(diary.date_label(), bold=True))
    if not entries:
        echo_info("No exercises logged.")
        return

    rows = [
        [e.key, e.name, str(len(e.sets)), f"{e.rest_time_seconds}s", e.primary_muscle or ""]
        for e in entries
    ]
    click.echo(format_table(["Key", "Exercise", "Sets", "Rest", "Primary Muscle"], rows))

    if verbose:
        for e in entries:
            click.echo()
            click.echo(click.style(e.name, bold=True))
            for line in describe_sets(e):
                click.echo(f"  {line}")


@log.command("delete")
@click.argument("keys", nargs=-1, required=True)
@click.pass_context
@async_command
async def delete(ctx: click.Context, keys: tuple[str, ...]):
    """Delete entries by key (see 'lift-diary log list')."""
    settings = ensure_initialized(ctx)

    try:
        async with open_store(settings) as store:
            result = await store.delete(list(keys))
    except StorageWriteFailed as e:
        echo_error(str(e))
        if e.removed:
            echo_warning(f"Removed before the failure: {', '.join(e.removed)}")
        if e.not_removed:
            echo_warning(f"Not removed: {', '.join(e.not_removed)}")
        ctx.exit(1)
    except DiaryError as e:
        echo_error(str(e))
        ctx.exit(1)

    if result.removed:
        echo_success(f"Deleted {len(result.removed)} entr{'y' if len(result.removed) == 1 else 'ies'}")
    if result.missing:
        echo_warning(f"Not found (ignored): {', '.join(result.missing)}")
