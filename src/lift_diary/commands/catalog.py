"""Exercise catalog commands."""

import click

from ..data import load_catalog, load_custom_exercises, save_custom_exercise
from ..errors import DiaryError
from ..models.catalog import CatalogTab
from ..services import CatalogBrowser
from ..store import open_store
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
)


@click.group()
def catalog():
    """Browse the exercise catalog and manage custom exercises."""
    pass


@catalog.command("search")
@click.argument("query", default="")
@click.option(
    "--tab",
    type=click.Choice([t.value for t in CatalogTab]),
    default=CatalogTab.ALL.value,
    show_default=True,
    help="all: every exercise, previous: ones you have logged, custom: your own.",
)
@click.pass_context
@async_command
async def search(ctx: click.Context, query: str, tab: str):
    """Search exercises by name."""
    settings = ensure_initialized(ctx)
    tab = CatalogTab(tab)

    try:
        custom = load_custom_exercises(settings.custom_catalog_path)
        if tab == CatalogTab.PREVIOUS:
            async with open_store(settings) as store:
                browser = CatalogBrowser(load_catalog(), custom, store)
                exercises = await browser.filter_exercises(query, tab)
        else:
            browser = CatalogBrowser(load_catalog(), custom)
            exercises = await browser.filter_exercises(query, tab)
    except DiaryError as e:
        echo_error(str(e))
        ctx.exit(1)

    click.echo(click.style(CatalogBrowser.list_header(tab), bold=True))
    if not exercises:
        echo_info("No exercises found.")
        return

    rows = [
        [e.name, e.force or "", ", ".join(e.primary_muscles), "yes" if e.is_custom else ""]
        for e in exercises
    ]
    click.echo(format_table(["Name", "Force", "Primary Muscle", "Custom"], rows))


@catalog.command("add")
@click.argument("name")
@click.option("--force", type=click.Choice(["push", "pull", "static"]), default=None)
@click.option("--primary", multiple=True, help="Primary muscle. Repeatable.")
@click.option("--secondary", multiple=True, help="Secondary muscle. Repeatable.")
@click.pass_context
def add(
    ctx: click.Context,
    name: str,
    force: str | None,
    primary: tuple[str, ...],
    secondary: tuple[str, ...],
):
    """Add a custom exercise to the catalog."""
    settings = ensure_initialized(ctx)
    try:
        exercise = save_custom_exercise(
            settings.custom_catalog_path,
            name,
            force=force,
            primary_muscles=list(primary),
            secondary_muscles=list(secondary),
        )
    except DiaryError as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Added custom exercise {exercise.name}")
