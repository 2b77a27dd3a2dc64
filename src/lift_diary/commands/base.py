"""Shared CLI utilities."""

import asyncio
import re
from functools import wraps

import click

from ..config import Settings
from ..models.draft import ExerciseDraft
from ..models.records import ExerciseRecord

SET_PATTERN = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+(?:\.\d+)?)\s*$")


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_settings_from(ctx: click.Context) -> Settings:
    """Settings chosen by the top-level command."""
    return ctx.find_root().obj


def ensure_initialized(ctx: click.Context) -> Settings:
    """Ensure the data directory exists."""
    settings = get_settings_from(ctx)
    if not settings.DATA_DIR.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Diary not initialized. Run 'lift-diary init' first."
        )
        ctx.exit(1)
    return settings


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def parse_set_spec(spec: str) -> list[tuple[str, str]]:
    """Split ``"10x135+8x95"`` into ``[("10", "135"), ("8", "95")]``.

    The first pair is the working set; any further pairs are its drop sets.
    """
    pairs = []
    for part in spec.split("+"):
        match = SET_PATTERN.match(part)
        if not match:
            raise click.BadParameter(
                f"{spec!r} is not REPSxWEIGHT (drop sets as +REPSxWEIGHT)"
            )
        pairs.append((match.group(1), match.group(2)))
    return pairs


def apply_set_specs(draft: ExerciseDraft, specs: tuple[str, ...]) -> None:
    """Add each ``--set`` option to the draft, drop sets included."""
    for spec in specs:
        (reps, weight), *drops = parse_set_spec(spec)
        draft.add_set(reps, weight)
        for drop_reps, drop_weight in drops:
            draft.add_drop_set(drop_reps, drop_weight)


def _format_weight(weight: float) -> str:
    return f"{weight:g}"


def describe_sets(record: ExerciseRecord) -> list[str]:
    """Lines like "Set 1: 10 reps x 135 lbs" with indented drop sets."""
    lines = []
    for i, s in enumerate(record.sets, start=1):
        lines.append(f"Set {i}: {s.reps} reps x {_format_weight(s.weight)} lbs")
        for j, d in enumerate(s.drop_sets, start=1):
            lines.append(f"  Drop set {j}: {d.reps} reps x {_format_weight(d.weight)} lbs")
    return lines


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)
