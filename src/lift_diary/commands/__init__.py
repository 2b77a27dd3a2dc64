"""CLI commands for lift-diary."""

from .catalog import catalog
from .init import init
from .log import log

__all__ = [
    "catalog",
    "init",
    "log",
]
