"""Screen-level services built on the exercise log."""

from .catalog import CatalogBrowser
from .diary import DiaryService, format_date

__all__ = ["CatalogBrowser", "DiaryService", "format_date"]
