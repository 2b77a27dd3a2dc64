"""Diary screen state: the selected day, its entries and the selection."""

from datetime import date, timedelta

import structlog

from ..errors import StorageWriteFailed
from ..models.records import DeleteResult, ExerciseRecord
from ..store import ExerciseLogStore

logger = structlog.get_logger(__name__)


def format_date(day: date, today: date | None = None) -> str:
    """Label a day as "Today" or in long form ("Monday, January 1, 2024")."""
    today = today or date.today()
    if day == today:
        return "Today"
    return f"{day:%A, %B} {day.day}, {day.year}"


class DiaryService:
    """Keeps what the diary shows in step with what is stored.

    In-memory state only changes once the store call it depends on has
    succeeded, so a failed save or delete never leaves the list showing
    something the store does not have.
    """

    def __init__(self, store: ExerciseLogStore, today: date | None = None):
        self.store = store
        self.selected_date = today or date.today()
        self.entries: list[ExerciseRecord] = []
        self.selected_keys: list[str] = []

    async def refresh(self) -> list[ExerciseRecord]:
        """Reload the selected day from the store."""
        self.entries = await self.store.list_for_date(self.selected_date)
        self.selected_keys = []
        return self.entries

    async def change_date(self, delta_days: int) -> list[ExerciseRecord]:
        """Move the selected day back or forward and load it."""
        new_date = self.selected_date + timedelta(days=delta_days)
        entries = await self.store.list_for_date(new_date)
        self.selected_date = new_date
        self.entries = entries
        self.selected_keys = []
        return entries

    def date_label(self, today: date | None = None) -> str:
        return format_date(self.selected_date, today)

    async def add(self, record: ExerciseRecord) -> ExerciseRecord:
        """Save a record and show it if it belongs on the selected day."""
        saved = await self.store.save(record)
        shown = {e.name for e in self.entries}
        if saved.day == self.selected_date and saved.name not in shown:
            self.entries.append(saved)
        return saved

    def toggle_selection(self, key: str) -> None:
        if key in self.selected_keys:
            self.selected_keys.remove(key)
        else:
            self.selected_keys.append(key)

    def press(self, key: str) -> None:
        """A tap only changes the selection once something is selected."""
        if self.selected_keys:
            self.toggle_selection(key)

    def long_press(self, key: str) -> None:
        self.toggle_selection(key)

    async def delete_selected(self) -> DeleteResult:
        """Delete the selected entries.

        The selected day is reloaded afterwards, so a same-name record that
        was hidden behind a deleted one shows up. On a partial failure the
        keys that were not removed stay selected and the error is re-raised.
        """
        if not self.selected_keys:
            return DeleteResult()
        try:
            result = await self.store.delete(list(self.selected_keys))
        except StorageWriteFailed as e:
            logger.warning("diary_delete_failed", removed=e.removed, not_removed=e.not_removed)
            await self._reload_after_delete(e.removed)
            raise
        await self._reload_after_delete(result.removed + result.missing)
        return result

    async def _reload_after_delete(self, gone: list[str]) -> None:
        self.entries = await self.store.list_for_date(self.selected_date)
        removed = set(gone)
        self.selected_keys = [k for k in self.selected_keys if k not in removed]
