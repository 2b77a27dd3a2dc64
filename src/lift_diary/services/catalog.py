"""Catalog browsing: search and tab filtering."""

from ..models.catalog import CatalogExercise, CatalogTab
from ..store import ExerciseLogStore

LIST_HEADERS = {
    CatalogTab.ALL: "All Exercises",
    CatalogTab.PREVIOUS: "History",
    CatalogTab.CUSTOM: "Your Custom Exercises",
}


def matches_search(exercise: CatalogExercise, search: str) -> bool:
    """Case-insensitive substring match on the exercise name."""
    return search.strip().lower() in exercise.name.lower()


class CatalogBrowser:
    """Backs the "add exercise" screen.

    The ALL tab shows the built-in catalog and custom exercises, PREVIOUS
    shows exercises already in the diary (most recent first) and CUSTOM only
    the user's own.
    """

    def __init__(
        self,
        catalog: list[CatalogExercise],
        custom: list[CatalogExercise] | None = None,
        store: ExerciseLogStore | None = None,
    ):
        self.catalog = list(catalog)
        self.custom = list(custom or [])
        self.store = store

    def find(self, name: str) -> CatalogExercise | None:
        """Look up an exercise by name, ignoring case."""
        wanted = name.strip().lower()
        for exercise in self.catalog + self.custom:
            if exercise.name.lower() == wanted:
                return exercise
        return None

    async def filter_exercises(
        self, search: str = "", tab: CatalogTab = CatalogTab.ALL
    ) -> list[CatalogExercise]:
        """Exercises on ``tab`` whose name contains ``search``."""
        tab = CatalogTab(tab)
        if tab == CatalogTab.ALL:
            candidates = self.catalog + self.custom
        elif tab == CatalogTab.CUSTOM:
            candidates = self.custom
        else:
            candidates = await self._previous()
        return [e for e in candidates if matches_search(e, search)]

    async def _previous(self) -> list[CatalogExercise]:
        if self.store is None:
            return []
        previous = []
        for name in await self.store.list_names():
            # exercises removed from the catalog still show up by name
            previous.append(self.find(name) or CatalogExercise(id=name, name=name))
        return previous

    @staticmethod
    def list_header(tab: CatalogTab) -> str:
        return LIST_HEADERS[CatalogTab(tab)]
