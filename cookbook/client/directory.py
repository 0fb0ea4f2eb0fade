# cookbook/client/directory.py
"""
Debounced recipe search.

Search text is debounced before hitting the API; category changes fetch at
once. Every fetch takes a sequence number and only the latest issued one may
replace the list, so a slow early response can't overwrite a newer result.
In-flight requests are never cancelled.
"""
from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Callable, Optional, Protocol

from cookbook.client.models import Recipe
from cookbook.client.pipeline import ListFilters, list_categories

log = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.35

Listener = Callable[["RecipeDirectory"], None]


class RecipeSource(Protocol):
    async def list_recipes(self, search: str = "", category: str = "") -> list[Recipe]:
        ...


class RecipeDirectory:
    def __init__(
        self,
        api: RecipeSource,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._api = api
        self._debounce_seconds = debounce_seconds
        self._sequence = itertools.count(1)
        self._latest_issued = 0
        self._debounce_task: Optional[asyncio.Task[None]] = None
        self._fetch_tasks: set[asyncio.Task[None]] = set()
        self._listeners: list[Listener] = []

        self.search = ""
        self.debounced_search = ""
        self.category = ""
        self.recipes: list[Recipe] = []
        self.loading = False
        self.failed = False

    # Inputs ------------------------------------------------------------------

    def set_search(self, text: str) -> None:
        """Record new search text; the fetch waits for the debounce window."""
        self.search = text
        if self._debounce_task and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = asyncio.get_running_loop().create_task(
            self._debounce(text), name="recipe-search-debounce"
        )

    def set_category(self, category: str) -> None:
        self.category = category
        self._start_fetch()

    def refresh(self) -> None:
        self._start_fetch()

    # Outputs -----------------------------------------------------------------

    def visible(self, filters: Optional[ListFilters] = None) -> list[Recipe]:
        return (filters or ListFilters()).apply(self.recipes)

    def categories(self) -> list[str]:
        return list_categories(self.recipes)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Lifecycle ---------------------------------------------------------------

    async def wait_idle(self) -> None:
        """Wait until no debounce timer or fetch is pending."""
        while True:
            pending = [t for t in (self._debounce_task, *self._fetch_tasks) if t and not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def close(self) -> None:
        if self._debounce_task and not self._debounce_task.done():
            self._debounce_task.cancel()

    # Internals ---------------------------------------------------------------

    async def _debounce(self, text: str) -> None:
        await asyncio.sleep(self._debounce_seconds)
        self.debounced_search = text
        self._start_fetch()

    def _start_fetch(self) -> None:
        seq = next(self._sequence)
        self._latest_issued = seq
        self.loading = True
        task = asyncio.get_running_loop().create_task(
            self._fetch(seq, self.debounced_search, self.category),
            name=f"recipe-fetch-{seq}",
        )
        self._fetch_tasks.add(task)
        task.add_done_callback(self._fetch_tasks.discard)

    async def _fetch(self, seq: int, search: str, category: str) -> None:
        try:
            recipes = await self._api.list_recipes(search=search, category=category)
        except Exception as error:
            if seq != self._latest_issued:
                log.debug("Ignoring failure of stale fetch #%d: %s", seq, error)
                return
            log.warning("Recipe list fetch #%d failed: %s", seq, error)
            self.failed = True
            self.loading = False
            self._notify()
            return

        if seq != self._latest_issued:
            log.debug("Discarding stale response #%d (latest #%d)", seq, self._latest_issued)
            return

        self.recipes = recipes
        self.failed = False
        self.loading = False
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
