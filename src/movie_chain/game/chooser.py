# ABOUTME: Generic debounced asynchronous chooser used for both performer and film pickers.
# ABOUTME: Coalesces typed queries behind a quiet timer and shows only the freshest query's results.

import asyncio
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from loguru import logger

from movie_chain.client.exceptions import TransportError

T = TypeVar("T")


class DebouncedChooser(Generic[T]):
    """
    Debounced search box plus a single selection.

    - update_query() restarts the quiet timer; only the text live when the
      timer fires is searched.
    - An in-flight search is never cancelled, but its results are shown only
      if its query is still the latest one submitted (last response wins by
      query identity, not by arrival order).
    - reset() is an explicit command clearing query, results, selection and
      error, and dropping whatever is still in flight.

    Must be driven from inside a running event loop.
    """

    def __init__(
        self,
        search: Callable[[str], Awaitable[list[T]]],
        debounce_seconds: float = 0.3,
        on_change: Callable[[], None] | None = None,
        name: str = "chooser",
    ):
        """
        Args:
            search: Coroutine function turning a query into a ranked result list
            debounce_seconds: Quiet period before a query is submitted
            on_change: Called whenever results, selection, loading or error change
            name: Label used in log messages
        """
        self._search = search
        self.debounce_seconds = debounce_seconds
        self._on_change = on_change
        self.name = name

        self.query = ""
        self.results: list[T] = []
        self.selection: T | None = None
        self.error: Exception | None = None
        self.is_loading = False

        self._submitted_query: str | None = None
        self._timer: asyncio.Task | None = None
        self._fetches: set[asyncio.Task] = set()

    def update_query(self, text: str) -> None:
        """Record typed text and restart the debounce timer"""
        self.query = text
        self._cancel_timer()
        self._timer = asyncio.get_running_loop().create_task(self._debounce(text))

    def select(self, item: T) -> None:
        self.selection = item
        self.error = None
        self._notify()

    def clear_selection(self) -> None:
        self.selection = None
        self._notify()

    def reset(self) -> None:
        """Return to a blank chooser and ignore any search still in flight"""
        self._cancel_timer()
        self._submitted_query = None
        self.query = ""
        self.results = []
        self.selection = None
        self.error = None
        self.is_loading = False
        self._notify()

    async def wait_idle(self) -> None:
        """Wait until no timer is pending and no search is in flight"""
        while self._timer is not None or self._fetches:
            pending = [task for task in (self._timer, *self._fetches) if task is not None]
            await asyncio.gather(*pending, return_exceptions=True)

    async def _debounce(self, text: str) -> None:
        try:
            await asyncio.sleep(self.debounce_seconds)
        except asyncio.CancelledError:
            return
        self._timer = None
        self._submitted_query = text
        self.is_loading = True
        self._notify()

        fetch = asyncio.get_running_loop().create_task(self._fetch(text))
        self._fetches.add(fetch)
        fetch.add_done_callback(self._fetches.discard)

    async def _fetch(self, text: str) -> None:
        try:
            results = await self._search(text)
        except TransportError as e:
            logger.warning(f"{self.name} search for '{text}' failed: {e}")
            if text == self._submitted_query:
                self.results = []
                self.error = e
                self.is_loading = False
                self._notify()
            return

        if text != self._submitted_query:
            logger.debug(f"{self.name}: dropping results for superseded query '{text}'")
            return

        self.results = list(results)
        self.error = None
        self.is_loading = False
        self._notify()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
