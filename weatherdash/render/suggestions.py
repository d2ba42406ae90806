"""Place suggestions while typing: debounce, stale-response guard, navigation."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from weatherdash.errors import ProviderError
from weatherdash.models.place import Place

logger = logging.getLogger(__name__)

MIN_CHARS = 2
MAX_SUGGESTIONS = 5
DEBOUNCE_SECONDS = 0.25


class SuggestionList:
    """Visible suggestions plus the keyboard highlight.

    Every request takes a generation number; a response is shown only if
    no newer request was started after it.
    """

    def __init__(self, min_chars: int = MIN_CHARS, limit: int = MAX_SUGGESTIONS):
        self.min_chars = min_chars
        self.limit = limit
        self.items: list[Place] = []
        self.index = -1
        self._generation = 0

    @property
    def visible(self) -> bool:
        return bool(self.items)

    def begin(self, text: str) -> int | None:
        """Start a request for `text`. None means too short; list is hidden."""
        self._generation += 1
        if len(text.strip()) < self.min_chars:
            self.hide()
            return None
        return self._generation

    def accept(self, generation: int, places: list[Place]) -> bool:
        if generation != self._generation:
            return False
        self.items = list(places[: self.limit])
        self.index = -1
        return True

    def fail(self, generation: int) -> None:
        if generation == self._generation:
            self.hide()

    def hide(self) -> None:
        self.items = []
        self.index = -1

    def move(self, step: int) -> int:
        """ArrowDown (+1) / ArrowUp (-1) with wraparound."""
        if not self.items:
            return -1
        if self.index < 0 and step < 0:
            self.index = len(self.items) - 1
        else:
            self.index = (self.index + step) % len(self.items)
        return self.index

    def choose(self, index: int | None = None) -> Place | None:
        """Enter picks the highlighted entry, or the first one."""
        if index is None:
            index = self.index if self.index >= 0 else 0
        if not 0 <= index < len(self.items):
            return None
        place = self.items[index]
        self.hide()
        return place


class Debouncer:
    """Run only the last call made within a quiet window."""

    def __init__(self, delay: float = DEBOUNCE_SECONDS):
        self.delay = delay
        self._task: asyncio.Task | None = None

    def call(self, fn: Callable[[], Awaitable[None]]) -> asyncio.Task:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = asyncio.ensure_future(self._later(fn))
        return self._task

    async def _later(self, fn: Callable[[], Awaitable[None]]) -> None:
        await asyncio.sleep(self.delay)
        await fn()


class SuggestionFeed:
    """Ties typing to geocoding lookups through the debouncer."""

    def __init__(
        self,
        lookup: Callable[[str, int], Awaitable[list[Place]]],
        suggestions: SuggestionList | None = None,
        delay: float = DEBOUNCE_SECONDS,
    ):
        self.lookup = lookup
        self.suggestions = suggestions or SuggestionList()
        self.debouncer = Debouncer(delay)

    def on_input(self, text: str) -> asyncio.Task:
        return self.debouncer.call(lambda: self.request(text))

    async def request(self, text: str) -> None:
        generation = self.suggestions.begin(text)
        if generation is None:
            return
        try:
            places = await self.lookup(text.strip(), self.suggestions.limit)
        except ProviderError as e:
            logger.warning("Suggestion lookup failed for %r: %s", text, e)
            self.suggestions.fail(generation)
            return
        self.suggestions.accept(generation, places)
