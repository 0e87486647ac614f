"""Product search for the site's search box.

``search_products`` is the matching rule. ``SearchDebouncer`` coalesces
keystrokes: it holds at most one pending query, and new input replaces
(cancels) whatever was pending.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from ..schemas import Product

DEFAULT_DELAY = 0.2


def search_products(products: Iterable[Product], query: str) -> List[Product]:
    normalized = query.strip().lower()
    if not normalized:
        return []
    return [
        product
        for product in products
        if normalized in product.title.lower()
        or normalized in product.category.lower()
        or normalized in product.short_description.lower()
    ]


@dataclass
class _Pending:
    query: str
    deadline: float


class SearchDebouncer:
    """Client-side helper for the search box; the API itself does not debounce.

    A caller feeds every keystroke to ``submit`` and polls ``ready`` from its
    event loop; when it returns a query, that query is sent to
    ``GET /catalog/search?q=``. Closing the search box calls ``cancel``.
    """

    def __init__(self, delay: float = DEFAULT_DELAY, clock: Callable[[], float] = time.monotonic) -> None:
        self.delay = delay
        self._clock = clock
        self._pending: Optional[_Pending] = None

    @property
    def pending(self) -> Optional[str]:
        return self._pending.query if self._pending else None

    def submit(self, query: str) -> None:
        self._pending = _Pending(query=query, deadline=self._clock() + self.delay)

    def cancel(self) -> None:
        self._pending = None

    def ready(self) -> Optional[str]:
        """Return the pending query once its delay has elapsed, clearing the slot."""
        if self._pending is None or self._clock() < self._pending.deadline:
            return None
        query = self._pending.query
        self._pending = None
        return query
