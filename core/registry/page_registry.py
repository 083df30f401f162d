import logging
import threading
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from core.signals import PAGE_UPSERTED
from domain.pages import Page

logger = logging.getLogger(__name__)

PageLike = Union[Page, Mapping[str, Any]]


def _copy(page: Page) -> Page:
    return page.model_copy(deep=True)


class PageRegistry:
    """
    Keyed store of every page known to the site.

    ``route_path`` is the key: at most one page exists per route. Writes are
    full replacements (upsert), never partial patches. Every page handed out
    is a copy, so a reader can neither observe a half-applied write nor
    patch a stored page in place.
    """

    def __init__(self, event_bus: Optional[Any] = None):
        self._pages: Dict[str, Page] = {}
        self._lock = threading.RLock()
        self._event_bus = event_bus
        logger.debug("PageRegistry initialized")

    def upsert(self, page: PageLike) -> Page:
        """
        Insert or replace the page stored under ``page.route_path``.

        A replaced page keeps its position in iteration order.
        """
        record = page if isinstance(page, Page) else Page.model_validate(dict(page))
        # Copy so later mutation of the caller's metadata cannot leak in.
        record = _copy(record)

        with self._lock:
            replaced = self._pages.get(record.route_path)
            self._pages[record.route_path] = record

        if replaced is None:
            logger.debug(f"Registered page '{record.route_path}' -> {record.component_path}")
        elif replaced != record:
            logger.debug(f"Replaced page '{record.route_path}' ({replaced.component_path} -> {record.component_path})")

        if self._event_bus:
            self._event_bus.publish(PAGE_UPSERTED, {
                'page': _copy(record),
                'replaced': replaced is not None,
            })
        return _copy(record)

    def list(self) -> Tuple[Page, ...]:
        with self._lock:
            return tuple(_copy(page) for page in self._pages.values())

    def find(self, predicate: Callable[[Page], bool]) -> Optional[Page]:
        for page in self.list():
            if predicate(page):
                return page
        return None

    def find_all(self, predicate: Callable[[Page], bool]) -> List[Page]:
        return [page for page in self.list() if predicate(page)]

    def get(self, route_path: str) -> Optional[Page]:
        with self._lock:
            page = self._pages.get(route_path)
        return _copy(page) if page is not None else None

    def routes(self) -> List[str]:
        with self._lock:
            return list(self._pages)

    def __contains__(self, route_path: object) -> bool:
        with self._lock:
            return route_path in self._pages

    def __len__(self) -> int:
        with self._lock:
            return len(self._pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self.list())
