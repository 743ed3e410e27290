"""Paginated walk driver for GitHub listings.

A listing is exposed as a lazy async iterator of pages. The next page is only
requested when the consumer asks for it, so a consumer that stops early never
causes another request to be issued.
"""

import inspect
from typing import AsyncIterator, Awaitable, Callable, TypeVar

import structlog

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

T = TypeVar("T")

PageFetcher = Callable[[int], Awaitable[list[T]]]
PageHandler = Callable[[list[T]], bool | None | Awaitable[bool | None]]


async def paginate(fetch_page: PageFetcher[T], per_page: int, source: str = "listing") -> AsyncIterator[list[T]]:
    """Yield pages from a page-number based listing until it runs out.

    A page shorter than ``per_page`` is the last one, so the listing is never
    asked for a page past its end.
    """
    page: int = 1
    while True:
        logger.debug("Fetching page", source=source, page=page)
        items = await fetch_page(page)
        logger.debug("Fetched page", source=source, page=page, count=len(items))
        if not items:
            return
        yield items
        if len(items) < per_page:
            return
        page += 1


async def walk_pages(pages: AsyncIterator[list[T]], on_page: PageHandler[T]) -> None:
    """Feed each page to ``on_page`` until it returns a truthy stop signal or the pages run out.

    ``on_page`` may be a plain function or a coroutine function; its result is
    awaited before deciding whether to continue. The page iterator is closed
    when the walk ends so that it cannot be resumed.
    """
    try:
        async for page in pages:
            stop = on_page(page)
            if inspect.isawaitable(stop):
                stop = await stop
            if stop:
                logger.debug("Page handler requested stop")
                break
    finally:
        aclose = getattr(pages, "aclose", None)
        if aclose is not None:
            await aclose()
