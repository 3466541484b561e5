"""
Token pagination helpers.

SP-API list endpoints return a page of items plus an opaque nextToken.
These helpers drive the fetch loop: always fetch the first page, keep
going while a token is returned, stop at max_pages.

Dependencies: None
System role: Shared pagination loop for marketplace modules
"""

from typing import Any, AsyncIterator, Awaitable, Callable, TypeVar

from fluxori.core.exceptions import InvalidInputError

PageT = TypeVar("PageT")
ItemT = TypeVar("ItemT")

FetchPage = Callable[[str | None], Awaitable[PageT]]


def _check_max_pages(max_pages: int | None) -> None:
    if max_pages is not None and max_pages < 1:
        raise InvalidInputError("max_pages must be at least 1", field="max_pages")


async def iterate_pages(
    fetch_page: FetchPage,
    extract_items: Callable[[Any], list[ItemT]],
    extract_next_token: Callable[[Any], str | None],
    *,
    initial_token: str | None = None,
    max_pages: int | None = 10,
) -> AsyncIterator[list[ItemT]]:
    """
    Yield the items of each page in order.

    Args:
        fetch_page: Coroutine taking the page token (None for the first page)
        extract_items: Pulls the item list out of a page
        extract_next_token: Pulls the continuation token out of a page
        initial_token: Token to resume from
        max_pages: Upper bound on pages fetched; None follows tokens until exhausted

    Yields:
        list: Items from one page
    """
    _check_max_pages(max_pages)

    token = initial_token
    page = 0
    while True:
        response = await fetch_page(token)
        page += 1
        yield list(extract_items(response) or [])

        token = extract_next_token(response)
        if not token:
            break
        if max_pages is not None and page >= max_pages:
            break


async def collect_pages(
    fetch_page: FetchPage,
    extract_items: Callable[[Any], list[ItemT]],
    extract_next_token: Callable[[Any], str | None],
    *,
    initial_token: str | None = None,
    max_pages: int | None = 10,
) -> list[ItemT]:
    """
    Fetch pages until the token runs out or max_pages is reached.

    Returns:
        list: All items concatenated in page order
    """
    items: list[ItemT] = []
    async for page_items in iterate_pages(
        fetch_page,
        extract_items,
        extract_next_token,
        initial_token=initial_token,
        max_pages=max_pages,
    ):
        items.extend(page_items)
    return items
