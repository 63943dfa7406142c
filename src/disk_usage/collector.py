"""Drain page-based listing endpoints into complete lists."""

from collections.abc import Callable
from typing import TypeVar

from common.logger import get_logger

from .clients.base import DataAPI
from .constants import PAGE_SIZE, RESOURCE_FIELDS
from .models import Page, Resource

logger = get_logger(__name__)

T = TypeVar("T")


def collect_pages(
    fetch_page: Callable[[int, int], Page[T]],
    page_size: int = PAGE_SIZE,
) -> list[T]:
    """Request pages 1, 2, ... until a page reports no more items.

    Args:
        fetch_page: Called with (page, page_size); returns one Page
        page_size: Number of items requested per page

    Returns:
        All items, in the order the server returned them

    Raises:
        APIError: From the first failing page request. Nothing is retried
            and no partial result is returned.
    """
    items: list[T] = []
    page = 1
    while True:
        result = fetch_page(page, page_size)
        items.extend(result.items)
        if not result.has_more:
            break
        page += 1
    logger.debug(f"Collected {len(items)} item(s) over {page} page(s)")
    return items


def collect_resources(api: DataAPI, page_size: int = PAGE_SIZE) -> list[Resource]:
    """Fetch every resource in the store."""
    resources = collect_pages(
        lambda page, size: api.list_resources(page, size, RESOURCE_FIELDS),
        page_size=page_size,
    )
    logger.info(f"Found {len(resources)} resource(s)")
    return resources
