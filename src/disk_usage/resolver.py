"""Resolve resources to the notes and notebooks that reference them."""

from collections.abc import Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor

from common.logger import get_logger

from .clients.base import DataAPI
from .collector import collect_pages
from .constants import NOTE_FIELDS, PAGE_SIZE, UNFILED_NOTEBOOK_TITLE
from .models import LinkEntry, Note, Resource

logger = get_logger(__name__)


class NotebookCache:
    """Notebook titles looked up during one report run.

    A fresh cache is created per run and handed down the resolver call
    chain, so separate runs never share state.
    """

    def __init__(self):
        self._titles: dict[str, str] = {}
        self.fetches = 0

    def title_for(self, notebook_id: str, api: DataAPI) -> str:
        """Return the notebook's title, fetching it on first sight.

        Notes without a parent reference are filed under a placeholder
        title instead of being looked up.

        Raises:
            APIError: If the notebook fetch fails
        """
        if notebook_id in self._titles:
            return self._titles[notebook_id]

        if notebook_id:
            title = api.get_notebook(notebook_id).title
            self.fetches += 1
        else:
            title = UNFILED_NOTEBOOK_TITLE

        self._titles[notebook_id] = title
        return title

    @property
    def titles(self) -> dict[str, str]:
        return dict(self._titles)

    def __contains__(self, notebook_id: object) -> bool:
        return notebook_id in self._titles

    def __len__(self) -> int:
        return len(self._titles)


def fetch_linked_notes(api: DataAPI, resource_id: str, page_size: int = PAGE_SIZE) -> list[Note]:
    """Fetch every note that references a resource."""
    return collect_pages(
        lambda page, size: api.list_notes_referencing(
            resource_id, NOTE_FIELDS, page=page, page_size=size
        ),
        page_size=page_size,
    )


def _linked_sequentially(
    resources: Iterable[Resource], api: DataAPI
) -> Iterator[tuple[Resource, list[Note]]]:
    for resource in resources:
        yield resource, fetch_linked_notes(api, resource.id)


def _linked_concurrently(
    resources: Sequence[Resource], api: DataAPI, workers: int
) -> list[tuple[Resource, list[Note]]]:
    # executor.map yields in submission order, whatever order lookups finish in
    with ThreadPoolExecutor(max_workers=workers) as executor:
        notes = list(executor.map(lambda r: fetch_linked_notes(api, r.id), resources))
    return list(zip(resources, notes))


def resolve_links(
    resources: Sequence[Resource],
    api: DataAPI,
    cache: NotebookCache,
    workers: int = 1,
) -> list[LinkEntry]:
    """Build one LinkEntry per (resource, referencing note) pair.

    With ``workers == 1`` each resource's linkage lookup and notebook
    lookups complete before the next resource is touched. With more
    workers the linkage lookups run in a thread pool; notebook lookups
    still happen here, in resource order, so the output is identical.

    Resources that no note references produce no entries.

    Args:
        resources: Resources in listing order
        api: Data API to query
        cache: Notebook title cache for this run
        workers: Maximum concurrent linkage lookups

    Returns:
        Link entries in resource order, then note order

    Raises:
        APIError: If any linkage or notebook lookup fails
    """
    if workers < 1:
        raise ValueError("workers must be at least 1")

    if workers == 1:
        linked: Iterable[tuple[Resource, list[Note]]] = _linked_sequentially(resources, api)
    else:
        logger.debug(f"Looking up linked notes with {workers} workers")
        linked = _linked_concurrently(resources, api, workers)

    entries: list[LinkEntry] = []
    orphaned = 0
    for resource, notes in linked:
        if not notes:
            orphaned += 1
            logger.debug(f"Resource {resource.id} ('{resource.title}') is not linked from any note")
            continue

        for note in notes:
            cache.title_for(note.notebook_id, api)
            entries.append(
                LinkEntry(
                    resource_id=resource.id,
                    resource_title=resource.title,
                    resource_size_bytes=resource.size_bytes,
                    note_id=note.id,
                    note_title=note.title,
                    notebook_id=note.notebook_id,
                )
            )

    logger.info(
        f"Resolved {len(entries)} note link(s) across {len(cache)} notebook(s)"
        + (f", {orphaned} orphaned resource(s) skipped" if orphaned else "")
    )
    return entries
