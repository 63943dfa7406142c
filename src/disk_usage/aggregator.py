"""Group link entries by notebook and total their sizes."""

from collections.abc import Iterable, Mapping

from common.logger import get_logger

from .models import LinkEntry, NotebookAggregate

logger = get_logger(__name__)


def aggregate_by_notebook(
    entries: Iterable[LinkEntry],
    notebook_titles: Mapping[str, str],
) -> dict[str, NotebookAggregate]:
    """Group entries by owning notebook.

    A notebook's total is the sum over all of its entries, so a resource
    referenced by three notes in one notebook adds its size three times.
    Entries are kept in full; the renderer collapses repeated resources.

    Args:
        entries: Link entries in resolution order
        notebook_titles: Notebook id to title, as cached by the resolver

    Returns:
        Aggregates keyed by notebook id, in order of first appearance
    """
    aggregates: dict[str, NotebookAggregate] = {}
    for entry in entries:
        aggregate = aggregates.get(entry.notebook_id)
        if aggregate is None:
            aggregate = NotebookAggregate(
                notebook_id=entry.notebook_id,
                notebook_title=notebook_titles.get(entry.notebook_id, ""),
            )
            aggregates[entry.notebook_id] = aggregate
        aggregate.add(entry)

    logger.debug(f"Aggregated entries into {len(aggregates)} notebook(s)")
    return aggregates
