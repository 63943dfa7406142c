"""Deterministic ordering of notebooks and their entries."""

from collections.abc import Mapping, Sequence

from .models import LinkEntry, NotebookAggregate


def rank_notebooks(aggregates: Mapping[str, NotebookAggregate]) -> list[str]:
    """Notebook ids by total size, largest first.

    ``sorted`` is stable, so equal totals keep their first-seen order.
    """
    return sorted(aggregates, key=lambda nid: aggregates[nid].total_size_bytes, reverse=True)


def rank_entries(entries: Sequence[LinkEntry]) -> list[LinkEntry]:
    """Entries by resource size, largest first; ties keep their order."""
    return sorted(entries, key=lambda entry: entry.resource_size_bytes, reverse=True)


def rank(aggregates: Mapping[str, NotebookAggregate]) -> list[NotebookAggregate]:
    """Ranked aggregates, each carrying its entries in ranked order."""
    return [
        NotebookAggregate(
            notebook_id=aggregates[nid].notebook_id,
            notebook_title=aggregates[nid].notebook_title,
            total_size_bytes=aggregates[nid].total_size_bytes,
            entries=rank_entries(aggregates[nid].entries),
        )
        for nid in rank_notebooks(aggregates)
    ]
