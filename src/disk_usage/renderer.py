"""Markdown rendering of the ranked disk usage report."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from .constants import BYTES_PER_MB, REPORT_TITLE
from .models import LinkEntry, NotebookAggregate

TOC_MARKER = "[toc]"


def format_size_mb(size_bytes: int) -> str:
    """Format a byte count as megabytes with two decimals, rounding half up.

    Example:
        >>> format_size_mb(1_572_864)
        '1.50'
    """
    megabytes = Decimal(size_bytes) / Decimal(BYTES_PER_MB)
    return str(megabytes.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _resource_blocks(entries: Iterable[LinkEntry]) -> list[tuple[LinkEntry, list[LinkEntry]]]:
    """Group entries under the first entry seen for each resource title.

    Entries are keyed by title, not id: two different resources with the
    same title end up in a single block listing both sets of notes.
    """
    blocks: dict[str, tuple[LinkEntry, list[LinkEntry]]] = {}
    for entry in entries:
        if entry.resource_title not in blocks:
            blocks[entry.resource_title] = (entry, [])
        blocks[entry.resource_title][1].append(entry)
    return list(blocks.values())


def render_notebook_section(aggregate: NotebookAggregate) -> list[str]:
    """Render one notebook heading and its resource blocks as lines."""
    lines = [
        f'## 📓 "{aggregate.notebook_title}" '
        f"(Total size: {format_size_mb(aggregate.total_size_bytes)} MB)",
        "",
    ]

    for first, referencing in _resource_blocks(aggregate.entries):
        lines.append(f'- **Resource**: "{first.resource_title}"')
        lines.append(f"  - **Size:** {format_size_mb(first.resource_size_bytes)} MB")
        lines.append(f"  - **ID:** {first.resource_id}")
        for entry in referencing:
            lines.append(f"  - [{entry.note_title}]({entry.note_link})")
        lines.append("")

    return lines


def render_report(ranked: Iterable[NotebookAggregate]) -> str:
    """Render the full report.

    Args:
        ranked: Notebook aggregates in display order, entries already ranked

    Returns:
        Markdown document body
    """
    lines = [f"# {REPORT_TITLE}", "", TOC_MARKER, ""]
    for aggregate in ranked:
        lines.extend(render_notebook_section(aggregate))
    return "\n".join(lines) + "\n"
