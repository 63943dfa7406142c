"""End-to-end generation of the disk usage report."""

from dataclasses import dataclass, field

from common.logger import get_logger

from .aggregator import aggregate_by_notebook
from .clients.base import DataAPI
from .collector import collect_resources
from .lifecycle import ReportLifecycle
from .pending import PendingPlaceholders
from .ranker import rank
from .renderer import render_report
from .resolver import NotebookCache, resolve_links

logger = get_logger(__name__)


@dataclass
class ReportStats:
    """Counts describing one report run."""

    resources: int = 0
    link_entries: int = 0
    orphaned_resources: int = 0
    notebooks: int = 0
    total_size_bytes: int = 0


@dataclass
class ReportResult:
    """Outcome of a published report run."""

    report_id: str
    placeholder_id: str
    notebook_id: str
    body: str
    stats: ReportStats = field(default_factory=ReportStats)


class DiskUsageReport:
    """Run collect, resolve, aggregate, rank and render against a data API.

    Each stage consumes the previous stage's complete output. State such
    as the notebook cache lives only for the duration of one call.

    Example:
        >>> with JoplinClient(token, notebook="Inbox") as api:
        ...     result = DiskUsageReport(api).generate()
    """

    def __init__(
        self,
        api: DataAPI,
        workers: int = 1,
        pending: PendingPlaceholders | None = None,
    ):
        """Initialize report.

        Args:
            api: Data API to read from and publish to
            workers: Concurrent linkage lookups (1 = strictly sequential)
            pending: Ledger recording placeholders until they are deleted
        """
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.api = api
        self.workers = workers
        self.pending = pending

    def build_body(self) -> tuple[str, ReportStats]:
        """Compute the report body without creating or deleting any document.

        Returns:
            Tuple of (markdown body, run statistics)

        Raises:
            APIError: If any request fails
        """
        cache = NotebookCache()

        resources = collect_resources(self.api)
        entries = resolve_links(resources, self.api, cache, workers=self.workers)
        aggregates = aggregate_by_notebook(entries, cache.titles)
        body = render_report(rank(aggregates))

        linked_ids = {entry.resource_id for entry in entries}
        stats = ReportStats(
            resources=len(resources),
            link_entries=len(entries),
            orphaned_resources=sum(1 for r in resources if r.id not in linked_ids),
            notebooks=len(aggregates),
            total_size_bytes=sum(a.total_size_bytes for a in aggregates.values()),
        )
        return body, stats

    def generate(self) -> ReportResult:
        """Compute the report and publish it into the current notebook.

        A placeholder is created first and deleted after the report note
        exists. If computation fails the placeholder is left behind and
        stays in the pending ledger.

        Raises:
            NoActiveNotebookError: If there is no current notebook
            APIError: If any request fails
        """
        lifecycle = ReportLifecycle(self.api, pending=self.pending)
        placeholder_id = lifecycle.begin()

        body, stats = self.build_body()
        report_id = lifecycle.publish(body)

        logger.info(
            f"Published report {report_id}: {stats.notebooks} notebook(s), "
            f"{stats.link_entries} note link(s)"
        )
        return ReportResult(
            report_id=report_id,
            placeholder_id=placeholder_id,
            notebook_id=lifecycle.notebook_id or "",
            body=body,
            stats=stats,
        )
