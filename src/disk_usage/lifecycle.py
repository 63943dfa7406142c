"""Placeholder-then-report publishing of the report document."""

from common.logger import get_logger

from .clients.base import DataAPI
from .constants import PLACEHOLDER_BODY, PLACEHOLDER_TITLE, REPORT_TITLE
from .pending import PendingPlaceholders

logger = get_logger(__name__)


class ReportLifecycle:
    """Two-phase publish of the report into the current notebook.

    ``begin`` creates a placeholder before any computation; ``publish``
    creates the real report next to it and then deletes the placeholder.
    The two steps are not atomic. The placeholder id is written to the
    pending ledger (when one is given) until it has been deleted.
    """

    def __init__(self, api: DataAPI, pending: PendingPlaceholders | None = None):
        self.api = api
        self.pending = pending
        self.notebook_id: str | None = None
        self.placeholder_id: str | None = None

    def begin(self) -> str:
        """Create the placeholder document.

        Returns:
            Placeholder document id

        Raises:
            NoActiveNotebookError: If there is no current notebook; nothing is created
        """
        notebook = self.api.get_current_notebook()
        self.notebook_id = notebook.id
        self.placeholder_id = self.api.create_document(PLACEHOLDER_TITLE, notebook.id, PLACEHOLDER_BODY)
        if self.pending is not None:
            self.pending.record(self.placeholder_id, notebook.id)
        logger.debug(f"Created placeholder {self.placeholder_id} in '{notebook.title}'")
        return self.placeholder_id

    def publish(self, body: str) -> str:
        """Create the report document and delete the placeholder.

        Returns:
            Report document id
        """
        if self.notebook_id is None or self.placeholder_id is None:
            raise RuntimeError("publish() called before begin()")

        report_id = self.api.create_document(REPORT_TITLE, self.notebook_id, body)
        self.api.delete_document(self.placeholder_id)
        if self.pending is not None:
            self.pending.clear(self.placeholder_id)
        logger.debug(f"Replaced placeholder {self.placeholder_id} with report {report_id}")
        return report_id
