"""Ledger of placeholder documents awaiting deletion.

Publishing a report creates a placeholder first and deletes it once the
real report exists. A run that dies in between leaves the placeholder
behind; the ledger remembers it so a later ``cleanup`` can remove it.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from common.logger import get_logger

from .clients.base import DataAPI, NotFoundError
from .constants import PENDING_LEDGER_FILENAME

logger = get_logger(__name__)


class PendingPlaceholders:
    """JSON-file ledger of placeholder ids that were created but not deleted."""

    def __init__(self, state_dir: Path):
        """Initialize ledger.

        Args:
            state_dir: Directory holding the ledger file (created on first write)
        """
        self.path = Path(state_dir) / PENDING_LEDGER_FILENAME

    def _load(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            records = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(f"Ignoring unreadable placeholder ledger: {self.path}")
            return []
        return records if isinstance(records, list) else []

    def _save(self, records: list[dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(records, indent=2), encoding="utf-8")

    def record(self, document_id: str, notebook_id: str) -> None:
        """Remember a freshly created placeholder."""
        records = [r for r in self._load() if r.get("id") != document_id]
        records.append(
            {
                "id": document_id,
                "notebook_id": notebook_id,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        self._save(records)

    def clear(self, document_id: str) -> None:
        """Forget a placeholder once it has been deleted."""
        records = self._load()
        remaining = [r for r in records if r.get("id") != document_id]
        if len(remaining) != len(records):
            self._save(remaining)

    def pending(self) -> list[str]:
        """Ids of placeholders still awaiting deletion, oldest first."""
        return [r["id"] for r in self._load() if r.get("id")]

    def collect_garbage(self, api: DataAPI) -> list[str]:
        """Delete every outstanding placeholder.

        A placeholder that no longer exists counts as collected.

        Returns:
            Ids removed from the ledger

        Raises:
            APIError: If a deletion fails for any other reason
        """
        collected = []
        for document_id in self.pending():
            try:
                api.delete_document(document_id)
                logger.info(f"Deleted leftover placeholder {document_id}")
            except NotFoundError:
                logger.debug(f"Placeholder {document_id} was already gone")
            self.clear(document_id)
            collected.append(document_id)
        return collected
