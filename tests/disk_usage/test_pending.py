"""Tests for the pending placeholder ledger."""

import json

import pytest

from disk_usage.clients.base import APIError
from disk_usage.pending import PendingPlaceholders


@pytest.fixture
def ledger(tmp_path):
    """Ledger stored in a nested, not yet existing directory."""
    return PendingPlaceholders(tmp_path / "state")


class TestPendingPlaceholders:
    """Tests for PendingPlaceholders."""

    def test_empty_without_file(self, ledger):
        """Test that a missing ledger file means nothing is pending."""
        assert ledger.pending() == []

    def test_record_and_clear(self, ledger):
        """Test that recorded ids are pending until cleared."""
        ledger.record("doc-1", "nb1")
        ledger.record("doc-2", "nb1")

        assert ledger.pending() == ["doc-1", "doc-2"]

        ledger.clear("doc-1")

        assert ledger.pending() == ["doc-2"]

    def test_record_is_persisted(self, ledger):
        """Test that the ledger survives a new instance."""
        ledger.record("doc-1", "nb1")

        records = json.loads(ledger.path.read_text(encoding="utf-8"))
        assert records[0]["id"] == "doc-1"
        assert records[0]["notebook_id"] == "nb1"
        assert "created_at" in records[0]
        assert PendingPlaceholders(ledger.path.parent).pending() == ["doc-1"]

    def test_unreadable_ledger_is_ignored(self, ledger):
        """Test that a corrupt ledger file reads as empty."""
        ledger.path.parent.mkdir(parents=True)
        ledger.path.write_text("{not json", encoding="utf-8")

        assert ledger.pending() == []

    def test_collect_garbage(self, ledger, make_api):
        """Test that leftover placeholders are deleted and forgotten."""
        api = make_api()
        leftover = api.create_document("Joplin Disk Usage Report", "nb1", "...")
        ledger.record(leftover, "nb1")
        ledger.record("already-gone", "nb1")

        collected = ledger.collect_garbage(api)

        assert collected == [leftover, "already-gone"]
        assert api.documents == {}
        assert ledger.pending() == []

    def test_collect_garbage_propagates_api_failures(self, ledger, make_api):
        """Test that deletion failures other than not-found are raised."""
        api = make_api()
        api.fail_on.add("delete_document")
        ledger.record("doc-1", "nb1")

        with pytest.raises(APIError):
            ledger.collect_garbage(api)

        assert ledger.pending() == ["doc-1"]
