"""Shared fixtures: an in-memory data API standing in for Joplin."""

from collections.abc import Sequence

import pytest

from disk_usage.clients.base import (
    APIError,
    DataAPI,
    NoActiveNotebookError,
    NotFoundError,
)
from disk_usage.models import Note, Notebook, Page, Resource


class FakeDataAPI(DataAPI):
    """In-memory store that records every call made against it."""

    def __init__(
        self,
        resources: Sequence[Resource] = (),
        links: dict[str, list[Note]] | None = None,
        notebooks: Sequence[Notebook] = (),
        current_notebook_id: str | None = None,
    ):
        self.resources = list(resources)
        self.links = dict(links or {})
        self.notebooks = {notebook.id: notebook for notebook in notebooks}
        self.current_notebook_id = current_notebook_id
        self.documents: dict[str, dict[str, str]] = {}
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()
        self._next_id = 0

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise APIError(f"{name} failed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    def calls_to(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    @staticmethod
    def _page(items: list, page: int, page_size: int) -> Page:
        start = (page - 1) * page_size
        return Page(items=items[start : start + page_size], has_more=start + page_size < len(items))

    def list_resources(self, page, page_size, fields):
        self._record("list_resources", page, page_size)
        return self._page(self.resources, page, page_size)

    def list_notes_referencing(self, resource_id, fields, page=1, page_size=100):
        self._record("list_notes_referencing", resource_id, page)
        return self._page(self.links.get(resource_id, []), page, page_size)

    def list_notebooks(self, page, page_size, fields):
        self._record("list_notebooks", page)
        return self._page(list(self.notebooks.values()), page, page_size)

    def get_notebook(self, notebook_id):
        self._record("get_notebook", notebook_id)
        if notebook_id not in self.notebooks:
            raise NotFoundError(f"Not found: /folders/{notebook_id}")
        return self.notebooks[notebook_id]

    def create_document(self, title, notebook_id, body):
        self._record("create_document", title, notebook_id)
        self._next_id += 1
        document_id = f"doc-{self._next_id}"
        self.documents[document_id] = {"title": title, "notebook_id": notebook_id, "body": body}
        return document_id

    def delete_document(self, document_id):
        self._record("delete_document", document_id)
        if document_id not in self.documents:
            raise NotFoundError(f"Not found: /notes/{document_id}")
        del self.documents[document_id]

    def get_current_notebook(self):
        self._record("get_current_notebook")
        if self.current_notebook_id is None:
            raise NoActiveNotebookError("No notebook selected")
        return self.notebooks[self.current_notebook_id]


@pytest.fixture
def make_api():
    """Factory for FakeDataAPI instances."""
    return FakeDataAPI


@pytest.fixture
def inbox_api():
    """One notebook 'Inbox' whose notes 'Plans' and 'Ideas' both embed diagram.png."""
    inbox = Notebook(id="nb-inbox", title="Inbox")
    diagram = Resource(id="r1", size_bytes=2_097_152, title="diagram.png")
    return FakeDataAPI(
        resources=[diagram],
        links={
            "r1": [
                Note(id="n1", notebook_id="nb-inbox", title="Plans"),
                Note(id="n2", notebook_id="nb-inbox", title="Ideas"),
            ]
        },
        notebooks=[inbox],
        current_notebook_id="nb-inbox",
    )


@pytest.fixture
def library_api():
    """Two notebooks sharing one resource, plus an orphaned resource."""
    work = Notebook(id="nb-work", title="Work")
    home = Notebook(id="nb-home", title="Home")
    return FakeDataAPI(
        resources=[
            Resource(id="r-small", size_bytes=1_048_576, title="small.pdf"),
            Resource(id="r-shared", size_bytes=3_145_728, title="shared.png"),
            Resource(id="r-orphan", size_bytes=9_999_999, title="orphan.zip"),
            Resource(id="r-big", size_bytes=5_242_880, title="big.mov"),
        ],
        links={
            "r-small": [Note(id="n-w1", notebook_id="nb-work", title="Budget")],
            "r-shared": [
                Note(id="n-w2", notebook_id="nb-work", title="Roadmap"),
                Note(id="n-h1", notebook_id="nb-home", title="Garden"),
            ],
            "r-big": [Note(id="n-h2", notebook_id="nb-home", title="Holiday")],
        },
        notebooks=[work, home],
        current_notebook_id="nb-work",
    )
