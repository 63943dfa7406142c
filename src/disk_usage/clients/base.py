"""Abstract data API and the error hierarchy shared by all clients."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..models import Note, Notebook, Page, Resource


class DataAPI(ABC):
    """Capabilities the report needs from the document store.

    The Joplin REST client implements this interface; tests use an
    in-memory implementation.
    """

    @abstractmethod
    def list_resources(self, page: int, page_size: int, fields: Sequence[str]) -> Page[Resource]:
        """List one page of resources.

        Args:
            page: 1-based page number
            page_size: Maximum number of items on the page
            fields: Resource fields to request

        Returns:
            The page of resources and whether more pages follow

        Raises:
            APIError: If the request fails
        """
        pass

    @abstractmethod
    def list_notes_referencing(
        self,
        resource_id: str,
        fields: Sequence[str],
        page: int = 1,
        page_size: int = 100,
    ) -> Page[Note]:
        """List one page of notes that reference a resource.

        Raises:
            APIError: If the request fails
        """
        pass

    @abstractmethod
    def list_notebooks(self, page: int, page_size: int, fields: Sequence[str]) -> Page[Notebook]:
        """List one page of notebooks."""
        pass

    @abstractmethod
    def get_notebook(self, notebook_id: str) -> Notebook:
        """Fetch a single notebook.

        Raises:
            NotFoundError: If no notebook has this id
            APIError: If the request fails
        """
        pass

    @abstractmethod
    def create_document(self, title: str, notebook_id: str, body: str) -> str:
        """Create a note and return its id."""
        pass

    @abstractmethod
    def delete_document(self, document_id: str) -> None:
        """Permanently delete a note.

        Raises:
            NotFoundError: If the note does not exist
        """
        pass

    @abstractmethod
    def get_current_notebook(self) -> Notebook:
        """Get the notebook new documents are created in.

        Raises:
            NoActiveNotebookError: If no notebook is selected or it cannot be found
        """
        pass


class DiskUsageError(Exception):
    """Base exception for disk usage report errors."""

    pass


class ConfigurationError(DiskUsageError):
    """Required configuration is missing or invalid."""

    pass


class NoActiveNotebookError(DiskUsageError):
    """There is no current notebook to publish the report into."""

    pass


class APIError(DiskUsageError):
    """API request failed."""

    pass


class NotFoundError(APIError):
    """The requested entity does not exist."""

    pass


class AuthenticationError(APIError):
    """The API token was rejected."""

    pass
