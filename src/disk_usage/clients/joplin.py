"""Joplin Data API client."""

import re
from collections.abc import Sequence
from typing import Any

import requests

from common.logger import get_logger

from ..collector import collect_pages
from ..constants import NOTEBOOK_FIELDS, PAGE_SIZE
from ..models import Note, Notebook, Page, Resource
from .base import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    DataAPI,
    NoActiveNotebookError,
    NotFoundError,
)
from .rate_limiter import RateLimiter

logger = get_logger(__name__)

# Joplin item ids are 32 lowercase hex characters
ITEM_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


class JoplinClient(DataAPI):
    """Client for the Joplin Data API.

    The desktop app serves the API through its Web Clipper service. Every
    request is authenticated with the token shown under
    Tools > Options > Web Clipper.

    Requests are never retried: any failure is raised as APIError and
    aborts the report run.

    API Documentation: https://joplinapp.org/help/api/references/rest_api
    """

    DEFAULT_URL = "http://localhost:41184"

    def __init__(
        self,
        token: str | None,
        base_url: str = DEFAULT_URL,
        notebook: str | None = None,
        timeout: float = 30,
        rate_limiter: RateLimiter | None = None,
    ):
        """Initialize Joplin client.

        Args:
            token: Data API token
            base_url: Data API base URL
            notebook: Id or exact title of the notebook new documents go to
            timeout: Per-request timeout in seconds
            rate_limiter: Optional throttle applied before every request

        Raises:
            ConfigurationError: If no token is given
        """
        if not token:
            raise ConfigurationError(
                "No Joplin API token configured. Set JOPLIN_TOKEN to the token "
                "shown in Joplin under Tools > Options > Web Clipper."
            )
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.notebook = notebook
        self.timeout = timeout
        self.rate_limiter = rate_limiter or RateLimiter(requests_per_period=None)
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": "joplin-disk-usage/1.0"})

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Send one authenticated request and map failures onto APIError.

        Raises:
            NotFoundError: On HTTP 404
            AuthenticationError: On HTTP 403
            APIError: On any other transport or HTTP failure
        """
        self.rate_limiter.wait_if_needed()

        url = f"{self.base_url}/{path.lstrip('/')}"
        query = {**(params or {}), "token": self.token}
        logger.debug(f"{method} /{path.lstrip('/')} {params or ''}")

        try:
            response = self.session.request(
                method, url, params=query, json=json, timeout=self.timeout
            )
            response.raise_for_status()
            return response
        except requests.exceptions.Timeout as e:
            raise APIError(f"Joplin API timeout: {method} /{path}") from e
        except requests.exceptions.ConnectionError as e:
            raise APIError(
                f"Cannot reach the Joplin Data API at {self.base_url}. "
                "Is Joplin running with the Web Clipper service enabled?"
            ) from e
        except requests.exceptions.RequestException as e:
            status = e.response.status_code if e.response is not None else None
            if status == 404:
                raise NotFoundError(f"Not found: /{path}") from e
            if status == 403:
                raise AuthenticationError("Joplin rejected the API token") from e
            raise APIError(f"Joplin API error: {e}") from e

    def _get_json(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        try:
            return self._request("GET", path, params=params).json()
        except ValueError as e:
            raise APIError(f"Joplin API returned invalid JSON for /{path}") from e

    @staticmethod
    def _page_params(page: int, page_size: int, fields: Sequence[str]) -> dict[str, Any]:
        return {"fields": ",".join(fields), "page": page, "limit": page_size}

    def list_resources(self, page: int, page_size: int, fields: Sequence[str]) -> Page[Resource]:
        data = self._get_json("resources", self._page_params(page, page_size, fields))
        return Page(
            items=[Resource.from_api(item) for item in data.get("items", [])],
            has_more=bool(data.get("has_more", False)),
        )

    def list_notes_referencing(
        self,
        resource_id: str,
        fields: Sequence[str],
        page: int = 1,
        page_size: int = PAGE_SIZE,
    ) -> Page[Note]:
        data = self._get_json(
            f"resources/{resource_id}/notes", self._page_params(page, page_size, fields)
        )
        return Page(
            items=[Note.from_api(item) for item in data.get("items", [])],
            has_more=bool(data.get("has_more", False)),
        )

    def list_notebooks(self, page: int, page_size: int, fields: Sequence[str]) -> Page[Notebook]:
        data = self._get_json("folders", self._page_params(page, page_size, fields))
        return Page(
            items=[Notebook.from_api(item) for item in data.get("items", [])],
            has_more=bool(data.get("has_more", False)),
        )

    def get_notebook(self, notebook_id: str) -> Notebook:
        data = self._get_json(f"folders/{notebook_id}", {"fields": ",".join(NOTEBOOK_FIELDS)})
        return Notebook.from_api(data)

    def create_document(self, title: str, notebook_id: str, body: str) -> str:
        response = self._request(
            "POST", "notes", json={"title": title, "parent_id": notebook_id, "body": body}
        )
        try:
            note_id = response.json()["id"]
        except (ValueError, KeyError) as e:
            raise APIError("Joplin API did not return the id of the created note") from e
        logger.debug(f"Created note {note_id} in notebook {notebook_id}")
        return note_id

    def delete_document(self, document_id: str) -> None:
        # permanent=1 bypasses the trash
        self._request("DELETE", f"notes/{document_id}", params={"permanent": 1})
        logger.debug(f"Deleted note {document_id}")

    def get_current_notebook(self) -> Notebook:
        """Resolve the configured notebook by id, falling back to exact title match.

        Raises:
            NoActiveNotebookError: If no notebook is configured or none matches
        """
        if not self.notebook:
            raise NoActiveNotebookError(
                "No notebook selected. Pass --notebook or set JOPLIN_NOTEBOOK "
                "to the id or title of the notebook the report should go to."
            )

        if ITEM_ID_PATTERN.match(self.notebook):
            try:
                return self.get_notebook(self.notebook)
            except NotFoundError:
                logger.debug(f"No notebook with id {self.notebook}, trying it as a title")

        notebooks = collect_pages(
            lambda page, size: self.list_notebooks(page, size, NOTEBOOK_FIELDS)
        )
        for notebook in notebooks:
            if notebook.title == self.notebook:
                return notebook

        raise NoActiveNotebookError(f"Notebook not found: {self.notebook!r}")

    def ping(self) -> bool:
        """Check that the Data API is up.

        Returns:
            True if the server identifies itself as Joplin's clipper server
        """
        response = self._request("GET", "ping")
        return response.text.strip() == "JoplinClipperServer"

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
