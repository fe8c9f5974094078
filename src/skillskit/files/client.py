"""
Box API clients used by the files reader and metadata writer.

The reader and writer depend only on the capability protocols below, so any
object with the same methods can stand in for ``BoxClient`` (tests use fakes).
``BoxClient`` is the httpx-based adapter for the Box REST API; it holds a
single file-scoped access token and opens a short-lived connection per call.
There is no retry: transport errors propagate as ``httpx.HTTPError`` and
non-2xx responses as ``BoxAPIError``.
"""

import json
import logging
from typing import Any, AsyncIterator, Dict, Optional, Protocol

import httpx
from pydantic import BaseModel, Field

from skillskit.core.config import settings

logger = logging.getLogger(__name__)

# Representation states that have downloadable content
READY_STATES = frozenset(["success", "viewable"])


class BoxAPIError(Exception):
    """Exception raised when the Box API answers with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class RepresentationUnavailableError(BoxAPIError):
    """Exception raised when a representation is missing, pending or failed."""

    def __init__(self, file_id: str, representation: str, state: str) -> None:
        self.file_id = file_id
        self.representation = representation
        self.state = state
        super().__init__(
            f"Representation [{representation}] of file {file_id} is not available (state: {state})"
        )


class RepresentationInfo(BaseModel):
    """Representation lookup result."""

    representation: str = Field(..., description="Representation hint, e.g. 'mp3'")
    state: str = Field(..., description="Generation state reported by Box")
    location: Optional[str] = Field(None, description="Download URL of the representation content")


class FileReadClient(Protocol):
    """Read capabilities needed by FilesReader."""

    def get_read_stream(self, file_id: str, timeout: Optional[float] = None) -> AsyncIterator[bytes]:
        """Stream the raw content of a file."""
        ...

    async def get_representation_info(
        self, file_id: str, representation: str, timeout: Optional[float] = None
    ) -> RepresentationInfo:
        """Look up a transcoded representation of a file."""
        ...

    def get_url_stream(self, url: str, timeout: Optional[float] = None) -> AsyncIterator[bytes]:
        """Stream the content behind a Box download URL."""
        ...


class MetadataWriteClient(Protocol):
    """Write capabilities needed by MetadataWriter."""

    async def apply_metadata(
        self,
        file_id: str,
        template: str,
        payload: Dict[str, Any],
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Create or replace a global metadata instance on a file."""
        ...


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_error:
        raise BoxAPIError(
            f"Box API returned {response.status_code} for {response.request.method} {response.url}",
            status_code=response.status_code,
            url=str(response.url),
        )


class BoxClient:
    """Box REST API client bound to one access token."""

    def __init__(
        self,
        access_token: str,
        api_base: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            access_token: File-scoped read or write token from the skill event
            api_base: Box API base URL (defaults to settings.BOX_API_BASE)
            timeout: Default request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.access_token = access_token
        self.api_base = (api_base or settings.api_base).rstrip("/")
        self.timeout = settings.REQUEST_TIMEOUT if timeout is None else timeout
        self._transport = transport

    def _client(self, timeout: Optional[float]) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout if timeout is None else timeout,
            transport=self._transport,
            follow_redirects=True,
        )

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    async def _stream(self, url: str, timeout: Optional[float]) -> AsyncIterator[bytes]:
        async with self._client(timeout) as client:
            async with client.stream("GET", url, headers=self._headers()) as response:
                if response.is_error:
                    await response.aread()
                    _raise_for_status(response)
                async for chunk in response.aiter_bytes(settings.STREAM_CHUNK_SIZE):
                    yield chunk

    def get_read_stream(self, file_id: str, timeout: Optional[float] = None) -> AsyncIterator[bytes]:
        """
        Stream the raw content of a file.

        Box answers with a redirect to a pre-signed download URL, which is
        followed automatically.
        """
        return self._stream(f"{self.api_base}/files/{file_id}/content", timeout)

    def get_url_stream(self, url: str, timeout: Optional[float] = None) -> AsyncIterator[bytes]:
        """Stream the content behind a Box download URL."""
        return self._stream(url, timeout)

    async def get_representation_info(
        self, file_id: str, representation: str, timeout: Optional[float] = None
    ) -> RepresentationInfo:
        """
        Look up a transcoded representation of a file.

        Args:
            file_id: Box file identifier
            representation: Representation hint, e.g. "mp3" or
                "jpg?dimensions=1024x1024"
            timeout: Request timeout in seconds

        Returns:
            RepresentationInfo with the content location

        Raises:
            RepresentationUnavailableError: If Box has no ready
                representation for the file
            BoxAPIError: If the API returns an error status
            httpx.HTTPError: If the request fails
        """
        headers = {**self._headers(), "x-rep-hints": f"[{representation}]"}

        async with self._client(timeout) as client:
            response = await client.get(
                f"{self.api_base}/files/{file_id}",
                params={"fields": "representations"},
                headers=headers,
            )
            _raise_for_status(response)

        entries = (response.json().get("representations") or {}).get("entries") or []
        if not entries:
            raise RepresentationUnavailableError(file_id, representation, state="none")

        entry = entries[0]
        state = (entry.get("status") or {}).get("state", "none")
        url_template = (entry.get("content") or {}).get("url_template")

        if state not in READY_STATES or not url_template:
            raise RepresentationUnavailableError(file_id, representation, state=state)

        logger.debug(
            "Resolved file representation",
            extra={"file_id": file_id, "representation": representation, "state": state},
        )

        return RepresentationInfo(
            representation=representation,
            state=state,
            location=url_template.replace("{+asset_path}", ""),
        )

    async def apply_metadata(
        self,
        file_id: str,
        template: str,
        payload: Dict[str, Any],
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Create a global metadata instance, replacing its keys if it exists.

        Args:
            file_id: Box file identifier
            template: Global metadata template key, e.g. "boxSkillsCards"
            payload: Metadata instance body
            timeout: Request timeout in seconds

        Returns:
            Metadata instance as returned by Box

        Raises:
            BoxAPIError: If the API returns an error status
            httpx.HTTPError: If the request fails
        """
        url = f"{self.api_base}/files/{file_id}/metadata/global/{template}"

        async with self._client(timeout) as client:
            response = await client.post(url, json=payload, headers=self._headers())

            if response.status_code == 409:
                # Instance already exists; replace each top-level key
                operations = [
                    {"op": "replace", "path": f"/{key}", "value": value}
                    for key, value in payload.items()
                ]
                response = await client.put(
                    url,
                    content=json.dumps(operations),
                    headers={**self._headers(), "Content-Type": "application/json-patch+json"},
                )

            _raise_for_status(response)

        return response.json()
