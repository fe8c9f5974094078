"""
Files reader for Box Skills events.

Captures file information from an inbound skill event and gives access to the
file's content, either as uploaded or in a "basic format" that ML providers
accept more readily:

- audio files -> mp3
- video files -> mp4
- document files -> pdf
- image files (and anything unclassified) -> 1024x1024 jpg

Basic formats are generated by Box on demand. For large files the
representation may not be ready within a single request, so callers should
pass a ``timeout`` that fits their own deadline.
"""

import base64
import logging
from typing import Any, AsyncIterator, Callable, Dict, Iterable, Mapping, Optional, Union

import httpx

from skillskit.core.config import settings
from skillskit.core.logging import log_context
from skillskit.files.classifier import FileType
from skillskit.files.client import BoxAPIError, BoxClient, FileReadClient
from skillskit.files.exceptions import (
    FileProcessingError,
    InvalidFileFormatError,
    InvalidFileSizeError,
)
from skillskit.files.models import FileContext, SkillEvent

logger = logging.getLogger(__name__)

MB_IN_BYTES = 1048576

# Representation requested for each file type
BASIC_FORMAT_REPRESENTATIONS: Mapping[FileType, str] = {
    FileType.AUDIO: "mp3",
    FileType.VIDEO: "mp4",
    FileType.DOCUMENT: "pdf",
    FileType.IMAGE: "jpg?dimensions=1024x1024",
    FileType.UNKNOWN: "jpg?dimensions=1024x1024",
}

TRANSPORT_ERRORS = (BoxAPIError, httpx.HTTPError)


class FilesReader:
    """Read-only view of the file referenced by a skill event."""

    def __init__(
        self,
        event_body: Union[Dict[str, Any], str, bytes],
        client: Optional[FileReadClient] = None,
        *,
        api_base: Optional[str] = None,
        strict: Optional[bool] = None,
    ):
        """Initialize the reader from an event body.

        Args:
            event_body: Skill event as a decoded JSON object or raw JSON text
            client: Read client; defaults to a BoxClient for the event's read token
            api_base: Box API base URL used for the direct download URL
            strict: Classify unmatched formats as UNKNOWN instead of IMAGE
                (defaults to settings.STRICT_FILE_TYPES)

        Raises:
            InvalidEventError: If the event is missing required fields
        """
        event = SkillEvent.parse_event(event_body)
        self.context = FileContext.from_event(
            event, strict=settings.STRICT_FILE_TYPES if strict is None else strict
        )
        self.api_base = (api_base or settings.api_base).rstrip("/")
        self._client: FileReadClient = client or BoxClient(
            self.context.file_read_token, api_base=self.api_base
        )

        with log_context(self.context.request_id):
            logger.info(
                "Captured file context from skill event",
                extra={
                    "skill_id": self.context.skill_id,
                    "file_id": self.context.file_id,
                    "file_format": self.context.file_format,
                    "file_type": self.context.file_type.value,
                    "file_size": self.context.file_size,
                },
            )

    @property
    def file_id(self) -> str:
        return self.context.file_id

    @property
    def file_type(self) -> FileType:
        return self.context.file_type

    @property
    def file_format(self) -> str:
        return self.context.file_format

    @property
    def file_download_url(self) -> str:
        """Direct download URL authorized by the read token."""
        return (
            f"{self.api_base}/files/{self.context.file_id}/content"
            f"?access_token={self.context.file_read_token}"
        )

    def get_file_context(self) -> Dict[str, Any]:
        """
        Snapshot of the file context.

        Returns:
            Dict with request_id, skill_id, file_id, file_name, file_size,
            file_format, file_type, file_download_url, file_read_token and
            file_write_token
        """
        snapshot = self.context.model_dump(mode="json")
        snapshot["file_download_url"] = self.file_download_url
        return snapshot

    def validate_format(self, allowed_formats: Union[Iterable[str], str]) -> bool:
        """
        Check the file format against the skill's accepted formats.

        Args:
            allowed_formats: Accepted formats, compared case-insensitively;
                a single string is treated as one format

        Returns:
            True if the format is accepted

        Raises:
            InvalidFileFormatError: If the format is not accepted
        """
        if isinstance(allowed_formats, str):
            allowed_formats = [allowed_formats]
        allowed = {fmt.lstrip(".").lower() for fmt in allowed_formats}
        if self.context.file_format in allowed:
            return True
        raise InvalidFileFormatError(self.context.file_format, allowed)

    def validate_size(self, max_megabytes: float) -> bool:
        """
        Check the file size against the skill's limit.

        Args:
            max_megabytes: Largest accepted size in megabytes (inclusive)

        Returns:
            True if the file is within the limit

        Raises:
            InvalidFileSizeError: If the file is over the limit
        """
        file_size_mb = self.context.file_size / MB_IN_BYTES
        if file_size_mb <= max_megabytes:
            return True
        raise InvalidFileSizeError(file_size_mb, max_megabytes)

    async def _guarded_stream(
        self, open_stream: Callable[[], AsyncIterator[bytes]], action: str
    ) -> AsyncIterator[bytes]:
        try:
            async for chunk in open_stream():
                yield chunk
        except TRANSPORT_ERRORS as e:
            raise self._processing_error(action, e) from e

    def _processing_error(self, action: str, error: Exception) -> FileProcessingError:
        with log_context(self.context.request_id):
            logger.error(
                f"Failed to {action}: {error}",
                extra={
                    "file_id": self.context.file_id,
                    "error": str(error),
                    "status_code": getattr(error, "status_code", None),
                },
            )
        return FileProcessingError(
            f"Failed to {action} for file {self.context.file_id}: {error}",
            file_id=self.context.file_id,
        )

    def get_content_stream(self, timeout: Optional[float] = None) -> AsyncIterator[bytes]:
        """
        Stream the file's original content.

        Raises:
            FileProcessingError: While iterating, if the download fails
        """
        return self._guarded_stream(
            lambda: self._client.get_read_stream(self.context.file_id, timeout=timeout),
            "read file content",
        )

    async def get_content_base64(self, timeout: Optional[float] = None) -> str:
        """Download the file's original content and base64-encode it."""
        return await _read_base64(self.get_content_stream(timeout=timeout))

    async def get_basic_format_file_url(self, timeout: Optional[float] = None) -> str:
        """
        Resolve the download URL of the file's basic format representation.

        Args:
            timeout: Request timeout in seconds (defaults to
                settings.BASIC_FORMAT_TIMEOUT)

        Returns:
            Location URL of the representation content

        Raises:
            FileProcessingError: If the representation is unavailable or the
                lookup fails
        """
        representation = BASIC_FORMAT_REPRESENTATIONS[self.context.file_type]
        if timeout is None:
            timeout = settings.BASIC_FORMAT_TIMEOUT

        with log_context(self.context.request_id):
            try:
                info = await self._client.get_representation_info(
                    self.context.file_id, representation, timeout=timeout
                )
            except TRANSPORT_ERRORS as e:
                raise self._processing_error(f"fetch [{representation}] representation", e) from e

            if not info.location:
                raise self._processing_error(
                    f"fetch [{representation}] representation",
                    BoxAPIError(f"representation state is {info.state!r} with no location"),
                )

            logger.info(
                "Resolved basic format representation",
                extra={"file_id": self.context.file_id, "representation": representation},
            )
        return info.location

    def get_basic_format_content_stream(self, timeout: Optional[float] = None) -> AsyncIterator[bytes]:
        """
        Stream the file's basic format content.

        The representation URL is resolved on first iteration.

        Raises:
            FileProcessingError: While iterating, if resolution or download fails
        """
        if timeout is None:
            timeout = settings.BASIC_FORMAT_TIMEOUT

        async def _stream() -> AsyncIterator[bytes]:
            url = await self.get_basic_format_file_url(timeout=timeout)
            async for chunk in self._guarded_stream(
                lambda: self._client.get_url_stream(url, timeout=timeout),
                "read basic format content",
            ):
                yield chunk

        return _stream()

    async def get_basic_format_content_base64(self, timeout: Optional[float] = None) -> str:
        """Download the file's basic format content and base64-encode it."""
        return await _read_base64(self.get_basic_format_content_stream(timeout=timeout))


async def _read_base64(stream: AsyncIterator[bytes]) -> str:
    chunks = [chunk async for chunk in stream]
    return base64.b64encode(b"".join(chunks)).decode("ascii")
