"""
Status card write-back for Box Skills.

Skills report their outcome on the file's "boxSkillsCards" metadata
instance. This module writes status cards only; other card types are built
by the skill itself and written through the same client.
"""

import logging
from typing import Any, Dict, Optional, Union

import httpx

from skillskit.core.config import settings
from skillskit.core.logging import log_context
from skillskit.files.client import BoxAPIError, BoxClient, MetadataWriteClient
from skillskit.files.exceptions import FileProcessingError
from skillskit.files.models import FileContext
from skillskit.metadata.status import ErrorKind, get_error_message, get_status_message, status_code

logger = logging.getLogger(__name__)


class MetadataWriter:
    """Writes skill status back to the file that triggered the skill."""

    def __init__(
        self,
        file_context: FileContext,
        client: Optional[MetadataWriteClient] = None,
        template: Optional[str] = None,
    ):
        """Initialize the writer.

        Args:
            file_context: Context captured by FilesReader
            client: Write client; defaults to a BoxClient for the event's write token
            template: Metadata template key (defaults to settings.METADATA_TEMPLATE)
        """
        self.context = file_context
        self.template = template or settings.METADATA_TEMPLATE
        self._client: MetadataWriteClient = client or BoxClient(file_context.file_write_token)

    def build_status_card(self, message: str, code: str) -> Dict[str, Any]:
        """Build a status skill card for this file's invocation."""
        return {
            "type": "skill_card",
            "skill_card_type": "status",
            "skill_card_title": {"code": "skills_status", "message": "Status"},
            "status": {"code": code, "message": message},
            "skill": {"type": "service", "id": self.context.skill_id},
            "invocation": {"type": "skill_invocation", "id": self.context.request_id},
        }

    async def save_status(
        self,
        message: str,
        code: str = "skills_success",
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Write a status card, replacing any cards already on the file.

        Args:
            message: Message shown to the user
            code: Status code for the card
            timeout: Request timeout in seconds

        Returns:
            Metadata instance as returned by Box

        Raises:
            FileProcessingError: If the metadata write fails
        """
        payload = {"cards": [self.build_status_card(message, code)]}

        with log_context(self.context.request_id):
            try:
                result = await self._client.apply_metadata(
                    self.context.file_id, self.template, payload, timeout=timeout
                )
            except (BoxAPIError, httpx.HTTPError) as e:
                logger.error(
                    f"Failed to write status card: {e}",
                    extra={"file_id": self.context.file_id, "code": code, "error": str(e)},
                )
                raise FileProcessingError(
                    f"Failed to write status card for file {self.context.file_id}: {e}",
                    file_id=self.context.file_id,
                ) from e

            logger.info("Status card written", extra={"file_id": self.context.file_id, "code": code})
        return result

    async def save_error(
        self,
        error: Union[ErrorKind, str, BaseException],
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Write the catalog message for an error kind or exception.

        Args:
            error: ErrorKind, its name, or an exception carrying ``error_kind``
            timeout: Request timeout in seconds
        """
        if isinstance(error, BaseException):
            kind = getattr(error, "error_kind", ErrorKind.UNKNOWN)
            message = get_error_message(error)
        else:
            kind = error
            message = get_status_message(error)

        return await self.save_status(message, code=status_code(kind), timeout=timeout)
