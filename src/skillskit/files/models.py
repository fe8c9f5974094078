"""
Box Skills event models.

Box delivers one event per file that triggers a skill. The payload carries the
skill invocation id, the source file, and a pair of short-lived tokens scoped
to that file:

    {
        "id": "<invocation id>",
        "skill": {"id": "<skill id>", ...},
        "source": {"id": "<file id>", "name": "meeting.mp3", "size": 2048, ...},
        "token": {
            "read": {"access_token": "...", ...},
            "write": {"access_token": "...", ...}
        },
        ...
    }
"""

import json
import logging
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from skillskit.files.classifier import FileClassification, FileType, classify_file
from skillskit.files.exceptions import InvalidEventError

logger = logging.getLogger(__name__)


class SkillRef(BaseModel):
    """Skill that the event was sent for."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Skill identifier")


class SourceFile(BaseModel):
    """File that triggered the skill."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Box file identifier")
    name: str = Field(..., description="File name including extension")
    size: int = Field(..., ge=0, description="File size in bytes")

    @field_validator("size", mode="before")
    @classmethod
    def reject_bool_size(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("size must be a number of bytes, not a boolean")
        return value


class AccessToken(BaseModel):
    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(..., min_length=1)


class EventTokens(BaseModel):
    """Read and write tokens scoped to the source file."""

    model_config = ConfigDict(extra="ignore")

    read: AccessToken
    write: AccessToken


class SkillEvent(BaseModel):
    """
    Box Skills invocation event.

    Only the fields the kit depends on are declared; everything else in the
    payload is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Skill invocation (request) identifier")
    skill: SkillRef
    source: SourceFile
    token: EventTokens

    @classmethod
    def parse_event(cls, body: Union[Dict[str, Any], str, bytes]) -> "SkillEvent":
        """
        Validate a raw event body.

        Args:
            body: Decoded JSON object, or the raw JSON text

        Returns:
            Validated SkillEvent

        Raises:
            InvalidEventError: If the body is not a JSON object or any
                required field is missing or has the wrong shape
        """
        if isinstance(body, (str, bytes)):
            try:
                body = json.loads(body)
            except ValueError as e:
                raise InvalidEventError(f"Event body is not valid JSON: {e}") from e

        if not isinstance(body, dict):
            raise InvalidEventError(
                f"Event body must be a JSON object, got {type(body).__name__}"
            )

        try:
            return cls.model_validate(body)
        except ValidationError as e:
            locations = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
            logger.warning(
                "Rejected malformed skill event",
                extra={"event_id": body.get("id"), "invalid_fields": locations},
            )
            raise InvalidEventError(
                f"Invalid skill event, bad or missing fields: {', '.join(locations)}",
                errors=locations,
            ) from e


class FileContext(BaseModel):
    """
    File information captured from a single skill event.

    Immutable; one instance per event. Tokens are kept out of ``repr``.
    """

    model_config = ConfigDict(frozen=True)

    request_id: str
    skill_id: str
    file_id: str
    file_name: str
    file_size: int
    file_format: str
    file_type: FileType
    file_read_token: str = Field(..., repr=False)
    file_write_token: str = Field(..., repr=False)

    @classmethod
    def from_event(cls, event: SkillEvent, strict: bool = False) -> "FileContext":
        """
        Create a FileContext from a validated event.

        Args:
            event: Validated SkillEvent
            strict: Classify unmatched formats as UNKNOWN instead of IMAGE

        Returns:
            FileContext with the derived file classification
        """
        classification = classify_file(event.source.name, strict=strict)
        return cls(
            request_id=event.id,
            skill_id=event.skill.id,
            file_id=event.source.id,
            file_name=event.source.name,
            file_size=event.source.size,
            file_format=classification.format,
            file_type=classification.type,
            file_read_token=event.token.read.access_token,
            file_write_token=event.token.write.access_token,
        )

    @property
    def classification(self) -> FileClassification:
        return FileClassification(format=self.file_format, type=self.file_type)
