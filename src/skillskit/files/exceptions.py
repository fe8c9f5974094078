"""Custom exceptions for reading Box Skills events and files."""

from typing import Any, Iterable, List, Optional

from skillskit.metadata.status import ErrorKind


class SkillsKitError(Exception):
    """Base exception for the skills kit."""

    error_kind: ErrorKind = ErrorKind.UNKNOWN


class InvalidEventError(SkillsKitError):
    """Exception raised when an inbound event is missing fields or malformed."""

    error_kind = ErrorKind.INVALID_EVENT

    def __init__(self, message: str, errors: Optional[List[Any]] = None) -> None:
        self.errors = errors or []
        super().__init__(message)


class InvalidFileFormatError(SkillsKitError):
    """Exception raised when a file format is not accepted by the skill."""

    error_kind = ErrorKind.INVALID_FILE_FORMAT

    def __init__(self, file_format: str, allowed_formats: Iterable[str]) -> None:
        """Initialize InvalidFileFormatError.

        Args:
            file_format: Format derived from the file name.
            allowed_formats: Formats the skill accepts.
        """
        self.file_format = file_format
        self.allowed_formats = sorted(allowed_formats)
        super().__init__(f"File format {file_format!r} is not accepted by this skill")


class InvalidFileSizeError(SkillsKitError):
    """Exception raised when a file exceeds the skill's size limit."""

    error_kind = ErrorKind.INVALID_FILE_SIZE

    def __init__(self, file_size_mb: float, limit_mb: float) -> None:
        """Initialize InvalidFileSizeError.

        Args:
            file_size_mb: File size in megabytes.
            limit_mb: Accepted limit in megabytes.
        """
        self.file_size_mb = file_size_mb
        self.limit_mb = limit_mb
        super().__init__(f"File size {file_size_mb:g} MB is over accepted limit of {limit_mb:g} MB")


class FileProcessingError(SkillsKitError):
    """Exception raised when fetching content or representations fails."""

    error_kind = ErrorKind.FILE_PROCESSING_ERROR

    def __init__(self, message: str, file_id: Optional[str] = None) -> None:
        self.file_id = file_id
        super().__init__(message)
