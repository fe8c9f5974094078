"""
Status messages written back to Box when a skill cannot process a file.

The catalog is static: each ErrorKind maps to the user-facing message shown
on the file's status card. Unknown kinds resolve to the UNKNOWN message.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union


class ErrorKind(str, Enum):
    """Kinds of skill failures reported back to the user."""

    FILE_PROCESSING_ERROR = "FILE_PROCESSING_ERROR"
    INVALID_FILE_SIZE = "INVALID_FILE_SIZE"
    INVALID_FILE_FORMAT = "INVALID_FILE_FORMAT"
    INVALID_EVENT = "INVALID_EVENT"
    NO_INFO_FOUND = "NO_INFO_FOUND"
    INVOCATIONS_ERROR = "INVOCATIONS_ERROR"
    EXTERNAL_AUTH_ERROR = "EXTERNAL_AUTH_ERROR"
    BILLING_ERROR = "BILLING_ERROR"
    UNKNOWN = "UNKNOWN"


_PROCESSING_FAILED = "We're sorry, something went wrong with processing the file."
_SKILL_FAILED = "Something went wrong with running this skill or fetching its data."

STATUS_MESSAGES: Mapping[ErrorKind, str] = MappingProxyType(
    {
        ErrorKind.FILE_PROCESSING_ERROR: _PROCESSING_FAILED,
        ErrorKind.INVALID_FILE_SIZE: f"{_PROCESSING_FAILED} This file size is currently not supported.",
        ErrorKind.INVALID_FILE_FORMAT: f"{_PROCESSING_FAILED} Invalid information received.",
        ErrorKind.INVALID_EVENT: f"{_PROCESSING_FAILED} Invalid information received.",
        ErrorKind.NO_INFO_FOUND: "We're sorry, no skills information was found.",
        ErrorKind.INVOCATIONS_ERROR: _SKILL_FAILED,
        ErrorKind.EXTERNAL_AUTH_ERROR: _SKILL_FAILED,
        ErrorKind.BILLING_ERROR: _SKILL_FAILED,
        ErrorKind.UNKNOWN: _SKILL_FAILED,
    }
)


def resolve_error_kind(kind: Union[ErrorKind, str, None]) -> ErrorKind:
    """
    Normalize an ErrorKind or its name.

    Args:
        kind: ErrorKind member, its name (case-insensitive), or None

    Returns:
        Matching ErrorKind, or ErrorKind.UNKNOWN when nothing matches
    """
    if isinstance(kind, ErrorKind):
        return kind
    if isinstance(kind, str):
        try:
            return ErrorKind(kind.strip().upper())
        except ValueError:
            pass
    return ErrorKind.UNKNOWN


def get_status_message(kind: Union[ErrorKind, str, None]) -> str:
    """
    Look up the user-facing message for an error kind.

    Examples:
        >>> get_status_message(ErrorKind.NO_INFO_FOUND)
        "We're sorry, no skills information was found."
        >>> get_status_message("not-a-kind") == STATUS_MESSAGES[ErrorKind.UNKNOWN]
        True
    """
    return STATUS_MESSAGES[resolve_error_kind(kind)]


def get_error_message(error: BaseException) -> str:
    """Message for an exception, using its ``error_kind`` when it has one."""
    return get_status_message(getattr(error, "error_kind", None))


def status_code(kind: Union[ErrorKind, str, None]) -> str:
    """Status card code for an error kind, e.g. ``skills_invalid_file_size``."""
    return f"skills_{resolve_error_kind(kind).value.lower()}"
