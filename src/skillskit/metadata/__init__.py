"""
Status metadata for Box Skills.

The status catalog maps error kinds to the messages shown to users. Writing
status cards back to Box lives in ``skillskit.metadata.writer``.
"""

from skillskit.metadata.status import (
    STATUS_MESSAGES,
    ErrorKind,
    get_error_message,
    get_status_message,
    status_code,
)

__all__ = [
    "ErrorKind",
    "STATUS_MESSAGES",
    "get_error_message",
    "get_status_message",
    "status_code",
]
