"""
File format classifier for Box Skills events.

Classifies files into coarse types based on their extension:
- audio: formats Box can transcode to mp3
- document: formats Box can transcode to pdf
- video: formats Box can transcode to mp4
- image: everything else (see IMAGE fallback below)

Formats are normalized to lower case before lookup, so "clip.MP4" and
"clip.mp4" both classify as video with format "mp4".

Unknown formats default to IMAGE. A ".txt" file is therefore classified as
IMAGE; callers that need to reject such files should pass ``strict=True``,
which returns UNKNOWN instead.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List


class FileType(str, Enum):
    """Coarse file types used to pick a basic format representation."""

    AUDIO = "AUDIO"
    VIDEO = "VIDEO"
    IMAGE = "IMAGE"
    DOCUMENT = "DOCUMENT"
    UNKNOWN = "UNKNOWN"


AUDIO_FORMATS: FrozenSet[str] = frozenset(
    ["aac", "aif", "aifc", "aiff", "amr", "au", "flac", "m4a", "mp3", "ra", "wav", "wma"]
)

VIDEO_FORMATS: FrozenSet[str] = frozenset(
    [
        "3g2", "3gp", "avi", "flv", "m2v", "m2ts", "m4v", "mkv", "mov", "mp4", "mpeg",
        "mpg", "ogg", "mts", "qt", "ts", "wmv",
    ]
)

DOCUMENT_FORMATS: FrozenSet[str] = frozenset(["pdf"])


@dataclass(frozen=True)
class FileClassification:
    """Format and coarse type derived from a file name."""

    format: str
    type: FileType


def classify_format(file_name: str) -> str:
    """
    Extract the normalized format of a file name.

    Args:
        file_name: File name or path (e.g., "meeting.MP3")

    Returns:
        Lower-case extension without the leading dot, or "" when the
        name has no extension

    Examples:
        >>> classify_format("video.MP4")
        'mp4'
        >>> classify_format("archive.tar.gz")
        'gz'
        >>> classify_format(".bashrc")
        ''
    """
    name = os.path.basename(file_name)
    dot = name.rfind(".")
    # A dot at position 0 starts a hidden file name, not an extension
    if dot <= 0:
        return ""
    return name[dot:].lstrip(".").lower()


def classify_type(file_format: str, strict: bool = False) -> FileType:
    """
    Classify a file format into a coarse file type.

    Lookup order is audio, then document, then video. Anything else is
    IMAGE, or UNKNOWN when ``strict`` is set.

    Args:
        file_format: Format as returned by ``classify_format``
        strict: Return UNKNOWN instead of IMAGE for unmatched formats

    Returns:
        FileType enum value
    """
    normalized = file_format.lower()

    if normalized in AUDIO_FORMATS:
        return FileType.AUDIO
    if normalized in DOCUMENT_FORMATS:
        return FileType.DOCUMENT
    if normalized in VIDEO_FORMATS:
        return FileType.VIDEO

    return FileType.UNKNOWN if strict else FileType.IMAGE


def classify_file(file_name: str, strict: bool = False) -> FileClassification:
    """Classify a file name into its format and type."""
    file_format = classify_format(file_name)
    return FileClassification(format=file_format, type=classify_type(file_format, strict=strict))


def get_supported_formats() -> List[str]:
    """
    Get all formats with an explicit type mapping.

    Returns:
        Sorted list of audio, document and video formats
    """
    return sorted(AUDIO_FORMATS | DOCUMENT_FORMATS | VIDEO_FORMATS)


def get_type_formats(file_type: FileType) -> List[str]:
    """
    Get all formats explicitly mapped to a file type.

    IMAGE and UNKNOWN are fallbacks and have no formats of their own.

    Args:
        file_type: The file type to query

    Returns:
        Sorted list of formats for that type
    """
    tables = {
        FileType.AUDIO: AUDIO_FORMATS,
        FileType.VIDEO: VIDEO_FORMATS,
        FileType.DOCUMENT: DOCUMENT_FORMATS,
    }
    return sorted(tables.get(file_type, frozenset()))
