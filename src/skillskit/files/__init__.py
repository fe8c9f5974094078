"""
Files reader for Box Skills.

Parses inbound skill events, classifies the referenced file, validates it
against a skill's constraints and fetches its content from Box.
"""

from skillskit.files.classifier import FileClassification, FileType, classify_file, classify_format, classify_type
from skillskit.files.client import BoxAPIError, BoxClient, RepresentationInfo, RepresentationUnavailableError
from skillskit.files.exceptions import (
    FileProcessingError,
    InvalidEventError,
    InvalidFileFormatError,
    InvalidFileSizeError,
    SkillsKitError,
)
from skillskit.files.models import FileContext, SkillEvent
from skillskit.files.reader import BASIC_FORMAT_REPRESENTATIONS, FilesReader

__all__ = [
    "BASIC_FORMAT_REPRESENTATIONS",
    "BoxAPIError",
    "BoxClient",
    "FileClassification",
    "FileContext",
    "FileProcessingError",
    "FileType",
    "FilesReader",
    "InvalidEventError",
    "InvalidFileFormatError",
    "InvalidFileSizeError",
    "RepresentationInfo",
    "RepresentationUnavailableError",
    "SkillEvent",
    "SkillsKitError",
    "classify_file",
    "classify_format",
    "classify_type",
]
