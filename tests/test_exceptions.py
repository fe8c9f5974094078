"""Smoke tests for skills kit exceptions."""

import pytest

from skillskit.files.exceptions import (
    FileProcessingError,
    InvalidEventError,
    InvalidFileFormatError,
    InvalidFileSizeError,
    SkillsKitError,
)
from skillskit.metadata.status import ErrorKind


def test_exception_hierarchy():
    assert issubclass(InvalidEventError, SkillsKitError)
    assert issubclass(InvalidFileFormatError, SkillsKitError)
    assert issubclass(InvalidFileSizeError, SkillsKitError)
    assert issubclass(FileProcessingError, SkillsKitError)


def test_error_kinds():
    assert SkillsKitError.error_kind == ErrorKind.UNKNOWN
    assert InvalidEventError("bad").error_kind == ErrorKind.INVALID_EVENT
    assert InvalidFileFormatError("txt", []).error_kind == ErrorKind.INVALID_FILE_FORMAT
    assert InvalidFileSizeError(3, 1).error_kind == ErrorKind.INVALID_FILE_SIZE
    assert FileProcessingError("boom").error_kind == ErrorKind.FILE_PROCESSING_ERROR


def test_exceptions_can_be_caught_as_base():
    with pytest.raises(SkillsKitError):
        raise InvalidFileSizeError(1.5, 1)


def test_messages_carry_context():
    assert str(InvalidFileFormatError("txt", ["wav", "mp3"])) == "File format 'txt' is not accepted by this skill"
    assert str(InvalidFileSizeError(1.5, 1)) == "File size 1.5 MB is over accepted limit of 1 MB"
    assert InvalidEventError("bad", errors=["source.size"]).errors == ["source.size"]
