"""Tests for the status message catalog."""

import pytest

from skillskit.files.exceptions import FileProcessingError, InvalidFileSizeError
from skillskit.metadata.status import (
    STATUS_MESSAGES,
    ErrorKind,
    get_error_message,
    get_status_message,
    status_code,
)


def test_every_kind_has_a_message():
    assert set(STATUS_MESSAGES) == set(ErrorKind)


def test_messages():
    assert get_status_message(ErrorKind.FILE_PROCESSING_ERROR) == (
        "We're sorry, something went wrong with processing the file."
    )
    assert get_status_message(ErrorKind.INVALID_FILE_SIZE) == (
        "We're sorry, something went wrong with processing the file. "
        "This file size is currently not supported."
    )
    assert get_status_message(ErrorKind.INVALID_FILE_FORMAT) == (
        "We're sorry, something went wrong with processing the file. Invalid information received."
    )
    assert get_status_message(ErrorKind.NO_INFO_FOUND) == "We're sorry, no skills information was found."
    assert get_status_message(ErrorKind.BILLING_ERROR) == (
        "Something went wrong with running this skill or fetching its data."
    )


def test_lookup_by_name():
    assert get_status_message("invalid_event") == STATUS_MESSAGES[ErrorKind.INVALID_EVENT]


@pytest.mark.parametrize("kind", ["NOT_A_KIND", "", None, 42])
def test_unknown_kinds_fall_back(kind):
    assert get_status_message(kind) == STATUS_MESSAGES[ErrorKind.UNKNOWN]


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        STATUS_MESSAGES[ErrorKind.UNKNOWN] = "changed"


def test_get_error_message():
    assert get_error_message(InvalidFileSizeError(2, 1)) == STATUS_MESSAGES[ErrorKind.INVALID_FILE_SIZE]
    assert get_error_message(FileProcessingError("boom")) == STATUS_MESSAGES[ErrorKind.FILE_PROCESSING_ERROR]
    assert get_error_message(ValueError("other")) == STATUS_MESSAGES[ErrorKind.UNKNOWN]


def test_status_code():
    assert status_code(ErrorKind.INVALID_FILE_SIZE) == "skills_invalid_file_size"
    assert status_code("nope") == "skills_unknown"
