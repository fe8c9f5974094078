"""Pytest configuration and shared fixtures."""

import copy
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import pytest

from skillskit.core.logging import CloudLoggingFormatter
from skillskit.files.client import RepresentationInfo

BASE_EVENT: Dict[str, Any] = {
    "type": "skill_invocation",
    "id": "request-42",
    "skill": {"type": "skill", "id": "skill-7", "name": "transcriber"},
    "source": {"type": "file", "id": "123", "name": "meeting.mp3", "size": 2048},
    "token": {
        "read": {"access_token": "abc", "expires_in": 3600},
        "write": {"access_token": "xyz", "expires_in": 3600},
    },
    "event": {"type": "skill_invocation", "event_type": "FILE.UPLOADED"},
}


@pytest.fixture
def make_event():
    """Build a skill event body, overriding source fields as needed."""

    def _make(**source_overrides: Any) -> Dict[str, Any]:
        event = copy.deepcopy(BASE_EVENT)
        event["source"].update(source_overrides)
        return event

    return _make


class FakeBoxClient:
    """In-memory stand-in for BoxClient that records its calls."""

    def __init__(
        self,
        content: bytes = b"",
        location: Optional[str] = "https://dl.boxcloud.com/representation",
        basic_content: bytes = b"",
        error: Optional[Exception] = None,
    ):
        self.content = content
        self.location = location
        self.basic_content = basic_content
        self.error = error
        self.calls: List[Tuple[Any, ...]] = []

    async def get_read_stream(self, file_id, timeout=None):
        self.calls.append(("get_read_stream", file_id, timeout))
        if self.error:
            raise self.error
        for i in range(0, len(self.content), 4):
            yield self.content[i:i + 4]

    async def get_representation_info(self, file_id, representation, timeout=None):
        self.calls.append(("get_representation_info", file_id, representation, timeout))
        if self.error:
            raise self.error
        state = "success" if self.location else "pending"
        return RepresentationInfo(representation=representation, state=state, location=self.location)

    async def get_url_stream(self, url, timeout=None):
        self.calls.append(("get_url_stream", url, timeout))
        yield self.basic_content

    async def apply_metadata(self, file_id, template, payload, timeout=None):
        self.calls.append(("apply_metadata", file_id, template, payload, timeout))
        if self.error:
            raise self.error
        return {"$template": template, **payload}


@pytest.fixture
def fake_client():
    return FakeBoxClient()


@pytest.fixture
def box_client_factory():
    """Factory for FakeBoxClient with custom content or errors."""
    return FakeBoxClient


class _JsonCaptureHandler(logging.Handler):
    """Formats records as they are emitted, while the request context is live."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.setFormatter(CloudLoggingFormatter())
        self.entries: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.entries.append(json.loads(self.format(record)))


@pytest.fixture
def json_logs():
    """Structured log entries emitted by skillskit loggers during the test."""
    package_logger = logging.getLogger("skillskit")
    handler = _JsonCaptureHandler()
    previous_level = package_logger.level
    package_logger.setLevel(logging.DEBUG)
    package_logger.addHandler(handler)
    try:
        yield handler.entries
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)
