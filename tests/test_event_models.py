"""Tests for skill event parsing and FileContext construction."""

import json

import pytest
from pydantic import ValidationError

from skillskit.files.classifier import FileType
from skillskit.files.exceptions import InvalidEventError
from skillskit.files.models import FileContext, SkillEvent


def test_parse_event(make_event):
    """Test that a complete event parses into nested models."""
    event = SkillEvent.parse_event(make_event())

    assert event.id == "request-42"
    assert event.skill.id == "skill-7"
    assert event.source.id == "123"
    assert event.source.name == "meeting.mp3"
    assert event.source.size == 2048
    assert event.token.read.access_token == "abc"
    assert event.token.write.access_token == "xyz"


def test_parse_event_from_json_text(make_event):
    event = SkillEvent.parse_event(json.dumps(make_event()))
    assert event.source.id == "123"


def test_parse_event_accepts_numeric_size_string(make_event):
    event = SkillEvent.parse_event(make_event(size="4096"))
    assert event.source.size == 4096


def test_missing_size_is_rejected(make_event):
    """Test that an event without source.size fails instead of defaulting."""
    body = make_event()
    del body["source"]["size"]

    with pytest.raises(InvalidEventError) as exc_info:
        SkillEvent.parse_event(body)

    assert "source.size" in exc_info.value.errors


def test_missing_write_token_is_rejected(make_event):
    body = make_event()
    del body["token"]["write"]

    with pytest.raises(InvalidEventError, match="token.write"):
        SkillEvent.parse_event(body)


@pytest.mark.parametrize("size", [-1, "big", None, True, False])
def test_bad_size_is_rejected(make_event, size):
    with pytest.raises(InvalidEventError):
        SkillEvent.parse_event(make_event(size=size))


def test_wrong_shape_is_rejected(make_event):
    body = make_event()
    body["skill"] = "skill-7"

    with pytest.raises(InvalidEventError, match="skill"):
        SkillEvent.parse_event(body)


@pytest.mark.parametrize("body", [[], "not json", b"[1, 2]", 42])
def test_non_object_body_is_rejected(body):
    with pytest.raises(InvalidEventError):
        SkillEvent.parse_event(body)


def test_file_context_from_event(make_event):
    """Test that the classification is derived at construction."""
    context = FileContext.from_event(SkillEvent.parse_event(make_event(name="Clip.MOV")))

    assert context.request_id == "request-42"
    assert context.skill_id == "skill-7"
    assert context.file_id == "123"
    assert context.file_format == "mov"
    assert context.file_type == FileType.VIDEO
    assert context.classification.type == FileType.VIDEO
    assert context.file_read_token == "abc"
    assert context.file_write_token == "xyz"


def test_file_context_is_immutable(make_event):
    context = FileContext.from_event(SkillEvent.parse_event(make_event()))

    with pytest.raises(ValidationError):
        context.file_size = 1


def test_file_context_repr_hides_tokens(make_event):
    context = FileContext.from_event(SkillEvent.parse_event(make_event()))

    assert "abc" not in repr(context)
    assert "xyz" not in repr(context)
