"""Tests for change event parsing."""

import pytest

from project_notifier.domain.events import CreatedEvent, UpdatedEvent, parse_change_event


def test_created_event():
    event = parse_change_event({"type": "created", "record_id": "doc-1", "after": {"email": "a@x.com"}})

    assert isinstance(event, CreatedEvent)
    assert event.trigger == "created"
    assert event.record_id == "doc-1"
    assert event.after == {"email": "a@x.com"}


def test_updated_event():
    event = parse_change_event(
        {"type": "updated", "record_id": "doc-1", "before": {"status": "a"}, "after": {"status": "b"}}
    )

    assert isinstance(event, UpdatedEvent)
    assert event.trigger == "updated"
    assert event.before == {"status": "a"}
    assert event.after == {"status": "b"}


def test_type_is_case_insensitive_and_id_alias_accepted():
    event = parse_change_event({"type": " Created ", "id": "doc-2", "after": {}})

    assert isinstance(event, CreatedEvent)
    assert event.record_id == "doc-2"


def test_non_object_snapshots_become_none():
    event = parse_change_event({"type": "updated", "record_id": "doc-1", "before": "oops", "after": [1, 2]})

    assert event.before is None
    assert event.after is None


def test_missing_record_id_is_empty_string():
    assert parse_change_event({"type": "created", "after": {}}).record_id == ""


@pytest.mark.parametrize("document", [{"type": "deleted"}, {}, {"type": None}])
def test_unknown_type_is_rejected(document):
    with pytest.raises(ValueError, match="Unknown change event type"):
        parse_change_event(document)


def test_document_must_be_an_object():
    with pytest.raises(ValueError, match="JSON object"):
        parse_change_event(["created"])
