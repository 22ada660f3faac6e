"""Unit tests for payload normalization."""

from itertools import combinations

import pytest

from project_notifier.domain.models import PLACEHOLDER, NotificationPayload
from project_notifier.extraction.fields import (
    AbsentFiles,
    ListOfFileObjects,
    ListOfNames,
    SingleName,
)
from project_notifier.normalization import service as normalization_service
from project_notifier.normalization.service import (
    coerce_bool,
    file_name_from_object,
    file_name_from_string,
    format_file_list,
    language_pair,
    normalize,
)

FULL_SNAPSHOT = {
    "projectId": "RT-7",
    "fullname": "Jane Doe",
    "email": "jane@x.com",
    "sourceLang": "EN",
    "targetLang": "FR",
    "notes": "Urgent legal",
    "files": ["a/b/report.pdf"],
    "rush": True,
    "status": "in_progress",
}

DISPLAY_FIELDS = (
    "project_id",
    "client_name",
    "language_pair",
    "file_list",
    "notes",
    "new_status",
)


def _assert_display_fields_filled(payload: NotificationPayload):
    for field in DISPLAY_FIELDS:
        value = getattr(payload, field)
        assert isinstance(value, str) and value.strip(), field


class TestLanguagePair:
    def test_source_and_target(self):
        assert language_pair({"sourceLang": "EN", "targetLang": "FR"}) == "EN → FR"

    def test_missing_target(self):
        assert language_pair({"sourceLang": "EN"}) == "EN → —"

    def test_missing_both(self):
        assert language_pair({}) == "— → —"

    def test_legacy_field_names(self):
        assert language_pair({"sourceLanguage": "DE", "targetLanguage": "IT"}) == "DE → IT"

    def test_primary_field_name_wins(self):
        snapshot = {"sourceLang": "EN", "sourceLanguage": "DE", "targetLang": "FR"}
        assert language_pair(snapshot) == "EN → FR"

    def test_list_values_are_joined(self):
        snapshot = {"sourceLang": "EN", "targetLang": ["FR", "ES"]}
        assert language_pair(snapshot) == "EN → FR, ES"


class TestFileNames:
    def test_path_keeps_last_segment(self):
        assert format_file_list(ListOfNames(("a/b/report.pdf",))) == "report.pdf"

    def test_object_name(self):
        assert format_file_list(ListOfFileObjects(({"name": "x.docx"},))) == "x.docx"

    def test_empty_list_renders_placeholder(self):
        assert format_file_list(ListOfNames(())) == PLACEHOLDER

    def test_absent_renders_placeholder(self):
        assert format_file_list(AbsentFiles()) == PLACEHOLDER

    def test_single_bare_string_is_one_element_list(self):
        assert format_file_list(SingleName("brief.pdf")) == "brief.pdf"

    def test_names_are_comma_joined(self):
        assert format_file_list(ListOfNames(("a.pdf", "dir/b.docx"))) == "a.pdf, b.docx"

    def test_url_drops_query_string(self):
        url = "https://storage.example.com/v0/b/bucket/o/uploads/brief.pdf?alt=media&token=abc"
        assert file_name_from_string(url) == "brief.pdf"

    def test_trailing_slash(self):
        assert file_name_from_string("uploads/brief.pdf/") == "brief.pdf"

    def test_blank_string(self):
        assert file_name_from_string("   ") == ""

    def test_object_preference_order(self):
        assert file_name_from_object({"name": "n.pdf", "fileName": "f.pdf"}) == "n.pdf"
        assert file_name_from_object({"fileName": "f.pdf", "path": "p/q.pdf"}) == "f.pdf"
        assert file_name_from_object({"path": "p/q.pdf", "url": "https://x/u.pdf"}) == "q.pdf"
        assert file_name_from_object({"url": "https://x/y/u.pdf?x=1"}) == "u.pdf"
        assert file_name_from_object({"size": 10}) == "file"

    def test_objects_with_blank_names_fall_through(self):
        assert file_name_from_object({"name": "", "path": "a/b.txt"}) == "b.txt"


@pytest.mark.parametrize(
    "value,expected",
    [
        (True, True),
        (False, False),
        (None, False),
        (1, True),
        (0, False),
        ("true", True),
        ("YES", True),
        ("false", False),
        ("no", False),
        ("", False),
    ],
)
def test_coerce_bool(value, expected):
    assert coerce_bool(value) is expected


class TestNormalize:
    def test_full_snapshot(self):
        payload = normalize(FULL_SNAPSHOT, record_id="doc-1")

        assert payload.project_id == "RT-7"
        assert payload.client_name == "Jane Doe"
        assert payload.client_email == "jane@x.com"
        assert payload.language_pair == "EN → FR"
        assert payload.file_list == "report.pdf"
        assert payload.rush is True
        assert payload.notes == "Urgent legal"
        assert payload.new_status == "in_progress"

    def test_record_id_used_when_project_id_missing(self):
        payload = normalize({"fullname": "Jane"}, record_id="doc-1")
        assert payload.project_id == "doc-1"

    def test_empty_snapshot_is_placeholder_filled(self):
        payload = normalize({})

        _assert_display_fields_filled(payload)
        assert payload.project_id == PLACEHOLDER
        assert payload.client_email is None
        assert payload.rush is False
        assert payload.file_list == PLACEHOLDER

    def test_none_snapshot_does_not_raise(self):
        payload = normalize(None)
        _assert_display_fields_filled(payload)

    def test_non_mapping_snapshot_does_not_raise(self):
        payload = normalize(["not", "a", "record"])
        _assert_display_fields_filled(payload)

    @pytest.mark.parametrize("size", [1, 2, 3])
    def test_any_subset_of_missing_fields(self, size):
        for missing in combinations(FULL_SNAPSHOT.keys(), size):
            snapshot = {k: v for k, v in FULL_SNAPSHOT.items() if k not in missing}
            _assert_display_fields_filled(normalize(snapshot))

    def test_malformed_nested_values(self):
        snapshot = {
            "fullname": {"first": "Jane"},
            "email": ["jane@x.com"],
            "sourceLang": {"code": "EN"},
            "files": [[], {"name": None}, 42],
            "notes": None,
            "status": None,
        }
        payload = normalize(snapshot)

        _assert_display_fields_filled(payload)
        assert payload.client_email is None
        assert payload.client_name == PLACEHOLDER

    def test_extraction_error_falls_back_to_placeholder(self, monkeypatch):
        def broken(_files):
            raise RuntimeError("corrupt file entry")

        monkeypatch.setattr(normalization_service, "format_file_list", broken)

        payload = normalize(FULL_SNAPSHOT)

        assert payload.file_list == PLACEHOLDER
        assert payload.language_pair == "EN → FR"

    def test_payload_is_immutable(self):
        payload = normalize(FULL_SNAPSHOT)
        with pytest.raises(Exception):
            payload.rush = False
