"""Tests for the question domain service."""

import re

import pytest

from storage_api.exceptions import (
    BadRequestError,
    InvalidIdentifierError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
    StorageError,
)
from storage_api.models import SUMMARY_FIELDS

TIMESTAMP_PATTERN = r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z"


@pytest.fixture
def clock(monkeypatch):
    """
    Replace the service clock with a controllable one.

    Returns:
        Dict whose 'now' value is returned as the current timestamp
    """
    state = {"now": "2025-01-01T00:00:00.000Z"}
    monkeypatch.setattr(
        "storage_api.services.question_service.get_current_timestamp",
        lambda: state["now"],
    )
    return state


class TestCreate:
    """Test question creation."""

    def test_round_trip_adds_only_id_and_timestamps(self, question_service, sample_question):
        created = question_service.create(dict(sample_question))
        fetched = question_service.get_by_id(created["_id"])

        assert set(fetched) == set(sample_question) | {"_id", "createdAt", "updatedAt"}
        for key, value in sample_question.items():
            assert fetched[key] == value
        assert re.fullmatch(TIMESTAMP_PATTERN, fetched["createdAt"])
        assert fetched["createdAt"] == fetched["updatedAt"]

    def test_generated_id_is_24_hex(self, question_service):
        created = question_service.create({"title": "Untitled"})
        assert re.fullmatch(r"[0-9a-f]{24}", created["_id"])

    def test_supplied_id_and_created_at_are_kept(self, question_service, clock):
        created = question_service.create({
            "_id": "65a1f0c2e4b0a1b2c3d4e5f6",
            "createdAt": "2023-06-01T10:00:00.000Z",
        })
        assert created["_id"] == "65a1f0c2e4b0a1b2c3d4e5f6"
        assert created["createdAt"] == "2023-06-01T10:00:00.000Z"
        assert created["updatedAt"] == "2025-01-01T00:00:00.000Z"

    def test_duplicate_id_fails_without_touching_first(self, question_service):
        question_service.create({"_id": "q1", "title": "First"})

        with pytest.raises(RecordAlreadyExistsError):
            question_service.create({"_id": "q1", "title": "Second"})

        assert question_service.get_by_id("q1")["title"] == "First"

    def test_extra_fields_round_trip(self, question_service):
        created = question_service.create({
            "_id": "q1",
            "editorial": {"approach": "hash map", "complexity": "O(n)"},
            "starterCode": {"python": "def two_sum(nums, target):\n    pass"},
        })
        fetched = question_service.get_by_id("q1")
        assert fetched["editorial"] == {"approach": "hash map", "complexity": "O(n)"}
        assert fetched["starterCode"] == created["starterCode"]

    def test_explicit_null_is_preserved(self, question_service):
        question_service.create({"_id": "q1", "difficulty": None})
        assert question_service.get_by_id("q1")["difficulty"] is None

    def test_descriptive_fields_are_stored_as_given(self, question_service):
        question_service.create({
            "_id": "n1",
            "title": 42,
            "difficulty": 3,
            "tags": "array",
            "companies": [{"name": "Google"}, 7],
        })

        stored = question_service.get_by_id("n1")

        assert stored["title"] == 42
        assert stored["difficulty"] == 3
        assert stored["tags"] == "array"
        assert stored["companies"] == [{"name": "Google"}, 7]

    def test_non_string_id_and_non_list_test_cases_are_rejected(self, question_service, record_repo):
        with pytest.raises(BadRequestError):
            question_service.create({"_id": 12, "title": "T"})
        with pytest.raises(BadRequestError):
            question_service.create({"testCases": "not-a-list"})
        assert record_repo.count() == 0

    def test_unsafe_id_is_rejected(self, question_service, record_repo):
        with pytest.raises(InvalidIdentifierError):
            question_service.create({"_id": "../../escape"})
        assert record_repo.count() == 0

    def test_non_object_is_rejected(self, question_service):
        with pytest.raises(BadRequestError):
            question_service.create(["not", "an", "object"])


class TestUpdate:
    """Test merge-on-update semantics."""

    def test_update_changes_only_patch_and_updated_at(self, question_service, sample_question, clock):
        created = question_service.create(dict(sample_question, _id="q1"))

        clock["now"] = "2025-02-01T00:00:00.000Z"
        updated = question_service.update("q1", {"title": "X"})

        expected = dict(created, title="X", updatedAt="2025-02-01T00:00:00.000Z")
        assert updated == expected
        assert question_service.get_by_id("q1") == expected

    def test_update_ignores_identity_and_created_at(self, question_service, clock):
        question_service.create({"_id": "q1", "title": "Old"})

        clock["now"] = "2025-02-01T00:00:00.000Z"
        updated = question_service.update("q1", {
            "_id": "hijack",
            "createdAt": "1999-01-01T00:00:00.000Z",
            "title": "New",
        })

        assert updated["_id"] == "q1"
        assert updated["createdAt"] == "2025-01-01T00:00:00.000Z"
        assert updated["updatedAt"] == "2025-02-01T00:00:00.000Z"
        with pytest.raises(RecordNotFoundError):
            question_service.get_by_id("hijack")

    def test_update_missing_raises_not_found(self, question_service):
        with pytest.raises(RecordNotFoundError):
            question_service.update("missing", {"title": "X"})

    def test_patch_with_non_list_test_cases_is_rejected(self, question_service):
        question_service.create({"_id": "q1", "title": "Old"})
        with pytest.raises(BadRequestError):
            question_service.update("q1", {"testCases": {"input": "1"}})
        assert question_service.get_by_id("q1")["title"] == "Old"


class TestQueries:
    """Test listing, slug lookup and test case projection."""

    def test_summaries_never_include_test_cases(self, question_service, sample_question):
        question_service.create(dict(sample_question, _id="q1"))

        summaries = question_service.list_summaries()

        assert len(summaries) == 1
        assert "testCases" not in summaries[0]
        assert "description" not in summaries[0]
        assert tuple(summaries[0]) == SUMMARY_FIELDS
        assert summaries[0]["title"] == "Two Sum"

    def test_summary_fills_missing_metadata_with_none(self, question_service):
        question_service.create({"_id": "q1"})
        summary = question_service.list_summaries()[0]
        assert summary["title"] is None
        assert summary["tags"] is None

    def test_get_by_slug(self, question_service):
        question_service.create({"_id": "r1", "slug": "a", "title": "R1"})
        question_service.create({"_id": "r2", "slug": "b", "title": "R2"})

        assert question_service.get_by_slug("b")["_id"] == "r2"
        with pytest.raises(RecordNotFoundError):
            question_service.get_by_slug("missing")

    def test_duplicate_slugs_first_match_wins(self, question_service):
        question_service.create({"_id": "a-first", "slug": "dup"})
        question_service.create({"_id": "b-second", "slug": "dup"})
        assert question_service.get_by_slug("dup")["_id"] == "a-first"

    def test_slug_lookup_survives_corrupt_file(self, question_service, record_repo):
        (record_repo.directory / "0-broken.json").write_text("{", encoding="utf-8")
        question_service.create({"_id": "q1", "slug": "two-sum"})
        assert question_service.get_by_slug("two-sum")["_id"] == "q1"

    def test_get_test_cases(self, question_service, sample_question):
        question_service.create(dict(sample_question, _id="q1"))

        data = question_service.get_test_cases("q1")

        assert data == {
            "testCases": sample_question["testCases"],
            "timeLimit": 2000,
            "memoryLimit": 256,
        }

    def test_get_test_cases_defaults_to_empty_list(self, question_service):
        question_service.create({"_id": "q1"})
        assert question_service.get_test_cases("q1") == {
            "testCases": [],
            "timeLimit": None,
            "memoryLimit": None,
        }

    def test_delete_then_get_raises_not_found(self, question_service):
        question_service.create({"_id": "q1"})
        question_service.delete("q1")
        with pytest.raises(RecordNotFoundError):
            question_service.get_by_id("q1")
        assert question_service.count() == 0


class TestBulkImport:
    """Test bulk import classification."""

    def test_importing_twice_is_idempotent(self, question_service):
        records = [{"_id": f"q{n}", "title": f"Question {n}"} for n in range(5)]

        first = question_service.bulk_import([dict(r) for r in records])
        second = question_service.bulk_import([dict(r) for r in records])

        assert (first.created, first.skipped, first.failed) == (5, 0, 0)
        assert (second.created, second.skipped, second.failed) == (0, 5, 0)

    def test_existing_records_are_not_overwritten(self, question_service):
        question_service.create({"_id": "q1", "title": "Original"})
        question_service.bulk_import([{"_id": "q1", "title": "Imported"}])
        assert question_service.get_by_id("q1")["title"] == "Original"

    def test_missing_id_is_skipped(self, question_service):
        result = question_service.bulk_import([{"title": "No id"}, {"_id": "", "title": "Empty"}])
        assert (result.created, result.skipped, result.failed) == (0, 2, 0)
        assert question_service.count() == 0

    def test_stamps_updated_at_only(self, question_service, clock):
        question_service.bulk_import([{"_id": "q1", "title": "T"}])
        stored = question_service.get_by_id("q1")
        assert stored["updatedAt"] == "2025-01-01T00:00:00.000Z"
        assert "createdAt" not in stored

    def test_malformed_records_are_failed_not_skipped(self, question_service):
        result = question_service.bulk_import([
            "not an object",
            {"_id": "q1", "testCases": "not-a-list"},
            {"_id": "../escape"},
            {"_id": "ok"},
        ])

        assert (result.created, result.skipped, result.failed) == (1, 0, 3)
        assert [e["index"] for e in result.errors] == [0, 1, 2]
        assert result.errors[2]["_id"] == "../escape"

    def test_write_errors_are_failed_not_skipped(self, question_service, record_repo, monkeypatch):
        def broken_create(record_id, data):
            raise StorageError("disk full")

        monkeypatch.setattr(record_repo, "create", broken_create)

        result = question_service.bulk_import([{"_id": "q1"}, {"_id": "q2"}])

        assert (result.created, result.skipped, result.failed) == (0, 0, 2)
        assert result.errors[0] == {"index": 0, "_id": "q1", "error": "disk full"}

    def test_rejects_non_sequence(self, question_service):
        with pytest.raises(BadRequestError):
            question_service.bulk_import({"_id": "q1"})

    def test_records_with_untyped_metadata_are_imported(self, question_service):
        result = question_service.bulk_import([
            {"_id": "legacy", "difficulty": 2, "tags": ["dp", 7]},
        ])

        assert (result.created, result.skipped, result.failed) == (1, 0, 0)
        assert question_service.get_by_id("legacy")["tags"] == ["dp", 7]
