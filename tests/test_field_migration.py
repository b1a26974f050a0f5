"""
Tests for collection-wide field migrations.
"""

import pytest

from mumpa_admin.persistence import FileDocumentStore
from mumpa_admin.services.field_migration import append_suffix, backfill_missing_field, rename_field


class FlakyStore(FileDocumentStore):
    """Fails updates for selected ids."""

    def __init__(self, data_dir, failing: set[str]) -> None:
        super().__init__(data_dir)
        self.failing = failing

    def update(self, collection, doc_id, data):
        if doc_id in self.failing:
            raise RuntimeError("write rejected")
        super().update(collection, doc_id, data)


class TestBackfill:

    def test_sets_only_missing(self, store):
        store.set("categories", "a", {"name": "Salud"})
        store.set("categories", "b", {"name": "Juegos", "isActive": False})
        report = backfill_missing_field(store, "categories", "isActive", True)
        assert (report.updated, report.skipped, report.errors) == (1, 1, 0)
        assert store.get("categories", "a")["isActive"] is True
        assert store.get("categories", "b")["isActive"] is False

    def test_errors_are_counted_and_run_continues(self, tmp_path):
        store = FlakyStore(tmp_path / "flaky", failing={"a"})
        store.set("categories", "a", {"name": "Salud"})
        store.set("categories", "b", {"name": "Juegos"})
        report = backfill_missing_field(store, "categories", "isActive", True)
        assert (report.updated, report.errors) == (1, 1)
        assert store.get("categories", "b")["isActive"] is True


class TestRename:

    def test_moves_value_and_removes_old_field(self, store):
        store.set("milestones", "m1", {"ageMonths": 24, "years": 2})
        store.set("milestones", "m2", {"ageMonths": 6})
        report = rename_field(store, "milestones", "years", "ageYears")
        assert (report.updated, report.skipped) == (1, 1)
        assert store.get("milestones", "m1") == {"ageMonths": 24, "ageYears": 2}

    def test_existing_target_is_kept_unless_overwrite(self, store):
        store.set("milestones", "m1", {"years": 2, "ageYears": 3})
        assert rename_field(store, "milestones", "years", "ageYears").skipped == 1
        assert store.get("milestones", "m1") == {"years": 2, "ageYears": 3}
        assert rename_field(store, "milestones", "years", "ageYears", overwrite=True).updated == 1
        assert store.get("milestones", "m1") == {"ageYears": 2}

    def test_same_name_rejected(self, store):
        with pytest.raises(ValueError):
            rename_field(store, "milestones", "years", "years")


class TestAppendSuffix:

    def test_appends_once(self, store, now):
        store.set("users", "a", {"username": "ana"})
        store.set("users", "b", {"username": "luis "})
        store.set("users", "c", {"username": None})
        report = append_suffix(store, "users", "username", " ", now)
        assert (report.updated, report.skipped) == (1, 2)
        assert store.get("users", "a")["username"] == "ana "
        assert store.get("users", "a")["updatedAt"] == now.isoformat()

        assert append_suffix(store, "users", "username", " ", now).updated == 0

    def test_empty_suffix_rejected(self, store):
        with pytest.raises(ValueError):
            append_suffix(store, "users", "username", "")
