"""
Tests for children listing with projected ages.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from mumpa_admin.services import ChildrenService
from mumpa_admin.services.children_service import COLLECTION, record_from_document


@pytest.fixture
def children(store, now):
    store.set(COLLECTION, "born1", {
        "parentId": "p1",
        "name": "Sofia",
        "isUnborn": False,
        "ageInMonths": 11,
        "createdAt": (now - timedelta(days=61)).isoformat(),
    })
    store.set(COLLECTION, "unborn1", {
        "parentId": "p1",
        "name": "Bebe",
        "isUnborn": True,
        "gestationWeeks": 40,
        "createdAt": (now - timedelta(days=21)).isoformat(),
    })
    store.set(COLLECTION, "broken", {"parentId": "p1", "name": "Sin fecha", "ageInMonths": 2})
    store.set(COLLECTION, "far_future", {"parentId": "p1", "ageInMonths": 2, "createdAt": 1e20})
    store.set(COLLECTION, "bad_mapping", {"parentId": "p1", "ageInMonths": 2, "createdAt": {"_seconds": "abc"}})
    store.set(COLLECTION, "other", {
        "parentId": "p2",
        "ageInMonths": 1,
        "createdAt": now.isoformat(),
    })
    return ChildrenService(store)


class TestRecordFromDocument:

    def test_born(self, now):
        record = record_from_document({"ageInMonths": 4, "createdAt": now})
        assert record.kind == "born"
        assert record.age_in_months == 4

    def test_unborn(self, now):
        record = record_from_document({"isUnborn": True, "gestationWeeks": 12, "createdAt": now})
        assert record.kind == "unborn"
        assert record.gestation_weeks == 12

    def test_missing_age_rejected(self, now):
        with pytest.raises(ValidationError):
            record_from_document({"createdAt": now})


class TestListChildren:

    def test_only_parents_children_newest_first(self, children, now):
        result = children.list_children("p1", now)
        assert [c["id"] for c in result] == ["unborn1", "born1"]

    def test_born_fields(self, children, now):
        born = children.list_children("p1", now)[1]
        assert born["name"] == "Sofia"
        assert born["ageInMonths"] == 11
        assert born["registeredAgeInMonths"] == 11
        assert born["currentAgeInMonths"] == 13
        assert born["currentGestationWeeks"] is None
        assert born["daysSinceCreation"] == 61
        assert "isOverdue" not in born

    def test_unborn_fields(self, children, now):
        unborn = children.list_children("p1", now)[0]
        assert unborn["registeredGestationWeeks"] == 40
        assert unborn["currentGestationWeeks"] == 42
        assert unborn["currentAgeInMonths"] is None
        assert unborn["isOverdue"] is True
        assert unborn["daysSinceCreation"] == 21

    def test_stored_document_is_not_modified(self, children, store, now):
        children.list_children("p1", now)
        assert "currentAgeInMonths" not in store.get(COLLECTION, "born1")

    def test_unreadable_timestamps_are_skipped(self, children, now):
        ids = {c["id"] for c in children.list_children("p1", now)}
        assert not ids & {"broken", "far_future", "bad_mapping"}

    def test_unknown_parent(self, children, now):
        assert children.list_children("nobody", now) == []
