from __future__ import annotations

from datetime import date

from presence.absences.model import AbsenceRecord
from presence.absences.repository import store_absence_repository
from presence.core.enums import StoreKey
from presence.school.model import SchoolConfig
from presence.school.repository import StoreConfigRepository
from presence.storage.store import InMemoryStore


def _record(rid: str) -> AbsenceRecord:
    return AbsenceRecord(rid, "T1", "خالد", date(2024, 3, 10), "29 شعبان 1445هـ", "الأحد", "2024-03-14T09:00:00")


def test_append_and_remove():
    store = InMemoryStore()
    repo = store_absence_repository(store)

    repo.append(_record("1"))
    repo.append(_record("2"))
    assert [r.id for r in repo.list()] == ["1", "2"]

    assert repo.remove_by_id("1") is True
    assert repo.remove_by_id("1") is False
    assert [r.id for r in repo.list()] == ["2"]


def test_records_are_stored_as_camel_case_dicts():
    store = InMemoryStore()
    store_absence_repository(store).append(_record("1"))

    row = store.get(StoreKey.ABSENCES)[0]
    assert row["teacherId"] == "T1"
    assert row["date"] == "2024-03-10"
    assert row["hijriDate"] == "29 شعبان 1445هـ"


def test_store_hands_out_copies():
    store = InMemoryStore({"absences": []})
    value = store.get(StoreKey.ABSENCES)
    value.append({"id": "x"})
    assert store.get(StoreKey.ABSENCES) == []


def test_replace_all():
    repo = store_absence_repository(InMemoryStore())
    repo.append(_record("1"))
    repo.replace_all([_record("9")])
    assert [r.id for r in repo.list()] == ["9"]


def test_config_round_trip_through_store():
    store = InMemoryStore()
    repo = StoreConfigRepository(store)
    assert repo.get() == SchoolConfig()

    repo.save(SchoolConfig(school_name="مدرسة النور"))
    assert store.get(StoreKey.CONFIG)["schoolName"] == "مدرسة النور"
    assert repo.get().school_name == "مدرسة النور"
