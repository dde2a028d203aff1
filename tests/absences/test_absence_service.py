from __future__ import annotations

from datetime import date, datetime

import pytest

from presence.absences.model import AbsenceRecord
from presence.absences.repository import store_absence_repository
from presence.absences.service import AbsenceService
from presence.core.enums import StoreKey
from presence.core.exceptions import NotFoundError, ValidationError
from presence.dates.date_policy import DateSelectionPolicy
from presence.school.model import SchoolConfig, Teacher
from presence.school.repository import StoreConfigRepository
from presence.storage.store import InMemoryStore

NOW = datetime(2024, 3, 14, 9, 0, 0)


class CountingStore(InMemoryStore):
    """Counts writes so tests can assert nothing was persisted."""

    def __init__(self):
        super().__init__()
        self.writes: list[StoreKey] = []

    def set(self, key, value):
        self.writes.append(StoreKey(key))
        super().set(key, value)


def _setup(policy=None):
    store = CountingStore()
    config_repo = StoreConfigRepository(store)
    config_repo.save(
        SchoolConfig(
            teachers=(
                Teacher(id="T1", name="خالد", national_id="1234567890"),
                Teacher(id="T2", name="سعد", national_id="2234567890"),
            )
        )
    )
    counter = iter(range(1, 1000))
    service = AbsenceService(
        store_absence_repository(store),
        config_repo,
        policy=policy or DateSelectionPolicy(),
        clock=lambda: NOW,
        id_factory=lambda: f"a{next(counter)}",
    )
    store.writes.clear()
    return service, store


def test_record_absence_snapshots_teacher_and_dates():
    service, _ = _setup()

    record = service.record_absence("T1", date(2024, 1, 1))

    assert record == AbsenceRecord(
        id="a1",
        teacher_id="T1",
        teacher_name="خالد",
        date=date(2024, 1, 1),
        hijri_date="19 جمادى الآخرة 1445هـ",
        day_name="الإثنين",
        created_at="2024-03-14T09:00:00",
    )


def test_duplicate_absence_is_rejected_before_any_write():
    service, store = _setup()
    service.record_absence("T1", date(2024, 3, 10))
    store.writes.clear()

    with pytest.raises(ValidationError) as exc:
        service.record_absence("T1", date(2024, 3, 10))

    assert "مسبقاً" in str(exc.value)
    assert store.writes == []
    assert len(service.list_absences()) == 1


def test_same_day_different_teachers_is_fine():
    service, _ = _setup()
    service.record_absence("T1", date(2024, 3, 10))
    service.record_absence("T2", date(2024, 3, 10))
    assert len(service.list_absences()) == 2


def test_weekend_and_future_dates_are_rejected():
    service, store = _setup()
    with pytest.raises(ValidationError):
        service.record_absence("T1", date(2024, 3, 9))
    with pytest.raises(ValidationError):
        service.record_absence("T1", date(2024, 3, 20))
    assert store.writes == []


def test_policy_can_allow_weekends():
    service, _ = _setup(policy=DateSelectionPolicy(exclude_weekends=False))
    record = service.record_absence("T1", date(2024, 3, 9))
    assert record.day_name == "السبت"


def test_unknown_or_blank_teacher():
    service, _ = _setup()
    with pytest.raises(NotFoundError):
        service.record_absence("nope", date(2024, 3, 10))
    with pytest.raises(ValidationError):
        service.record_absence("  ", date(2024, 3, 10))


def test_listing_and_ranges():
    service, _ = _setup()
    service.record_absence("T1", date(2024, 3, 5))
    service.record_absence("T1", date(2024, 3, 12))
    service.record_absence("T2", date(2024, 3, 7))
    service.record_absence("T1", date(2024, 3, 10))

    assert [r.date.day for r in service.list_absences()] == [12, 10, 7, 5]
    assert [r.date.day for r in service.list_for_teacher("T1")] == [12, 10, 5]

    ranged = service.list_for_teacher_in_range("T1", date(2024, 3, 5), date(2024, 3, 10))
    assert [r.date.day for r in ranged] == [5, 10]

    with pytest.raises(ValidationError):
        service.list_for_teacher_in_range("T1", date(2024, 3, 10), date(2024, 3, 5))


def test_delete_absence():
    service, _ = _setup()
    record = service.record_absence("T1", date(2024, 3, 10))

    deleted = service.delete_absence(record.id)

    assert deleted.id == record.id
    assert service.list_absences() == []
    with pytest.raises(NotFoundError):
        service.delete_absence(record.id)
    # the day can be recorded again once deleted
    service.record_absence("T1", date(2024, 3, 10))


def test_deleting_teacher_keeps_history():
    service, store = _setup()
    service.record_absence("T1", date(2024, 3, 10))
    config_repo = StoreConfigRepository(store)
    config_repo.save(config_repo.get().with_teachers([]))

    assert [r.teacher_name for r in service.list_absences()] == ["خالد"]
