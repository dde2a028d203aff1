from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .absences.repository import store_absence_repository
from .absences.service import AbsenceService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_LOCALE
from .dates.date_policy import DateSelectionPolicy
from .reports.document import DocumentRenderer
from .reports.service import ReportService
from .school.repository import StoreConfigRepository
from .school.service import SchoolService
from .statistics.service import StatisticsService
from .storage.repository import StoreListRepository
from .storage.store import RecordStore
from .tardiness.repository import store_tardiness_repository
from .tardiness.service import TardinessService
from .users.repository import store_user_repository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    store: RecordStore

    config_repo: StoreConfigRepository
    absences_repo: StoreListRepository
    tardiness_repo: StoreListRepository
    users_repo: StoreListRepository

    date_policy: DateSelectionPolicy

    school_service: SchoolService
    absence_service: AbsenceService
    tardiness_service: TardinessService
    statistics_service: StatisticsService
    report_service: ReportService
    auth_service: AuthService
    user_service: UserService


def build_container(
    *,
    store: RecordStore,
    locale: str = DEFAULT_LOCALE,
    date_policy: DateSelectionPolicy | None = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    config_repo = StoreConfigRepository(store)
    absences_repo = store_absence_repository(store)
    tardiness_repo = store_tardiness_repository(store)
    users_repo = store_user_repository(store)

    date_policy = date_policy or DateSelectionPolicy()

    school_service = SchoolService(config_repo)
    absence_service = AbsenceService(absences_repo, config_repo, policy=date_policy, clock=clock, locale=locale)
    tardiness_service = TardinessService(tardiness_repo, config_repo, policy=date_policy, clock=clock, locale=locale)
    statistics_service = StatisticsService(absences_repo, tardiness_repo, config_repo, locale=locale)
    report_service = ReportService(
        absences_repo,
        tardiness_repo,
        config_repo,
        renderer=DocumentRenderer(lang=locale),
        clock=clock,
        locale=locale,
    )
    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo, clock=clock)

    return Container(
        store=store,
        config_repo=config_repo,
        absences_repo=absences_repo,
        tardiness_repo=tardiness_repo,
        users_repo=users_repo,
        date_policy=date_policy,
        school_service=school_service,
        absence_service=absence_service,
        tardiness_service=tardiness_service,
        statistics_service=statistics_service,
        report_service=report_service,
        auth_service=auth_service,
        user_service=user_service,
    )
