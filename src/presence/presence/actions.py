"""Action layer: every user-initiated operation returns an ActionResult.

Domain errors become {success: False, error: <message>}; anything else is
logged and reported with a generic message. Nothing is raised to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Iterable, Optional, Sequence, Union

from .common.datetime_utils import parse_iso_date
from .core.enums import Role
from .core.exceptions import DomainError, StoreError, ValidationError
from .school.model import SchoolConfig
from .users.model import User

logger = logging.getLogger(__name__)

DateLike = Union[date, str]


@dataclass(frozen=True)
class ActionResult:
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    data: Any = None

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "ActionResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, error: str) -> "ActionResult":
        return cls(success=False, error=error)

    def to_dict(self) -> dict:
        out: dict = {"success": self.success}
        if self.message:
            out["message"] = self.message
        if self.error:
            out["error"] = self.error
        return out


def _as_date(value: DateLike) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip()[:10])
    except ValueError:
        raise ValidationError("التاريخ غير صالح") from None


class PresenceActions:
    def __init__(self, container):
        self._c = container

    def _run(
        self,
        failure: str,
        fn: Callable[[], Any],
        *,
        message: Optional[Callable[[Any], str]] = None,
    ) -> ActionResult:
        try:
            data = fn()
        except DomainError as e:
            return ActionResult.fail(str(e))
        except StoreError:
            logger.exception("Store failure: %s", failure)
            return ActionResult.fail(failure)
        except Exception:
            logger.exception("Unexpected failure: %s", failure)
            return ActionResult.fail(failure)
        return ActionResult.ok(data, message(data) if message else None)

    # ---- users ----

    def login(self, email: str, password: str) -> ActionResult:
        return self._run("حدث خطأ أثناء تسجيل الدخول", lambda: self._c.auth_service.authenticate(email, password))

    def list_users(self, current_user: User) -> ActionResult:
        return self._run("حدث خطأ أثناء تحميل المستخدمين", lambda: self._c.user_service.list_users(current_role=current_user.role))

    def add_user(self, current_user: User, *, email: str, password: str, name: str, role: Role) -> ActionResult:
        return self._run(
            "حدث خطأ أثناء إضافة المستخدم",
            lambda: self._c.user_service.add_user(
                current_role=current_user.role, email=email, password=password, name=name, role=role
            ),
            message=lambda _: "تم إضافة المستخدم بنجاح",
        )

    def delete_user(self, current_user: User, email: str) -> ActionResult:
        return self._run(
            "حدث خطأ أثناء حذف المستخدم",
            lambda: self._c.user_service.delete_user(
                current_role=current_user.role, current_email=current_user.email, email=email
            ),
            message=lambda _: "تم حذف المستخدم بنجاح",
        )

    def update_password(self, current_user: User, email: str, new_password: str) -> ActionResult:
        return self._run(
            "حدث خطأ أثناء تغيير كلمة المرور",
            lambda: self._c.user_service.update_password(
                current_role=current_user.role,
                current_email=current_user.email,
                email=email,
                new_password=new_password,
            ),
            message=lambda _: "تم تغيير كلمة المرور بنجاح",
        )

    # ---- school configuration ----

    def get_config(self) -> ActionResult:
        return self._run("حدث خطأ أثناء تحميل الإعدادات", self._c.school_service.get_config)

    def save_config(self, config: Union[SchoolConfig, dict]) -> ActionResult:
        def _save():
            cfg = config if isinstance(config, SchoolConfig) else SchoolConfig.from_dict(config)
            return self._c.school_service.save_config(cfg)

        return self._run("حدث خطأ أثناء الحفظ", _save, message=lambda _: "تم الحفظ بنجاح")

    def add_teacher(self, *, name: str, national_id: str, phone: Optional[str] = None) -> ActionResult:
        return self._run(
            "حدث خطأ أثناء إضافة المعلم",
            lambda: self._c.school_service.add_teacher(name=name, national_id=national_id, phone=phone),
            message=lambda t: f"تم إضافة المعلم {t.name} بنجاح",
        )

    def update_teacher(self, teacher_id: str, *, name: str, national_id: str, phone: Optional[str] = None) -> ActionResult:
        return self._run(
            "حدث خطأ أثناء تعديل المعلم",
            lambda: self._c.school_service.update_teacher(teacher_id, name=name, national_id=national_id, phone=phone),
            message=lambda t: f"تم تعديل بيانات المعلم {t.name} بنجاح",
        )

    def delete_teacher(self, teacher_id: str) -> ActionResult:
        return self._run(
            "حدث خطأ أثناء حذف المعلم",
            lambda: self._c.school_service.delete_teacher(teacher_id),
            message=lambda t: f"تم حذف المعلم {t.name} بنجاح",
        )

    def import_teachers(self, rows: Iterable[Sequence]) -> ActionResult:
        return self._run(
            "حدث خطأ أثناء استيراد المعلمين",
            lambda: self._c.school_service.import_teachers(rows),
            message=lambda s: f"تم استيراد {len(s.added)} معلم، وتم تجاهل {len(s.skipped)} صف",
        )

    # ---- absences ----

    def record_absence(self, teacher_id: str, on: DateLike) -> ActionResult:
        return self._run(
            "حدث خطأ أثناء الحفظ",
            lambda: self._c.absence_service.record_absence(teacher_id, _as_date(on)),
            message=lambda r: f"تم تسجيل غياب المعلم {r.teacher_name} بنجاح",
        )

    def list_absences(self) -> ActionResult:
        return self._run("حدث خطأ أثناء تحميل السجلات", self._c.absence_service.list_absences)

    def delete_absence(self, record_id: str) -> ActionResult:
        return self._run(
            "حدث خطأ أثناء الحذف",
            lambda: self._c.absence_service.delete_absence(record_id),
            message=lambda r: f"تم حذف غياب {r.teacher_name} بنجاح",
        )

    # ---- tardiness ----

    def preview_tardiness(self, arrival_time: str) -> ActionResult:
        return self._run("حدث خطأ أثناء حساب التأخر", lambda: self._c.tardiness_service.preview(arrival_time))

    def record_tardiness(self, teacher_id: str, on: DateLike, arrival_time: str) -> ActionResult:
        return self._run(
            "حدث خطأ أثناء الحفظ",
            lambda: self._c.tardiness_service.record_tardiness(teacher_id, _as_date(on), arrival_time),
            message=lambda r: f"تم تسجيل تأخر المعلم {r.teacher_name} بنجاح",
        )

    def list_tardiness(self) -> ActionResult:
        return self._run("حدث خطأ أثناء تحميل السجلات", self._c.tardiness_service.list_tardiness)

    def delete_tardiness(self, record_id: str) -> ActionResult:
        return self._run(
            "حدث خطأ أثناء الحذف",
            lambda: self._c.tardiness_service.delete_tardiness(record_id),
            message=lambda r: f"تم حذف تأخر {r.teacher_name} بنجاح",
        )

    # ---- statistics & reports ----

    def statistics(self) -> ActionResult:
        def _stats():
            svc = self._c.statistics_service
            return {"absences": svc.absence_stats(), "tardiness": svc.tardiness_stats()}

        return self._run("حدث خطأ أثناء تحميل الإحصائيات", _stats)

    def teacher_summary(self, teacher_id: str) -> ActionResult:
        return self._run("حدث خطأ أثناء تحميل بيانات المعلم", lambda: self._c.statistics_service.teacher_summary(teacher_id))

    def absence_letter(
        self,
        teacher_id: str,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> ActionResult:
        return self._run(
            "حدث خطأ أثناء إنشاء المساءلة",
            lambda: self._c.report_service.absence_letter(
                teacher_id,
                _as_date(start) if start else None,
                _as_date(end) if end else None,
            ),
        )

    def tardiness_letter(
        self,
        teacher_id: str,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> ActionResult:
        return self._run(
            "حدث خطأ أثناء إنشاء المساءلة",
            lambda: self._c.report_service.tardiness_letter(
                teacher_id,
                _as_date(start) if start else None,
                _as_date(end) if end else None,
            ),
        )

    def statistics_report(self) -> ActionResult:
        return self._run("حدث خطأ أثناء إنشاء التقرير", self._c.report_service.statistics_report)
