from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.ids import generate_id
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import (
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_ID,
    DEFAULT_ADMIN_NAME,
    DEFAULT_ADMIN_PASSWORD,
    MIN_PASSWORD_LENGTH,
)
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import User, UserRecord
from .repository import UserRepository, find_by_email

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    email = require_non_empty(email, "البريد الإلكتروني").lower()
    if "@" not in email:
        raise ValidationError("البريد الإلكتروني غير صالح")
    return email


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("ليس لديك صلاحية")


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> User:
        found = find_by_email(self._users, email)
        if not found:
            raise AuthenticationError("البريد الإلكتروني أو كلمة المرور غير صحيحة")

        try:
            ok = check_password_hash(found.password_hash, password or "")
        except ValueError:
            # e.g. hashes written by another system
            ok = False

        if not ok:
            raise AuthenticationError("البريد الإلكتروني أو كلمة المرور غير صحيحة")
        return found.user


class UserService:
    """Use case: manage accounts (admin)."""

    def __init__(
        self,
        users: UserRepository,
        *,
        clock: Callable[[], datetime] = now_local,
        id_factory: Callable[[], str] = generate_id,
    ):
        self._users = users
        self._clock = clock
        self._new_id = id_factory

    def ensure_bootstrapped(
        self,
        *,
        email: str = DEFAULT_ADMIN_EMAIL,
        password: str = DEFAULT_ADMIN_PASSWORD,
    ) -> bool:
        """Create the default admin when no account exists yet.

        Idempotent; called once at start-up. Returns True when an account was created.
        """
        if self._users.list():
            return False

        email = _normalize_email(email)
        admin = UserRecord(
            email=email,
            password_hash=generate_password_hash(password),
            user=User(
                id=DEFAULT_ADMIN_ID,
                email=email,
                name=DEFAULT_ADMIN_NAME,
                role=Role.ADMIN,
                created_at=self._clock().isoformat(timespec="seconds"),
            ),
        )
        self._users.replace_all([admin])
        logger.warning("Default admin account created (%s); change its password", email)
        return True

    def list_users(self, *, current_role: Role) -> list[User]:
        _require_admin(current_role)
        return [u.user for u in self._users.list()]

    def add_user(self, *, current_role: Role, email: str, password: str, name: str, role: Role) -> User:
        _require_admin(current_role)
        email = _normalize_email(email)
        name = require_non_empty(name, "الاسم")
        require_min_length(password, "كلمة المرور", MIN_PASSWORD_LENGTH)

        if find_by_email(self._users, email):
            raise ValidationError("البريد الإلكتروني مستخدم بالفعل")

        user = User(
            id=f"user-{self._new_id()}",
            email=email,
            name=name,
            role=Role(role),
            created_at=self._clock().isoformat(timespec="seconds"),
        )
        self._users.append(UserRecord(email=email, password_hash=generate_password_hash(password), user=user))
        logger.info("User added: %s (%s)", email, user.role.value)
        return user

    def delete_user(self, *, current_role: Role, current_email: str, email: str) -> None:
        _require_admin(current_role)
        if (email or "").strip().lower() == (current_email or "").strip().lower():
            raise ValidationError("لا يمكنك حذف حسابك الخاص")

        found = find_by_email(self._users, email)
        if not found:
            raise NotFoundError("المستخدم غير موجود")

        self._users.remove_by_id(found.email)
        logger.info("User deleted: %s", found.email)

    def update_password(self, *, current_role: Role, current_email: str, email: str, new_password: str) -> None:
        """Admins may reset any password; other users only their own."""
        if current_role != Role.ADMIN and (email or "").strip().lower() != (current_email or "").strip().lower():
            raise AuthorizationError("ليس لديك صلاحية")
        require_min_length(new_password, "كلمة المرور", MIN_PASSWORD_LENGTH)

        records = self._users.list()
        needle = (email or "").strip().lower()
        index = next((i for i, u in enumerate(records) if u.email.lower() == needle), None)
        if index is None:
            raise NotFoundError("المستخدم غير موجود")

        old = records[index]
        records[index] = UserRecord(email=old.email, password_hash=generate_password_hash(new_password), user=old.user)
        self._users.replace_all(records)
        logger.info("Password updated: %s", old.email)
