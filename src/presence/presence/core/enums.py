from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control."""

    ADMIN = "admin"
    USER = "user"


class StoreKey(str, Enum):
    """Logical categories of the record store."""

    CONFIG = "config"
    ABSENCES = "absences"
    TARDINESS = "tardiness"
    USERS = "users"
