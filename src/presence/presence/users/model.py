from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Public profile of an account (what callers see after login)."""

    id: str
    email: str
    name: str
    role: Role
    created_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=str(data["id"]),
            email=data["email"],
            name=data.get("name", ""),
            role=Role(data.get("role", Role.USER.value)),
            created_at=data.get("createdAt", ""),
        )


@dataclass(frozen=True)
class UserRecord:
    """Stored credential entry.

    The users list is keyed by email, so the email doubles as the id seen by
    the list repository.
    """

    email: str
    password_hash: str
    user: User

    @property
    def id(self) -> str:
        return self.email

    def to_dict(self) -> dict:
        return {"email": self.email, "passwordHash": self.password_hash, "user": self.user.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "UserRecord":
        return cls(
            email=data["email"],
            password_hash=data.get("passwordHash", ""),
            user=User.from_dict(data["user"]),
        )
