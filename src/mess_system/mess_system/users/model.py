from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a mess member or administrator.

    Note: Plain data object (no DB access code here).
    """

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
