"""Caller identity and roles.

Authentication happens upstream; by the time a request reaches this service
the gateway has verified the bearer token and forwarded the account id and
role. Everything below the HTTP layer works with a ``Caller``.
"""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    CUSTOMER = "customer"
    ARTISAN = "artisan"
    SELLER = "seller"
    ADMIN = "admin"


_SELLING_ROLES = {Role.ARTISAN, Role.SELLER}


@dataclass(frozen=True)
class Caller:
    user_id: str
    role: Role

    @classmethod
    def of(cls, user_id, role) -> "Caller":
        """Build a caller from raw command fields; raises ``ValueError`` on an unknown role."""
        return cls(user_id=str(user_id), role=role if isinstance(role, Role) else Role(role))

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def is_seller(self) -> bool:
        return self.role in _SELLING_ROLES

    @property
    def is_customer(self) -> bool:
        return self.role is Role.CUSTOMER
