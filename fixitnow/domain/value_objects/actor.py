"""
Actor reference value object.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID


class ActorKind(str, Enum):
    """Kind of party performing an operation."""

    USER = "User"
    PROFESSIONAL = "Professional"
    ADMIN = "Admin"


class CashParty(str, Enum):
    """Party of a cash transaction."""

    PROFESSIONAL = "professional"
    CUSTOMER = "customer"


@dataclass(frozen=True)
class ActorRef:
    """Tagged reference to the user, professional or admin acting on a job."""

    kind: ActorKind
    id: UUID

    @classmethod
    def user(cls, actor_id: UUID) -> "ActorRef":
        return cls(ActorKind.USER, actor_id)

    @classmethod
    def professional(cls, actor_id: UUID) -> "ActorRef":
        return cls(ActorKind.PROFESSIONAL, actor_id)

    @classmethod
    def admin(cls, actor_id: UUID) -> "ActorRef":
        return cls(ActorKind.ADMIN, actor_id)

    @property
    def cash_party(self) -> Optional[CashParty]:
        """Role of this actor in a cash transaction, if any."""
        return {
            ActorKind.USER: CashParty.CUSTOMER,
            ActorKind.PROFESSIONAL: CashParty.PROFESSIONAL,
        }.get(self.kind)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "id": str(self.id)}
