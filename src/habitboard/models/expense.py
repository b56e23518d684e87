"""Expense record."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping
from uuid import UUID

from .serialization import format_timestamp, parse_timestamp


@dataclass(frozen=True, slots=True)
class Expense:
    """A single spend entry. ``category`` is a free-form, case-sensitive label."""

    id: UUID
    user_id: UUID
    category: str
    amount: float
    created_at: datetime

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Expense":
        return cls(
            id=UUID(str(row["id"])),
            user_id=UUID(str(row["user_id"])),
            category=str(row["category"]),
            amount=float(row["amount"]),
            created_at=parse_timestamp(row["created_at"]),
        )

    def to_row(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "category": self.category,
            "amount": self.amount,
            "created_at": format_timestamp(self.created_at),
        }


__all__ = ["Expense"]
