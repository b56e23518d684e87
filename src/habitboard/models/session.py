"""Authenticated user handed over by the auth layer."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class SessionUser:
    """User id plus the bearer token used for backend calls."""

    id: UUID
    email: str
    access_token: str

    def __repr__(self) -> str:
        # Keep tokens out of logs and tracebacks.
        return f"SessionUser(id={self.id!s}, email={self.email!r})"
