"""SQLModel repository implementations."""

from .cache import SQLModelRecordCache

__all__ = ["SQLModelRecordCache"]
