"""Cache-first loading shared by the habit and expense services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Literal, TypeVar
from uuid import UUID

from ..domain.repositories import ChangeFeed
from ..infra.remote.errors import APIError
from ..logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Source = Literal["cache", "remote"]


@dataclass(frozen=True, slots=True)
class LoadResult(Generic[T]):
    """Records returned by a load, where they came from, and whether they may be outdated."""

    items: list[T]
    source: Source
    stale: bool = False


def load_with_fallback(
    *,
    kind: str,
    user_id: UUID,
    read_cache: Callable[[], list[T]],
    fetch_remote: Callable[[], list[T]],
    write_cache: Callable[[list[T]], None],
) -> LoadResult[T]:
    """Fetch from the backend, falling back to the cache when it is unreachable.

    Remote data replaces the cache. On an APIError the cached copy is returned
    marked stale; with nothing cached the error propagates.
    """

    cached = read_cache()
    try:
        remote = fetch_remote()
    except APIError as exc:
        if not cached:
            raise
        logger.warning(
            "Backend unavailable, serving cached records",
            extra={"kind": kind, "user_id": str(user_id), "count": len(cached), "error": str(exc)},
        )
        return LoadResult(items=cached, source="cache", stale=True)

    write_cache(remote)
    logger.info(
        "Loaded records from backend",
        extra={"kind": kind, "user_id": str(user_id), "count": len(remote)},
    )
    return LoadResult(items=remote, source="remote", stale=False)


def replace_by_id(items: list[T], updated: T) -> list[T]:
    """Copy of ``items`` with the element sharing ``updated``'s id swapped in."""

    return [updated if item.id == updated.id else item for item in items]  # type: ignore[attr-defined]


def remove_by_id(items: list[T], item_id: UUID) -> list[T]:
    return [item for item in items if item.id != item_id]  # type: ignore[attr-defined]


def watch_changes(
    changes: ChangeFeed,
    *,
    table: str,
    reload: Callable[[], LoadResult[T]],
    on_change: Callable[[LoadResult[T]], None],
) -> Callable[[], None]:
    """Reload on every change notification for ``table``; returns the unsubscribe hook.

    A reload that fails with an APIError is logged and skipped so the
    subscription stays open for the next notification.
    """

    def handle() -> None:
        try:
            result = reload()
        except APIError as exc:
            logger.warning(
                "Reload after remote change failed",
                extra={"table": table, "error": str(exc)},
            )
            return
        on_change(result)

    changes.subscribe(table, handle)
    return lambda: changes.unsubscribe(table, handle)
