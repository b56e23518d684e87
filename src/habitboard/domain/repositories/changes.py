"""Remote change notification protocol."""

from __future__ import annotations

from typing import Callable, Protocol

ChangeCallback = Callable[[], None]


class ChangeFeed(Protocol):
    """Push notifications for inserts, updates and deletes on backend tables.

    Callbacks carry no payload; listeners reload whatever they display.
    """

    def start(self, access_token: str) -> None:
        """Open the subscriptions for the signed-in user, replacing any previous ones."""
        ...

    def stop(self) -> None:
        """Close every open subscription."""
        ...

    def subscribe(self, table: str, callback: ChangeCallback) -> None:
        ...

    def unsubscribe(self, table: str, callback: ChangeCallback) -> None:
        ...
