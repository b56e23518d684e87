"""Thin httpx client for the backend's REST endpoints."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, TypeVar

import httpx

from ...config import BaseConfig
from ...logging_config import get_logger
from .errors import DecodingError, InvalidResponseError, NetworkError, ServerError

logger = get_logger(__name__)

T = TypeVar("T")


class RestClient:
    """Sends authenticated JSON requests to ``<project>/rest/v1/<table>``.

    Every request carries the project ``apikey`` and asks the server to return
    the affected rows, so create/update calls get the stored record back.
    """

    def __init__(
        self,
        project_url: str,
        anon_key: str,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not project_url:
            raise ValueError("project_url is required")
        self._client = httpx.Client(
            base_url=f"{project_url.rstrip('/')}/rest/v1/",
            timeout=timeout,
            transport=transport,
            headers={
                "apikey": anon_key,
                "Content-Type": "application/json",
                "Prefer": "return=representation",
            },
        )

    @classmethod
    def from_config(cls, config: BaseConfig, **kwargs: Any) -> "RestClient":
        config.require_remote()
        return cls(
            config.SUPABASE_URL,
            config.SUPABASE_ANON_KEY,
            timeout=config.HTTP_TIMEOUT,
            **kwargs,
        )

    def request(
        self,
        method: str,
        path: str,
        *,
        access_token: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body ([] when empty)."""

        headers = {"Authorization": f"Bearer {access_token}"} if access_token else None
        try:
            response = self._client.request(method, path, params=params, json=json, headers=headers)
        except httpx.InvalidURL as exc:
            raise InvalidResponseError() from exc
        except httpx.TransportError as exc:
            logger.warning(
                "Backend request failed",
                extra={"method": method, "path": path, "error": str(exc)},
            )
            raise NetworkError() from exc

        if not response.is_success:
            logger.warning(
                "Backend returned an error",
                extra={"method": method, "path": path, "status": response.status_code},
            )
            raise ServerError(response.status_code, response.text or "Unknown error")

        if not response.content:
            return []
        try:
            return response.json()
        except ValueError as exc:
            raise DecodingError() from exc

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def decode_rows(payload: Any, factory: Callable[[Mapping[str, Any]], T]) -> list[T]:
    """Convert a JSON array of rows with ``factory``; malformed data is a DecodingError."""

    if not isinstance(payload, list):
        raise DecodingError()
    try:
        return [factory(row) for row in payload]
    except (KeyError, TypeError, ValueError) as exc:
        raise DecodingError() from exc


def first_row(payload: Any, factory: Callable[[Mapping[str, Any]], T]) -> T:
    rows = decode_rows(payload, factory)
    if not rows:
        raise DecodingError()
    return rows[0]
