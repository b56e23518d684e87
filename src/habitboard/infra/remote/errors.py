"""Errors raised by the backend REST client.

Messages are user-facing and match the app's Spanish copy.
"""

from __future__ import annotations


class APIError(Exception):
    """Base class for every failure talking to the backend."""

    default_message = "Error inesperado del servidor"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidResponseError(APIError):
    default_message = "Respuesta inválida del servidor"


class DecodingError(APIError):
    default_message = "No se pudo decodificar la respuesta"


class NetworkError(APIError):
    default_message = "Error de conexión. Verifica tu internet e intenta de nuevo."


class ServerError(APIError):
    """Non-2xx response; keeps the status code and raw body."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        if status_code == 429:
            message = (
                "Límite de solicitudes alcanzado. "
                "Por favor, espera unos minutos e inténtalo de nuevo."
            )
        else:
            message = f"Error {status_code}: {body}"
        super().__init__(message)


__all__ = [
    "APIError",
    "DecodingError",
    "InvalidResponseError",
    "NetworkError",
    "ServerError",
]
