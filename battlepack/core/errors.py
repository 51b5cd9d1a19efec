"""Domain errors surfaced to API clients as JSON envelopes."""

from __future__ import annotations


class ApiError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404

    def __init__(self, resource: str = "Resource") -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource


class ConflictError(ApiError):
    status_code = 409


class AlreadyCompletedError(ApiError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__("Game is already completed")


class MissingStartTimeError(ApiError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__("Game start time not found")


class ServerError(ApiError):
    status_code = 500


__all__ = [
    "AlreadyCompletedError",
    "ApiError",
    "ConflictError",
    "MissingStartTimeError",
    "NotFoundError",
    "ServerError",
    "ValidationError",
]
