"""Domain errors raised by the services.

Every error carries a mapping of field name to human message plus the HTTP
status class the app factory reports it with.
"""

from __future__ import annotations

from typing import Dict

from fastapi import status


class ServiceError(Exception):
    """Base class for domain errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, messages: Dict[str, str]):
        super().__init__("; ".join(f"{key}: {value}" for key, value in messages.items()))
        self.messages = dict(messages)

    def to_dict(self) -> dict:
        return {"messages": self.messages, "status": self.status_code}


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidCredentialsError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class TokenInvalidError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
