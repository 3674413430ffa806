from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class HarvestQueueError(Exception):
    """Base error for harvest queue dispatch.

    Callers (CLI, request handlers) catch the subclasses to decide exit codes or
    responses; nothing in this package swallows them.
    """

    message: str
    journal_id: str | None = None
    system: str | None = None
    cause: Exception | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class ConfigurationError(HarvestQueueError):
    """Raised before any network call: missing setting/system or queue URL."""


@dataclass(slots=True)
class PublishError(HarvestQueueError):
    queue_url: str | None = None
    system_type: str | None = None
    error_code: str | None = None
    aws_request_id: str | None = None
