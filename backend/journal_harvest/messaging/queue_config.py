from __future__ import annotations

from dataclasses import dataclass

from ..settings import Settings


@dataclass(frozen=True, slots=True)
class QueueConfig:
    region: str
    queue_url: str
    access_key: str | None = None
    secret_key: str | None = None
    connect_timeout: float = 2
    read_timeout: float = 10
    max_attempts: int = 1

    @property
    def has_explicit_credentials(self) -> bool:
        return bool(self.access_key and self.secret_key)

    @classmethod
    def from_settings(
        cls,
        s: Settings,
        *,
        queue_url: str | None = None,
        region: str | None = None,
    ) -> "QueueConfig":
        return cls(
            region=str(region or s.aws_region or "us-east-1").strip() or "us-east-1",
            queue_url=str(queue_url or s.harvest_queue_url or "").strip(),
            access_key=s.aws_access_key_id or None,
            secret_key=s.aws_secret_access_key or None,
            connect_timeout=float(s.sqs_connect_timeout),
            read_timeout=float(s.sqs_read_timeout),
            max_attempts=max(1, int(s.sqs_max_attempts or 1)),
        )

    def __repr__(self) -> str:
        # Never render the secret.
        return (
            f"QueueConfig(region={self.region!r}, queue_url={self.queue_url!r}, "
            f"explicit_credentials={self.has_explicit_credentials})"
        )
