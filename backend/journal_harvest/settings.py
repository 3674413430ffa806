from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .messaging.errors import ConfigurationError


UnknownSystemPolicy = Literal["ignore", "warn", "error"]
LogFormat = Literal["json", "console"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # Runtime
    environment: str = Field(default="development", validation_alias="APP_ENV")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: LogFormat = Field(default="json", validation_alias="LOG_FORMAT")
    botocore_log_level: str = Field(default="WARNING", validation_alias="BOTOCORE_LOG_LEVEL")

    # AWS / SQS
    aws_region: str = Field(default="us-east-1", validation_alias="AWS_REGION")
    harvest_queue_url: str | None = Field(default=None, validation_alias="HARVEST_QUEUE_URL")
    # Optional: explicit credentials. When both are unset the default boto3 chain applies.
    aws_access_key_id: str | None = Field(
        default=None, validation_alias="HARVEST_AWS_ACCESS_KEY_ID"
    )
    aws_secret_access_key: str | None = Field(
        default=None, validation_alias="HARVEST_AWS_SECRET_ACCESS_KEY"
    )
    sqs_connect_timeout: float = Field(default=2, validation_alias="SQS_CONNECT_TIMEOUT_SECONDS")
    sqs_read_timeout: float = Field(default=10, validation_alias="SQS_READ_TIMEOUT_SECONDS")
    # botocore total attempts; 1 means a single send with no SDK-level retry.
    sqs_max_attempts: int = Field(default=1, ge=1, validation_alias="SQS_MAX_ATTEMPTS")

    # Dispatch
    unknown_system_policy: UnknownSystemPolicy = Field(
        default="warn", validation_alias="HARVEST_UNKNOWN_SYSTEM_POLICY"
    )

    # ---- helpers / derived flags ----
    @property
    def normalized_environment(self) -> str:
        v = (self.environment or "").strip().lower()
        if v in ("prod", "production"):
            return "production"
        if v in ("stage", "staging"):
            return "staging"
        if v in ("dev", "development"):
            return "development"
        return v or "development"

    @property
    def is_production(self) -> bool:
        return self.normalized_environment == "production"

    def require_in_production(self, *, queue_url: str | None = None) -> None:
        """
        Enforce required settings in production.

        Development/staging may run without a queue URL (e.g. unit tests, dry runs),
        but production must be able to publish. `queue_url` is the effective URL after
        any caller override (e.g. the CLI's --queue-url).
        """
        if not self.is_production:
            return

        missing: list[str] = []
        if not str(queue_url or self.harvest_queue_url or "").strip():
            missing.append("HARVEST_QUEUE_URL")
        # Credentials come as a pair or not at all.
        if bool(self.aws_access_key_id) != bool(self.aws_secret_access_key):
            missing.append("HARVEST_AWS_ACCESS_KEY_ID + HARVEST_AWS_SECRET_ACCESS_KEY")

        if missing:
            raise ConfigurationError(
                "Missing required production environment variables: "
                + ", ".join(missing)
            )

    def to_log_safe_dict(self) -> dict[str, object]:
        """
        A redacted representation safe for structured logs / diagnostics.
        """
        def _has(v: object) -> bool:
            return v is not None and str(v).strip() != ""

        return {
            "environment": self.normalized_environment,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "aws": {
                "aws_region": self.aws_region,
                "harvest_queue_url": self.harvest_queue_url,
                "aws_access_key_id_configured": _has(self.aws_access_key_id),
                "aws_secret_access_key_configured": _has(self.aws_secret_access_key),
            },
            "sqs": {
                "connect_timeout": self.sqs_connect_timeout,
                "read_timeout": self.sqs_read_timeout,
                "max_attempts": self.sqs_max_attempts,
            },
            "unknown_system_policy": self.unknown_system_policy,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Production requirements are checked by build_import_queue_creator once caller
    # overrides are known.
    return Settings()
