from __future__ import annotations

from typing import Any

import boto3
from botocore.config import Config

from ..messaging.queue_config import QueueConfig


def botocore_config(cfg: QueueConfig) -> Config:
    # Standard retry mode counts the first call as an attempt; max_attempts=1 disables SDK retries.
    return Config(
        retries={"max_attempts": cfg.max_attempts, "mode": "standard"},
        connect_timeout=cfg.connect_timeout,
        read_timeout=cfg.read_timeout,
    )


def sqs_client(cfg: QueueConfig):
    kwargs: dict[str, Any] = {"region_name": cfg.region, "config": botocore_config(cfg)}
    if cfg.has_explicit_credentials:
        kwargs["aws_access_key_id"] = cfg.access_key
        kwargs["aws_secret_access_key"] = cfg.secret_key
    return boto3.client("sqs", **kwargs)
