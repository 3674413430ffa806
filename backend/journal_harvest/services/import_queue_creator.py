from __future__ import annotations

from typing import Any, Iterable

import structlog

from ..domain.journals.models import Journal, SystemType
from ..messaging.errors import ConfigurationError
from ..messaging.queue_config import QueueConfig
from ..messaging.sqs_sender import SqsMessageSender
from ..observability.logging import get_logger
from ..settings import Settings, UnknownSystemPolicy, get_settings


log = get_logger("import_queue_creator")


class ImportQueueCreator:
    """
    Routes a journal to the harvest message matching its configured system.

    The actual harvesting happens asynchronously in the worker that consumes the queue.
    """

    def __init__(
        self,
        sender: SqsMessageSender,
        *,
        unknown_system_policy: UnknownSystemPolicy = "warn",
    ):
        self._sender = sender
        self._unknown_system_policy = unknown_system_policy

    def create_queue(self, journal: Journal) -> str | None:
        setting = journal.setting
        if setting is None:
            raise ConfigurationError("journal setting not found", journal_id=str(journal.id))

        if not setting.has_system:
            raise ConfigurationError("system not found", journal_id=str(journal.id))

        with structlog.contextvars.bound_contextvars(journal_id=str(journal.id), system=setting.system):
            system = setting.system_type
            if system is SystemType.OJS_OAI:
                log.info("harvest_dispatch", system_type="OJS_OAI")
                return self._sender.send_ojs_oai_message(journal)
            if system is SystemType.TECKIZ:
                log.info("harvest_dispatch", system_type="TECKIZ")
                return self._sender.send_teckiz_message(journal)
            if system is SystemType.DOAJ:
                log.info("harvest_dispatch", system_type="DOAJ")
                return self._sender.send_doaj_message(journal)

            # SystemType.OJS (legacy REST integration) and unknown values have no harvest route.
            return self._unhandled(journal, setting.system)

    def create_queues(self, journals: Iterable[Journal]) -> list[str | None]:
        return [self.create_queue(j) for j in journals]

    def _unhandled(self, journal: Journal, system: str | None) -> None:
        policy = self._unknown_system_policy
        if policy == "error":
            raise ConfigurationError(
                f"unsupported system: {system}",
                journal_id=str(journal.id),
                system=system,
            )
        if policy == "warn":
            log.warning("harvest_system_unhandled")
        return None


def build_import_queue_creator(
    s: Settings | None = None,
    *,
    queue_url: str | None = None,
    region: str | None = None,
    client: Any = None,
) -> ImportQueueCreator:
    """Wire a creator + sender from environment settings (with optional overrides)."""
    s = s or get_settings()
    cfg = QueueConfig.from_settings(s, queue_url=queue_url, region=region)
    s.require_in_production(queue_url=cfg.queue_url)
    sender = SqsMessageSender(cfg, client=client)
    return ImportQueueCreator(sender, unknown_system_policy=s.unknown_system_policy)
