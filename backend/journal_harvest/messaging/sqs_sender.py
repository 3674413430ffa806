from __future__ import annotations

from typing import Any, Mapping

from botocore.exceptions import BotoCoreError, ClientError

from ..domain.journals.harvest_messages import HarvestMessage
from ..domain.journals.models import Journal, SystemType
from ..infrastructure.aws_clients import sqs_client
from ..observability.logging import get_logger
from .errors import ConfigurationError, PublishError
from .queue_config import QueueConfig


log = get_logger("sqs_sender")


def _err_code_from_client_error(e: ClientError) -> str | None:
    try:
        return (e.response or {}).get("Error", {}).get("Code")
    except Exception:
        return None


def _aws_request_id_from_client_error(e: ClientError) -> str | None:
    try:
        return (e.response or {}).get("ResponseMetadata", {}).get("RequestId")
    except Exception:
        return None


class SqsMessageSender:
    """
    Publishes journal harvest requests onto the harvesting SQS queue.

    One SendMessage per call; failures surface as PublishError.
    """

    def __init__(self, config: QueueConfig, *, client: Any = None):
        if not str(config.queue_url or "").strip():
            raise ConfigurationError("HARVEST_QUEUE_URL is not set")
        self._config = config
        self._client = client if client is not None else sqs_client(config)

    def send_ojs_oai_message(self, journal: Journal) -> str | None:
        return self.send_message(HarvestMessage.for_journal(journal, SystemType.OJS_OAI))

    def send_teckiz_message(self, journal: Journal) -> str | None:
        return self.send_message(HarvestMessage.for_journal(journal, SystemType.TECKIZ))

    def send_doaj_message(self, journal: Journal) -> str | None:
        return self.send_message(HarvestMessage.for_journal(journal, SystemType.DOAJ))

    def send_message(self, message: HarvestMessage | Mapping[str, Any]) -> str | None:
        msg = message if isinstance(message, HarvestMessage) else HarvestMessage.from_mapping(message)
        try:
            resp = self._client.send_message(
                QueueUrl=self._config.queue_url,
                MessageBody=msg.to_body(),
                MessageAttributes=msg.to_attributes(),
            )
        except ClientError as e:
            code = _err_code_from_client_error(e)
            log.warning(
                "harvest_message_failed",
                journal_key=msg.journal_key,
                system_type=msg.system_type,
                error_code=code,
                error=str(e),
            )
            raise PublishError(
                message=f"Failed to send SQS message: {e}",
                journal_id=msg.journal_key,
                system=msg.system_type,
                cause=e,
                queue_url=self._config.queue_url,
                system_type=msg.system_type,
                error_code=code,
                aws_request_id=_aws_request_id_from_client_error(e),
            ) from e
        except BotoCoreError as e:
            log.warning(
                "harvest_message_failed",
                journal_key=msg.journal_key,
                system_type=msg.system_type,
                error=str(e),
            )
            raise PublishError(
                message=f"Failed to send SQS message: {e}",
                journal_id=msg.journal_key,
                system=msg.system_type,
                cause=e,
                queue_url=self._config.queue_url,
                system_type=msg.system_type,
            ) from e

        message_id = resp.get("MessageId") if isinstance(resp, dict) else None
        log.info(
            "harvest_message_sent",
            journal_key=msg.journal_key,
            system_type=msg.system_type,
            action=msg.action,
            message_id=message_id,
        )
        return message_id
