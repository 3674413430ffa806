from __future__ import annotations

import json
from typing import Any

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from structlog.testing import capture_logs


QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789012/journal-harvest"


class FakeSqsClient:
    """Records SendMessage calls; optionally fails every call with `error`."""

    def __init__(self, error: Exception | None = None):
        self.calls: list[dict[str, Any]] = []
        self.error = error

    def send_message(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return {"MessageId": f"msg-{len(self.calls)}"}


def _sender(client):
    from journal_harvest.messaging.queue_config import QueueConfig
    from journal_harvest.messaging.sqs_sender import SqsMessageSender

    return SqsMessageSender(QueueConfig(region="us-east-1", queue_url=QUEUE_URL), client=client)


def _journal(system: str = "ojs-oai"):
    from journal_harvest.domain.journals.models import Journal, JournalSetting

    return Journal(id=42, website="https://journal.example.org", setting=JournalSetting(system=system))


def test_send_ojs_oai_message_publishes_body_and_attributes():
    client = FakeSqsClient()
    message_id = _sender(client).send_ojs_oai_message(_journal())

    assert message_id == "msg-1"
    assert len(client.calls) == 1
    call = client.calls[0]
    assert call["QueueUrl"] == QUEUE_URL
    assert json.loads(call["MessageBody"]) == {
        "url": "https://journal.example.org",
        "journal_key": "42",
        "system_type": "OJS_OAI",
        "action": "harvest_oai",
    }
    assert call["MessageAttributes"]["system_type"] == {"DataType": "String", "StringValue": "OJS_OAI"}
    assert call["MessageAttributes"]["action"] == {"DataType": "String", "StringValue": "harvest_oai"}


def test_send_teckiz_and_doaj_messages_use_their_tags():
    client = FakeSqsClient()
    sender = _sender(client)
    sender.send_teckiz_message(_journal("teckiz"))
    sender.send_doaj_message(_journal("doaj"))

    bodies = [json.loads(c["MessageBody"]) for c in client.calls]
    assert [(b["system_type"], b["action"]) for b in bodies] == [
        ("TECKIZ", "harvest_teckiz"),
        ("DOAJ", "harvest_doaj"),
    ]


def test_send_message_accepts_plain_mapping():
    client = FakeSqsClient()
    _sender(client).send_message(
        {"url": "https://x", "journal_key": 9, "system_type": "DOAJ", "action": "harvest_doaj"}
    )
    assert json.loads(client.calls[0]["MessageBody"])["journal_key"] == "9"


def test_client_error_becomes_publish_error_without_retry():
    from journal_harvest.messaging.errors import PublishError

    cause = ClientError(
        {
            "Error": {"Code": "AWS.SimpleQueueService.NonExistentQueue", "Message": "no queue"},
            "ResponseMetadata": {"RequestId": "req-123"},
        },
        "SendMessage",
    )
    client = FakeSqsClient(error=cause)

    with pytest.raises(PublishError) as ei:
        _sender(client).send_doaj_message(_journal("doaj"))

    err = ei.value
    assert len(client.calls) == 1
    assert err.cause is cause
    assert err.__cause__ is cause
    assert err.error_code == "AWS.SimpleQueueService.NonExistentQueue"
    assert err.aws_request_id == "req-123"
    assert err.queue_url == QUEUE_URL
    assert err.system_type == "DOAJ"
    assert err.journal_id == "42"


def test_transport_error_becomes_publish_error():
    from journal_harvest.messaging.errors import PublishError

    cause = EndpointConnectionError(endpoint_url=QUEUE_URL)
    client = FakeSqsClient(error=cause)

    with pytest.raises(PublishError) as ei:
        _sender(client).send_teckiz_message(_journal("teckiz"))

    assert ei.value.cause is cause
    assert ei.value.error_code is None
    assert len(client.calls) == 1


def test_successful_send_logs_message_id():
    with capture_logs() as logs:
        _sender(FakeSqsClient()).send_teckiz_message(_journal("teckiz"))

    assert len(logs) == 1
    entry = logs[0]
    assert entry["event"] == "harvest_message_sent"
    assert entry["log_level"] == "info"
    assert entry["message_id"] == "msg-1"
    assert entry["journal_key"] == "42"
    assert entry["action"] == "harvest_teckiz"


def test_failed_send_logs_before_raising():
    from journal_harvest.messaging.errors import PublishError

    cause = ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "SendMessage")
    with capture_logs() as logs:
        with pytest.raises(PublishError):
            _sender(FakeSqsClient(error=cause)).send_ojs_oai_message(_journal())

    assert [(e["event"], e["log_level"]) for e in logs] == [("harvest_message_failed", "warning")]
    assert logs[0]["error_code"] == "AccessDenied"
    assert logs[0]["system_type"] == "OJS_OAI"


def test_missing_queue_url_is_a_configuration_error():
    from journal_harvest.messaging.errors import ConfigurationError
    from journal_harvest.messaging.queue_config import QueueConfig
    from journal_harvest.messaging.sqs_sender import SqsMessageSender

    with pytest.raises(ConfigurationError):
        SqsMessageSender(QueueConfig(region="us-east-1", queue_url="  "), client=FakeSqsClient())
