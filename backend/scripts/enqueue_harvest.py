#!/usr/bin/env python3
"""
Enqueue a harvest request for a single journal.

Builds the journal from the command line (no database access), routes it through
ImportQueueCreator and prints the SQS message id.

Usage:
    python scripts/enqueue_harvest.py --journal-id 42 --website https://journal.example.org --system ojs-oai
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure `backend/` is on sys.path so `import journal_harvest.*` works from a checkout.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from journal_harvest.domain.journals.models import Journal, JournalSetting
from journal_harvest.messaging.errors import ConfigurationError, PublishError
from journal_harvest.observability.logging import configure_logging, get_logger
from journal_harvest.services.import_queue_creator import build_import_queue_creator
from journal_harvest.settings import get_settings

log = get_logger("enqueue_harvest")


def main(argv: list[str] | None = None, *, client=None) -> int:
    parser = argparse.ArgumentParser(description="Send a journal harvest request to the harvest queue")
    parser.add_argument("--journal-id", required=True, help="Journal id (sent as journal_key)")
    parser.add_argument("--website", required=True, help="Journal website / OAI base URL")
    parser.add_argument("--system", default="", help="Harvesting system (ojs-oai, teckiz, doaj)")
    parser.add_argument("--queue-url", default=None, help="Override HARVEST_QUEUE_URL")
    parser.add_argument("--region", default=None, help="Override AWS_REGION")
    args = parser.parse_args(argv)

    s = get_settings()
    configure_logging(level=s.log_level, fmt=s.log_format, botocore_level=s.botocore_log_level)
    log.info("enqueue_harvest_settings", **s.to_log_safe_dict())

    journal = Journal(id=args.journal_id, website=args.website, setting=JournalSetting(system=args.system))
    try:
        creator = build_import_queue_creator(s, queue_url=args.queue_url, region=args.region, client=client)
        message_id = creator.create_queue(journal)
    except ConfigurationError as e:
        log.error("enqueue_harvest_config_error", error=str(e))
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except PublishError as e:
        log.error("enqueue_harvest_publish_error", error=str(e), error_code=e.error_code)
        print(f"Publish failed: {e}", file=sys.stderr)
        return 1

    if message_id is None:
        print(f"Nothing sent: system {args.system!r} has no harvest route")
    else:
        print(message_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
