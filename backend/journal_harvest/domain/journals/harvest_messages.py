from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

from .models import Journal, SystemType


# Wire tags understood by the harvesting Lambda, per handled system.
HARVEST_ROUTES: dict[SystemType, tuple[str, str]] = {
    SystemType.OJS_OAI: ("OJS_OAI", "harvest_oai"),
    SystemType.TECKIZ: ("TECKIZ", "harvest_teckiz"),
    SystemType.DOAJ: ("DOAJ", "harvest_doaj"),
}


@dataclass(frozen=True, slots=True)
class HarvestMessage:
    url: str
    journal_key: str
    system_type: str
    action: str

    @classmethod
    def for_journal(cls, journal: Journal, system: SystemType) -> "HarvestMessage":
        system_type, action = HARVEST_ROUTES[system]
        return cls(
            url=journal.website,
            journal_key=str(journal.id),
            system_type=system_type,
            action=action,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "HarvestMessage":
        return cls(
            url=str(data["url"]),
            journal_key=str(data["journal_key"]),
            system_type=str(data["system_type"]),
            action=str(data["action"]),
        )

    def to_dict(self) -> dict[str, str]:
        # Field order is the wire order.
        return {
            "url": self.url,
            "journal_key": self.journal_key,
            "system_type": self.system_type,
            "action": self.action,
        }

    def to_body(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    def to_attributes(self) -> dict[str, dict[str, str]]:
        """SQS MessageAttributes mirroring the routing fields of the body."""
        return {
            "system_type": {"DataType": "String", "StringValue": self.system_type},
            "action": {"DataType": "String", "StringValue": self.action},
        }
