from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class SystemType(str, Enum):
    """Harvesting system a journal is integrated through.

    Values are what the journal settings table stores (`journal_system` column).
    """

    OJS = "ojs"
    OJS_OAI = "ojs-oai"
    TECKIZ = "teckiz"
    DOAJ = "doaj"

    @classmethod
    def parse(cls, raw: Any) -> "SystemType | None":
        """
        Accept either the stored value ("ojs-oai") or the member name ("OJS_OAI"),
        case-insensitively. Returns None for anything unrecognized.
        """
        s = str(raw or "").strip()
        if not s:
            return None
        low = s.lower()
        for member in cls:
            if member.value == low or member.name.lower() == low:
                return member
        return None


@dataclass(frozen=True, slots=True)
class JournalSetting:
    system: str | None = None

    @property
    def system_type(self) -> SystemType | None:
        return SystemType.parse(self.system)

    @property
    def has_system(self) -> bool:
        return bool(str(self.system or "").strip())


@dataclass(frozen=True, slots=True)
class Journal:
    id: Any
    website: str
    setting: JournalSetting | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Journal":
        """
        Build from a row/document shaped like the persisted IndexJournal record.

        A nested `setting` dict (or a flat `system` key) populates the setting;
        other record columns are ignored.
        """
        raw_setting = data.get("setting")
        setting: JournalSetting | None = None
        if isinstance(raw_setting, dict):
            setting = JournalSetting(system=raw_setting.get("system"))
        elif "system" in data:
            setting = JournalSetting(system=data.get("system"))
        return cls(
            id=data.get("id"),
            website=str(data.get("website") or ""),
            setting=setting,
        )
