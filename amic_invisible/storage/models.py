from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class LinkEntry:
    id: str
    person: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "LinkEntry":
        return cls(id=str(raw["id"]), person=str(raw["person"]))


@dataclass(frozen=True)
class Assignment:
    giver: str
    receiver: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Assignment":
        return cls(giver=str(raw["giver"]), receiver=str(raw["receiver"]))
