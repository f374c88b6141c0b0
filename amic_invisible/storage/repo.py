from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, TypeVar

from amic_invisible.storage.models import Assignment, LinkEntry
from amic_invisible.storage.records import CorruptRecordError, RecordFile

LINKS_FILENAME = "uuids.json"
ASSIGNMENTS_FILENAME = "assignments.json"

T = TypeVar("T")


def _parse_entries(record: RecordFile, parse: Callable[[Any], T]) -> Optional[List[T]]:
    raw = record.read()
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise CorruptRecordError(f"{record.path} must hold a JSON list")
    try:
        return [parse(item) for item in raw]
    except (KeyError, TypeError) as exc:
        raise CorruptRecordError(f"{record.path} has a malformed entry: {exc!r}") from exc


class DataStore:
    def __init__(self, data_dir: str) -> None:
        self.data_dir = Path(data_dir)
        self.links = RecordFile(self.data_dir / LINKS_FILENAME)
        self.assignments = RecordFile(self.data_dir / ASSIGNMENTS_FILENAME)

    def save_links(self, entries: Iterable[LinkEntry]) -> bool:
        return self.links.create_if_absent([entry.to_dict() for entry in entries])

    def save_assignments(self, assignments: Iterable[Assignment]) -> bool:
        return self.assignments.create_if_absent([item.to_dict() for item in assignments])

    def load_links(self) -> Optional[List[LinkEntry]]:
        return _parse_entries(self.links, LinkEntry.from_dict)

    def load_assignments(self) -> Optional[List[Assignment]]:
        return _parse_entries(self.assignments, Assignment.from_dict)

    def find_link(self, link_id: str) -> Optional[LinkEntry]:
        for entry in self.load_links() or []:
            if entry.id == link_id:
                return entry
        return None

    def find_assignment(self, giver: str) -> Optional[Assignment]:
        for item in self.load_assignments() or []:
            if item.giver == giver:
                return item
        return None
