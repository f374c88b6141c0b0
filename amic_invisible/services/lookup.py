from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from amic_invisible.core.config import Participant
from amic_invisible.services.hashing import hash_name
from amic_invisible.storage import DataStore


class LinkResolutionError(RuntimeError):
    pass


class InvalidLink(LinkResolutionError):
    pass


class UninitializedState(LinkResolutionError):
    NOT_STARTED = "not_started"
    ASSIGNMENTS_PENDING = "assignments_pending"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class AssignmentMissing(LinkResolutionError):
    pass


class DataIntegrityError(LinkResolutionError):
    def __init__(self, token: str) -> None:
        super().__init__(f"No configured participant matches {token}")
        self.token = token


@dataclass(frozen=True)
class Resolution:
    self_name: str
    target_name: str


class ParticipantDirectory:
    """Maps tokens back to configured participants.

    The configuration never changes while the process runs, so the table is
    hashed once up front and kept in memory only.
    """

    def __init__(self, people: Iterable[Participant]) -> None:
        self._by_token: Dict[str, Participant] = {hash_name(person.name): person for person in people}

    def find(self, token: str) -> Optional[Participant]:
        return self._by_token.get(token)

    def name_for(self, token: str) -> Optional[str]:
        person = self.find(token)
        return person.name if person else None

    def __len__(self) -> int:
        return len(self._by_token)


def resolve_link(store: DataStore, directory: ParticipantDirectory, link_id: str) -> Resolution:
    if not store.links.exists():
        raise UninitializedState(UninitializedState.NOT_STARTED)

    entry = store.find_link(link_id)
    if entry is None:
        raise InvalidLink(link_id)

    if not store.assignments.exists():
        raise UninitializedState(UninitializedState.ASSIGNMENTS_PENDING)

    assignment = store.find_assignment(entry.person)
    if assignment is None:
        raise AssignmentMissing(link_id)

    target_name = directory.name_for(assignment.receiver)
    if target_name is None:
        raise DataIntegrityError(assignment.receiver)

    self_name = directory.name_for(entry.person)
    if self_name is None:
        raise DataIntegrityError(entry.person)

    return Resolution(self_name=self_name, target_name=target_name)
