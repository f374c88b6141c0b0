from __future__ import annotations

import random
from typing import List, Optional, Sequence, TypeVar

from amic_invisible.storage.models import Assignment

T = TypeVar("T")


class AssignmentError(RuntimeError):
    pass


def shuffle(items: Sequence[T], seed: Optional[int] = None) -> List[T]:
    rng = random.Random(seed)
    shuffled = list(items)
    rng.shuffle(shuffled)
    return shuffled


def build_circle(tokens: Sequence[str]) -> List[Assignment]:
    """Each person gives to the next one and the last gives to the first.

    The caller is expected to have rejected fewer than 2 participants and
    duplicate names already.
    """
    if len(tokens) < 2:
        raise AssignmentError("At least 2 participants are required.")
    if len(set(tokens)) != len(tokens):
        raise AssignmentError("Participant tokens must be unique.")

    count = len(tokens)
    return [
        Assignment(giver=tokens[index], receiver=tokens[(index + 1) % count])
        for index in range(count)
    ]


def is_single_cycle(assignments: Sequence[Assignment]) -> bool:
    if len(assignments) < 2:
        return False

    receivers = {}
    for item in assignments:
        if item.giver == item.receiver or item.giver in receivers:
            return False
        receivers[item.giver] = item.receiver

    if set(receivers.values()) != set(receivers):
        return False

    start = assignments[0].giver
    current = receivers[start]
    steps = 1
    while current != start:
        current = receivers[current]
        steps += 1
    return steps == len(assignments)
