import pytest

from amic_invisible.services.assignment import AssignmentError, build_circle, is_single_cycle, shuffle
from amic_invisible.services.hashing import hash_name
from amic_invisible.storage import Assignment


def follow_circle(assignments, start):
    receivers = {item.giver: item.receiver for item in assignments}
    visited = [start]
    current = receivers[start]
    while current != start:
        visited.append(current)
        current = receivers[current]
    return visited


@pytest.mark.parametrize("size", [2, 3, 4, 7, 25])
def test_circle_is_single_cycle(size):
    tokens = [hash_name(f"person-{index}") for index in range(size)]
    assignments = build_circle(shuffle(tokens, seed=size))

    assert len(assignments) == size
    assert {item.giver for item in assignments} == set(tokens)
    assert {item.receiver for item in assignments} == set(tokens)
    assert all(item.giver != item.receiver for item in assignments)
    for token in tokens:
        assert len(follow_circle(assignments, token)) == size
    assert is_single_cycle(assignments)


def test_circle_follows_shuffled_order():
    assignments = build_circle(["Bob", "Carol", "Alice"])
    assert assignments == [
        Assignment(giver="Bob", receiver="Carol"),
        Assignment(giver="Carol", receiver="Alice"),
        Assignment(giver="Alice", receiver="Bob"),
    ]


def test_circle_two_people():
    assignments = build_circle(["A", "B"])
    assert assignments == [Assignment("A", "B"), Assignment("B", "A")]


def test_circle_rejects_too_few_participants():
    with pytest.raises(AssignmentError):
        build_circle(["A"])
    with pytest.raises(AssignmentError):
        build_circle([])


def test_circle_rejects_duplicate_tokens():
    with pytest.raises(AssignmentError):
        build_circle(["A", "B", "A"])


def test_shuffle_is_a_permutation():
    items = list(range(20))
    shuffled = shuffle(items, seed=3)
    assert sorted(shuffled) == items
    assert items == list(range(20))


def test_shuffle_deterministic_seed():
    items = ["a", "b", "c", "d", "e"]
    assert shuffle(items, seed=11) == shuffle(items, seed=11)


def test_shuffle_reaches_every_order():
    seen = {tuple(shuffle("abc", seed=seed)) for seed in range(200)}
    assert len(seen) == 6


def test_is_single_cycle_detects_sub_cycles():
    two_pairs = [
        Assignment("A", "B"),
        Assignment("B", "A"),
        Assignment("C", "D"),
        Assignment("D", "C"),
    ]
    assert not is_single_cycle(two_pairs)


def test_is_single_cycle_detects_self_gift_and_duplicates():
    assert not is_single_cycle([Assignment("A", "A"), Assignment("B", "B")])
    assert not is_single_cycle([Assignment("A", "B"), Assignment("B", "B")])
    assert not is_single_cycle([Assignment("A", "B"), Assignment("A", "C")])
    assert not is_single_cycle([])
