import random

import pytest

from bracketry.constants import SEEDING_MANUAL, SEEDING_RANDOM, SEEDING_RANKED
from bracketry.exceptions import InvalidInputException
from bracketry.models.participant import Participant
from bracketry.pairing.seeding import (
    compute_seed_order,
    compute_slot_for_seed,
    is_power_of_two,
    next_power_of_two,
    order_participants,
    place_in_slots,
    rounds_for,
)


def test_seed_order_for_eight():
    assert compute_seed_order(8) == [1, 8, 4, 5, 2, 7, 3, 6]


def test_seed_order_small_brackets():
    assert compute_seed_order(1) == [1]
    assert compute_seed_order(2) == [1, 2]
    assert compute_seed_order(4) == [1, 4, 2, 3]


def test_seed_order_rejects_non_power_of_two():
    with pytest.raises(InvalidInputException):
        compute_seed_order(6)


@pytest.mark.parametrize("size", [2, 4, 8, 16, 32, 64])
def test_seed_order_is_a_balanced_permutation(size):
    order = compute_seed_order(size)
    assert sorted(order) == list(range(1, size + 1))
    # first-round opponents always add up to size + 1
    for slot in range(0, size, 2):
        assert order[slot] + order[slot + 1] == size + 1
    # the two top seeds can only meet in the final
    slots = compute_slot_for_seed(size)
    assert (slots[0] < size // 2) != (slots[1] < size // 2)


def test_slot_for_seed_inverts_seed_order():
    assert compute_slot_for_seed(8) == [0, 4, 6, 2, 3, 7, 5, 1]


def test_power_of_two_helpers():
    assert is_power_of_two(1)
    assert is_power_of_two(16)
    assert not is_power_of_two(0)
    assert not is_power_of_two(12)
    assert next_power_of_two(0) == 1
    assert next_power_of_two(5) == 8
    assert next_power_of_two(8) == 8
    assert [rounds_for(n) for n in (1, 2, 3, 5, 8, 9)] == [0, 1, 2, 3, 3, 4]


def test_order_participants_sorts_by_seed_and_keeps_unseeded_last():
    players = [
        Participant(id="a", name="A"),
        Participant(id="b", name="B", seed=2),
        Participant(id="c", name="C"),
        Participant(id="d", name="D", seed=1),
    ]
    for mode in (SEEDING_MANUAL, SEEDING_RANKED):
        ordered = order_participants(players, mode)
        assert [p.id for p in ordered] == ["d", "b", "a", "c"]


def test_random_ordering_is_reproducible_with_same_rng(make_players):
    players = make_players(10)
    first = order_participants(players, SEEDING_RANDOM, random.Random(5))
    second = order_participants(players, SEEDING_RANDOM, random.Random(5))
    assert [p.id for p in first] == [p.id for p in second]
    assert sorted(p.id for p in first) == sorted(p.id for p in players)


def test_place_in_slots_leaves_byes_for_missing_seeds(make_players):
    slots = place_in_slots(make_players(5), 8)
    assert [p.id if p else None for p in slots] == [
        "p1",
        None,
        "p4",
        "p5",
        "p2",
        None,
        "p3",
        None,
    ]
