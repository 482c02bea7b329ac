import random
from collections import Counter

import pytest

from pilegrid.dealing import HOLE_CELLS, deal, new_game, shuffle
from pilegrid.models import PileGrid, build_deck


class RecordingRandom:
    def __init__(self):
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return 0


def test_shuffle_draws_from_shrinking_prefix():
    rng = RecordingRandom()
    items = [0, 1, 2, 3, 4]

    result = shuffle(items, rng)

    assert result is items
    assert rng.calls == [5, 4, 3, 2]
    assert items == [1, 2, 3, 4, 0]


def test_shuffle_handles_short_sequences():
    assert shuffle([]) == []
    assert shuffle([7]) == [7]


def test_shuffle_is_a_permutation():
    items = list(range(52))
    shuffle(items, random.Random(3))

    assert sorted(items) == list(range(52))


def test_shuffle_is_unbiased():
    rng = random.Random(1234)
    counts = Counter(tuple(shuffle(["a", "b", "c"], rng)) for _ in range(6000))

    assert len(counts) == 6
    assert all(800 < count < 1200 for count in counts.values())


def test_deal_distribution():
    grid = PileGrid()
    deal(build_deck(), grid)

    for col, row, pile in grid.cells():
        if row == 0:
            assert pile == []
        elif (col, row) in HOLE_CELLS:
            assert len(pile) == 2
        else:
            assert len(pile) == 3


def test_deal_draws_from_end_of_deck():
    deck = build_deck()
    expected = list(reversed(deck[-3:]))
    grid = PileGrid()

    deal(deck, grid)

    assert deck == []
    assert grid.cell_at(0, 1) == expected


def test_deal_rejects_wrong_deck_size():
    grid = PileGrid()
    deck = build_deck()[:51]

    with pytest.raises(ValueError):
        deal(deck, grid)
    assert grid.card_count() == 0
    assert len(deck) == 51


@pytest.mark.parametrize("seed", range(5))
def test_new_game_holds_every_card_once(seed):
    grid = new_game(build_deck(), random.Random(seed))
    cards = grid.all_cards()

    assert len(cards) == 52
    assert len({card.key for card in cards}) == 52
    assert grid.cell_at(0, 0) == []
    assert grid.cell_at(5, 0) == []


def test_seeded_games_are_reproducible():
    first = new_game(build_deck(), random.Random(99))
    second = new_game(build_deck(), random.Random(99))

    assert [c.key for c in first.all_cards()] == [c.key for c in second.all_cards()]
