import pytest

from pilegrid.models import Card, PileGrid, accept_any, build_deck


def test_build_deck_has_every_card_once():
    deck = build_deck()

    assert len(deck) == 52
    assert len({card.key for card in deck}) == 52


def test_build_deck_attaches_images():
    images = {(12, 3): "king-of-clubs"}
    deck = build_deck(images)

    king = next(card for card in deck if card.key == (12, 3))
    assert king.image == "king-of-clubs"
    assert king.label == "K♣"
    assert all(card.image is None for card in deck if card is not king)


def test_cards_compare_by_identity():
    assert Card(0, 0) != Card(0, 0)


def test_save_position():
    card = Card(1, 2)
    card.set_position(10, 20)
    card.save_position()
    card.set_position(30, 40)

    assert card.return_position == (10.0, 20.0)
    assert card.position == (30.0, 40.0)


def test_reserved_cells(grid):
    assert grid.is_reserved(0, 0)
    assert grid.is_reserved(5, 0)
    assert not grid.is_reserved(1, 0)
    assert not grid.is_reserved(0, 1)


def test_push_and_pop_follow_stack_order(grid, make_card):
    first, second = make_card(0, 0), make_card(1, 1)
    grid.push_top(2, 1, first)
    grid.push_top(2, 1, second)

    assert grid.cell_at(2, 1) == [first, second]
    assert grid.top(2, 1) is second
    assert grid.pop_top(2, 1) is second
    assert grid.pop_top(2, 1) is first
    assert grid.pop_top(2, 1) is None
    assert grid.top(2, 1) is None


def test_push_on_reserved_cell_fails(grid, make_card):
    with pytest.raises(ValueError):
        grid.push_top(5, 0, make_card(0, 0))
    assert grid.card_count() == 0


@pytest.mark.parametrize("col, row", [(-1, 0), (6, 0), (0, 4), (3, -1)])
def test_cell_at_is_bounds_checked(grid, col, row):
    assert not grid.in_bounds(col, row)
    with pytest.raises(IndexError):
        grid.cell_at(col, row)


def test_cells_iterate_row_major():
    grid = PileGrid()
    coords = [(col, row) for col, row, _ in grid.cells()]

    assert len(coords) == 24
    assert coords[:7] == [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0), (5, 0), (0, 1)]


def test_accept_any(make_card):
    assert accept_any(make_card(0, 0), None)
    assert accept_any(make_card(0, 0), make_card(5, 1))
