import pygame
import pytest

from pilegrid import card_faces, resources
from pilegrid.config import AssetConfig
from pilegrid.resources import (
    AssetLoadError,
    ResourceManager,
    max_card_size,
    slice_sprite_sheet,
)


def build_sheet(cell=(36, 54)):
    width, height = cell
    sheet = pygame.Surface((13 * width, 4 * height), pygame.SRCALPHA)
    for rank in range(13):
        for suit in range(4):
            sheet.fill((rank * 10, suit * 50, 0, 255), pygame.Rect(rank * width, suit * height, width, height))
    return sheet


def close_to(color, expected, tolerance=3):
    return all(abs(a - b) <= tolerance for a, b in zip(tuple(color), expected))


def test_slice_sprite_sheet_maps_ranks_to_columns():
    images = slice_sprite_sheet(build_sheet(), (20, 30))

    assert len(images) == 52
    assert images[(3, 2)].get_size() == (20, 30)
    # smoothscale may shift channels slightly on per-pixel-alpha sheets.
    assert close_to(images[(3, 2)].get_at((10, 15)), (30, 100, 0, 255))
    assert close_to(images[(12, 0)].get_at((10, 15)), (120, 0, 0, 255))
    assert close_to(images[(0, 3)].get_at((10, 15)), (0, 150, 0, 255))


@pytest.mark.parametrize("size", [(13 * 36 + 1, 4 * 54), (13 * 36, 4 * 54 - 2), (13 * 54, 4 * 54)])
def test_slice_sprite_sheet_rejects_bad_dimensions(size):
    with pytest.raises(AssetLoadError):
        slice_sprite_sheet(pygame.Surface(size, pygame.SRCALPHA), (20, 30))


def test_max_card_size_follows_display_height():
    width, height = max_card_size(720)

    assert height == 157
    assert width < height


def test_resolve_is_relative_to_asset_root(tmp_path):
    manager = ResourceManager(AssetConfig(root=tmp_path))

    assert manager.resolve("images/deck.png") == tmp_path / "images" / "deck.png"
    assert manager.resolve(tmp_path / "x.png") == tmp_path / "x.png"
    with pytest.raises(FileNotFoundError):
        manager.require("images/deck.png")


def test_load_card_images_from_sheet(tmp_path):
    (tmp_path / "images").mkdir()
    pygame.image.save(build_sheet(), str(tmp_path / "images" / "deck.png"))
    manager = ResourceManager(AssetConfig(root=tmp_path))

    images = manager.load_card_images(480)

    assert len(images) == 52
    assert images[(0, 0)].get_size() == max_card_size(480)


def test_load_card_images_rejects_unreadable_sheet(tmp_path):
    (tmp_path / "images").mkdir()
    (tmp_path / "images" / "deck.png").write_bytes(b"not an image")
    manager = ResourceManager(AssetConfig(root=tmp_path))

    with pytest.raises(AssetLoadError):
        manager.load_card_images(480)


def test_load_card_images_generates_faces_without_sheet(tmp_path, monkeypatch):
    calls = []

    def fake_faces(size):
        calls.append(size)
        return {"generated": size}

    monkeypatch.setattr(resources, "generate_card_faces", fake_faces)
    manager = ResourceManager(AssetConfig(root=tmp_path))

    assert manager.load_card_images(480) == {"generated": max_card_size(480)}
    assert calls == [max_card_size(480)]


def test_generate_card_faces_covers_the_deck(monkeypatch):
    monkeypatch.setattr(card_faces, "create_card_face", lambda rank, suit, size: (rank, suit, size))

    faces = card_faces.generate_card_faces((20, 30))

    assert len(faces) == 52
    assert faces[(12, 3)] == (12, 3, (20, 30))


def test_create_card_face():
    pygame.font.init()
    face = card_faces.create_card_face(0, 1, (72, 108))

    assert face.get_size() == (72, 108)
    assert face.get_at((0, 0)).a == 0
    assert face.get_at((36, 54)).a == 255
