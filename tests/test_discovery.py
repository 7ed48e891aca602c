import pytest

from optimizer.conversion.discovery import find_images, resolve_folder
from optimizer.conversion.models import InvalidInputError

from conftest import make_image


def test_only_supported_extensions_are_listed(source_folder):
    for name in ["b.png", "a.jpg", "c.JPEG", "d.tif", "e.gif", "f.bmp", "g.TIFF"]:
        (source_folder / name).write_bytes(b"x")
    (source_folder / "notes.txt").write_text("ignore me")
    (source_folder / "photo.webp").write_bytes(b"x")

    names = [p.name for p in find_images(source_folder)]

    assert names == sorted(names)
    assert set(names) == {"a.jpg", "b.png", "c.JPEG", "d.tif", "e.gif", "f.bmp", "g.TIFF"}


def test_subdirectories_are_not_searched(source_folder):
    make_image(source_folder / "top.jpg", size=(10, 10))
    make_image(source_folder / "nested" / "inner.jpg", size=(10, 10))
    (source_folder / "dir.jpg").mkdir()

    assert [p.name for p in find_images(source_folder)] == ["top.jpg"]


def test_ordering_is_deterministic(source_folder):
    for name in ["z.png", "m.png", "a.png"]:
        (source_folder / name).write_bytes(b"x")

    first = find_images(source_folder)
    assert first == find_images(source_folder)
    assert [p.name for p in first] == ["a.png", "m.png", "z.png"]


def test_empty_folder_is_not_an_error(source_folder):
    assert find_images(source_folder) == []


@pytest.mark.parametrize("value", ["", "   ", None])
def test_blank_folder_is_invalid(value):
    with pytest.raises(InvalidInputError) as exc:
        resolve_folder(value)
    assert exc.value.field == "folder"


def test_missing_folder_is_invalid(tmp_path):
    with pytest.raises(InvalidInputError):
        find_images(tmp_path / "missing")


def test_file_path_is_invalid(tmp_path):
    f = tmp_path / "a.jpg"
    f.write_bytes(b"x")
    with pytest.raises(InvalidInputError):
        find_images(f)
