from pathlib import Path

import pytest
from PIL import Image

from optimizer import batch


def make_image(path: Path, size=(1600, 1200), mode="RGB", color=(200, 80, 40), fmt=None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.new(mode, size, color)
    img.save(path, format=fmt)
    return path


@pytest.fixture
def source_folder(tmp_path):
    folder = tmp_path / "fotos"
    folder.mkdir()
    return folder


@pytest.fixture(autouse=True)
def clear_batches(monkeypatch):
    monkeypatch.setattr(batch, "_batches", {})
