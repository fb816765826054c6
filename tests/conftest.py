from pathlib import Path

import numpy as np
import pytest
from PIL import Image as PILImage


def write_png(path: Path, pixels: np.ndarray) -> Path:
    PILImage.fromarray(np.ascontiguousarray(pixels.astype(np.uint8))).save(path)
    return path


def read_rgb(path: Path) -> np.ndarray:
    with PILImage.open(path) as im:
        return np.asarray(im.convert("RGB"))


@pytest.fixture
def black_png(tmp_path) -> Path:
    """100x100 all-black PNG."""
    return write_png(tmp_path / "black.png", np.zeros((100, 100, 3), dtype=np.uint8))


@pytest.fixture
def garbage_file(tmp_path) -> Path:
    path = tmp_path / "not_an_image.png"
    path.write_bytes(b"definitely not a PNG")
    return path


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    for name in ("IMAGER_KEEP_GOING", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
