import numpy as np
import pytest

from imager.errors import DecodeError, EncodeError
from imager.models import Image
from imager.repositories.image_repository import ImageRepository
from imager.services.image_service import ImageService

from .conftest import read_rgb, write_png


@pytest.fixture
def repository():
    return ImageRepository(timeout=5)


def test_load_returns_rgb_order(repository, tmp_path):
    src = np.zeros((3, 4, 3), dtype=np.uint8)
    src[..., 0] = 200   # red only
    path = write_png(tmp_path / "red.png", src)

    img = repository.load(path)
    assert img.path == path
    assert img.pixels.shape == (3, 4, 3)
    assert (img.width, img.height) == (4, 3)
    assert (img.pixels == src).all()


def test_load_drops_alpha(repository, tmp_path):
    rgba = np.full((2, 2, 4), 90, dtype=np.uint8)
    path = write_png(tmp_path / "alpha.png", rgba)
    assert repository.load(path).pixels.shape == (2, 2, 3)


def test_load_missing_file(repository, tmp_path):
    with pytest.raises(DecodeError):
        repository.load(tmp_path / "nope.png")


def test_load_garbage(repository, garbage_file):
    with pytest.raises(DecodeError) as exc_info:
        repository.load(garbage_file)
    assert exc_info.value.path == garbage_file


def test_save_round_trip(repository, tmp_path):
    px = np.arange(2 * 5 * 3, dtype=np.uint8).reshape(2, 5, 3)
    repository.save(Image(pixels=px, path=tmp_path / "o.png"))
    assert (read_rgb(tmp_path / "o.png") == px).all()


def test_save_unknown_extension(repository, tmp_path):
    with pytest.raises(EncodeError):
        repository.save(Image(pixels=np.zeros((2, 2, 3), dtype=np.uint8), path=tmp_path / "o.xyz"))


def test_save_without_path(repository):
    with pytest.raises(EncodeError):
        repository.save(Image(pixels=np.zeros((2, 2, 3), dtype=np.uint8)))


def test_image_service_is_an_io_facade_only():
    public = {name for name in vars(ImageService) if not name.startswith("_")}
    assert public == {"create_image", "load", "update_pixels", "save"}
    assert not hasattr(ImageRepository, "retrieve_image_dimensions")
