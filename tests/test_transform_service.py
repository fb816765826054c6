import numpy as np
import pytest

from imager.errors import TransformError
from imager.models import Blur, Brighten, Crop, Grayscale, Image, Invert, Rotate, TransformRequest
from imager.services.transform_service import TransformService


@pytest.fixture
def service():
    return TransformService()


@pytest.fixture
def gradient():
    """4 wide, 2 tall, every pixel distinct."""
    px = np.arange(4 * 2 * 3, dtype=np.uint8).reshape(2, 4, 3) * 10
    return px


def test_invert_black_is_white(service):
    black = np.zeros((5, 5, 3), dtype=np.uint8)
    assert (service.invert(black) == 255).all()


def test_invert_twice_is_identity(service, gradient):
    assert (service.invert(service.invert(gradient)) == gradient).all()


def test_brighten_saturates(service):
    px = np.array([[[0, 100, 220]]], dtype=np.uint8)
    out = service.brighten(px, 50)
    assert out.dtype == np.uint8
    assert out.tolist() == [[[50, 150, 255]]]


def test_brighten_negative_saturates_at_zero(service):
    px = np.array([[[10, 100, 255]]], dtype=np.uint8)
    assert service.brighten(px, -60).tolist() == [[[0, 40, 195]]]


def test_brighten_huge_amount(service):
    px = np.array([[[10, 100, 255]]], dtype=np.uint8)
    assert service.brighten(px, 10_000).tolist() == [[[255, 255, 255]]]


def test_crop_inside(service, gradient):
    out = service.crop(gradient, 1, 0, 2, 2)
    assert out.shape == (2, 2, 3)
    assert (out == gradient[0:2, 1:3]).all()


def test_crop_is_clipped_to_bounds(service, gradient):
    out = service.crop(gradient, 2, 1, 100, 100)
    assert out.shape == (1, 2, 3)
    assert (out == gradient[1:2, 2:4]).all()


def test_crop_outside_image_fails(service, gradient):
    with pytest.raises(TransformError):
        service.crop(gradient, 10, 0, 2, 2)
    with pytest.raises(TransformError):
        service.crop(gradient, 0, 0, 0, 2)


def test_rotate_90_is_clockwise(service, gradient):
    out = service.rotate(gradient, 90)
    assert out.shape == (4, 2, 3)
    # original top-left ends up top-right, bottom-left ends up top-left
    assert (out[0, 1] == gradient[0, 0]).all()
    assert (out[0, 0] == gradient[1, 0]).all()


def test_rotate_180_and_270(service, gradient):
    assert (service.rotate(gradient, 180) == gradient[::-1, ::-1]).all()
    three_quarters = service.rotate(gradient, 270)
    assert (service.rotate(three_quarters, 90) == gradient).all()


def test_rotate_rejects_other_angles(service, gradient):
    with pytest.raises(TransformError):
        service.rotate(gradient, 45)


def test_grayscale_equal_channels(service, gradient):
    out = service.grayscale(gradient)
    assert out.shape == gradient.shape
    assert (out[:, :, 0] == out[:, :, 1]).all()
    assert (out[:, :, 1] == out[:, :, 2]).all()


def test_blur_keeps_uniform_image(service):
    px = np.full((20, 30, 3), 77, dtype=np.uint8)
    out = service.blur(px, 2.5)
    assert out.shape == px.shape
    assert (out == 77).all()


def test_blur_smooths_an_edge(service):
    px = np.zeros((20, 20, 3), dtype=np.uint8)
    px[:, 10:] = 255
    out = service.blur(px, 3.0)
    assert 0 < out[10, 9, 0] < 255
    assert 0 < out[10, 10, 0] < 255


def test_blur_non_positive_sigma_still_blurs(service):
    px = np.zeros((9, 9, 3), dtype=np.uint8)
    px[4, 4] = 255
    out = service.blur(px, 0.0)
    assert out[4, 4, 0] < 255


def test_blur_huge_sigma_is_a_transform_error(service):
    # the kernel size OpenCV derives from sigma no longer fits in an int
    px = np.zeros((9, 9, 3), dtype=np.uint8)
    with pytest.raises(TransformError, match="sigma"):
        service.blur(px, 1e12)


def test_apply_crops_before_rotating(service, gradient):
    img = Image(pixels=gradient.copy())
    # built rotate-first on purpose
    request = TransformRequest.of([Rotate(90), Crop(0, 0, 1, 2)])
    service.apply(img, request)
    # crop 1x2 column, then rotate → 2 wide, 1 tall
    assert img.pixels.shape == (1, 2, 3)
    assert (img.pixels[0, 0] == gradient[1, 0]).all()
    assert (img.pixels[0, 1] == gradient[0, 0]).all()


def test_apply_full_chain(service):
    img = Image(pixels=np.zeros((6, 8, 3), dtype=np.uint8))
    request = TransformRequest.of(
        [Grayscale(), Invert(), Rotate(270), Crop(0, 0, 4, 6), Brighten(40), Blur(1.0)]
    )
    service.apply(img, request)
    # brighten 40 → crop 4x6 → rotate → invert gives 215 everywhere
    assert img.pixels.shape == (4, 6, 3)
    assert (img.pixels == 215).all()


def test_apply_empty_request_leaves_pixels(service, gradient):
    img = Image(pixels=gradient.copy())
    service.apply(img, TransformRequest())
    assert (img.pixels == gradient).all()
