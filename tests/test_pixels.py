import numpy as np
import pytest
from PIL import Image

from picture_ascii.errors import InvalidImageError
from picture_ascii.pixels import PixelBuffer, as_pixel_buffer


def test_from_image_stores_bgr(solid):
    buf = PixelBuffer.from_image(solid(2, 1, (10, 20, 30)))
    assert buf.width == 2 and buf.height == 1
    assert buf.stride == 6
    assert buf.data == bytes([30, 20, 10, 30, 20, 10])


def test_from_array_rgb_and_bgr_orders():
    arr = np.array([[[1, 2, 3], [4, 5, 6]]], dtype=np.uint8)
    assert PixelBuffer.from_array(arr).data == bytes([3, 2, 1, 6, 5, 4])
    assert PixelBuffer.from_array(arr, order="BGR").data == bytes([1, 2, 3, 4, 5, 6])


def test_from_array_matches_from_image(noisy):
    arr = noisy(5, 4)
    assert PixelBuffer.from_array(arr) == PixelBuffer.from_image(Image.fromarray(arr, "RGB"))


def test_greyscale_image_is_expanded():
    buf = PixelBuffer.from_image(Image.new("L", (3, 2), 77))
    assert buf.data == bytes([77]) * 18


def test_transparent_pixels_composite_over_black():
    img = Image.new("RGBA", (2, 1), (200, 100, 50, 0))
    img.putpixel((1, 0), (200, 100, 50, 255))
    buf = PixelBuffer.from_image(img)
    assert buf.data == bytes([0, 0, 0, 50, 100, 200])


def test_view_is_read_only_and_shaped(noisy):
    buf = PixelBuffer.from_array(noisy(4, 3))
    view = buf.view()
    assert view.shape == (3, 4, 3)
    assert not view.flags.writeable
    with pytest.raises(ValueError):
        view[0, 0, 0] = 1


def test_length_mismatch_rejected():
    with pytest.raises(InvalidImageError):
        PixelBuffer(b"\x00" * 5, 1, 2)


def test_negative_dimensions_rejected():
    with pytest.raises(InvalidImageError):
        PixelBuffer(b"", -1, 0)


@pytest.mark.parametrize("arr", [
    np.zeros((2, 2), dtype=np.uint8),
    np.zeros((2, 2, 4), dtype=np.uint8),
    np.zeros((2, 2, 3), dtype=np.float32),
])
def test_bad_arrays_rejected(arr):
    with pytest.raises(InvalidImageError):
        PixelBuffer.from_array(arr)


def test_bad_channel_order_rejected():
    with pytest.raises(InvalidImageError):
        PixelBuffer.from_array(np.zeros((1, 1, 3), dtype=np.uint8), order="GRB")


def test_as_pixel_buffer_dispatch(solid, noisy):
    buf = PixelBuffer(b"\x00\x00\x00", 1, 1)
    assert as_pixel_buffer(buf) is buf
    assert as_pixel_buffer(solid(1, 1, (0, 0, 0))) == buf
    assert as_pixel_buffer(np.zeros((1, 1, 3), dtype=np.uint8)) == buf
    with pytest.raises(InvalidImageError):
        as_pixel_buffer("picture.png")
