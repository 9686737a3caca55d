import numpy as np
import pytest
from PIL import Image

from imgcat.codec import composite_over_white, decode_jpeg, decode_png
from imgcat.errors import UnsupportedImage
from tests.conftest import encode_image


def test_png_alpha_composited_over_white():
    img = Image.new("RGBA", (3, 1))
    img.putpixel((0, 0), (0, 0, 0, 0))
    img.putpixel((1, 0), (0, 0, 0, 255))
    img.putpixel((2, 0), (200, 100, 50, 128))
    raster = decode_png(encode_image(img, "PNG"))
    assert (raster.width, raster.height) == (3, 1)
    assert raster.pixels[0].tolist() == [[255, 255, 255], [0, 0, 0], [227, 177, 152]]


def test_png_without_alpha_is_unchanged():
    img = Image.new("RGB", (2, 2), (0, 100, 255))
    raster = decode_png(encode_image(img, "PNG"))
    assert (raster.pixels == [0, 100, 255]).all()


def test_png_palette_mode():
    img = Image.new("P", (2, 1))
    img.putpalette([10, 20, 30, 250, 240, 230])
    img.putpixel((1, 0), 1)
    raster = decode_png(encode_image(img, "PNG"))
    assert raster.pixels[0, 0].tolist() == [10, 20, 30]
    assert raster.pixels[0, 1].tolist() == [250, 240, 230]


def test_png_rows_are_top_to_bottom():
    img = Image.new("RGB", (1, 2), (255, 255, 255))
    img.putpixel((0, 0), (0, 0, 0))
    raster = decode_png(encode_image(img, "PNG"))
    assert raster.pixels[:, 0].tolist() == [[0, 0, 0], [255, 255, 255]]


def test_composite_over_white_formula():
    rgba = np.array([[[255, 255, 255, 255], [100, 100, 100, 64]]], dtype=np.uint8)
    out = composite_over_white(rgba)
    assert out.dtype == np.uint8
    # alpha 64/256 = 0.25: 0.25 * 100 + 0.75 * 255 = 216.25
    assert out.tolist() == [[[255, 255, 255], [216, 216, 216]]]


def test_jpeg_decodes_rgb():
    img = Image.new("RGB", (16, 8), (200, 30, 30))
    raster = decode_jpeg(encode_image(img, "JPEG", quality=95))
    assert (raster.width, raster.height) == (16, 8)
    np.testing.assert_allclose(raster.pixels.astype(int), np.broadcast_to([200, 30, 30], (8, 16, 3)), atol=8)


def test_greyscale_jpeg_expands_to_rgb():
    img = Image.new("L", (8, 8), 128)
    raster = decode_jpeg(encode_image(img, "JPEG"))
    assert raster.pixels.shape == (8, 8, 3)
    assert (raster.pixels[..., 0] == raster.pixels[..., 1]).all()


@pytest.mark.parametrize("decode", [decode_jpeg, decode_png])
def test_garbage_is_rejected(decode):
    with pytest.raises(UnsupportedImage) as info:
        decode(b"definitely not an image")
    assert info.value.exit_code == 5


def test_png_bytes_are_not_jpeg():
    data = encode_image(Image.new("RGB", (2, 2)), "PNG")
    with pytest.raises(UnsupportedImage, match="JPEG"):
        decode_jpeg(data)


def test_jpeg_bytes_are_not_png():
    data = encode_image(Image.new("RGB", (2, 2)), "JPEG")
    with pytest.raises(UnsupportedImage, match="PNG"):
        decode_png(data)
