import numpy as np
import PIL.Image
import pytest

from mandelbrot.encoder import EncoderSettings, output_filename, write_png
from mandelbrot.errors import EncoderError


def gradient(width, height):
    canvas = np.zeros((height, width, 3), dtype=np.uint8)
    canvas[..., 0] = np.arange(width, dtype=np.uint8)[None, :]
    canvas[..., 1] = np.arange(height, dtype=np.uint8)[:, None]
    canvas[..., 2] = 200
    return canvas


def test_output_filename():
    assert output_filename(1000, 750) == "mandelbrot-1000x750.png"


@pytest.mark.parametrize("strategy", ["default", "filtered", "huffman", "rle", "fixed"])
def test_png_is_lossless(tmp_path, strategy):
    canvas = gradient(17, 9)

    path = write_png(canvas, tmp_path / "out" / "image.png", EncoderSettings(compress_level=9, strategy=strategy))

    with PIL.Image.open(path) as image:
        assert image.format == "PNG"
        assert image.mode == "RGB"
        assert image.size == (17, 9)
        assert np.array_equal(np.asarray(image), canvas)


def test_non_rgb_canvas_is_rejected(tmp_path):
    with pytest.raises(EncoderError):
        write_png(np.zeros((4, 4), dtype=np.uint8), tmp_path / "gray.png")
    with pytest.raises(EncoderError):
        write_png(np.zeros((4, 4, 3), dtype=np.float32), tmp_path / "float.png")


def test_unwritable_destination(tmp_path):
    target = tmp_path / "taken.png"
    target.mkdir()

    with pytest.raises(EncoderError):
        write_png(gradient(4, 4), target)
    assert target.is_dir()


@pytest.mark.parametrize("kwargs", [dict(compress_level=10), dict(compress_level=-1), dict(strategy="best")])
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        EncoderSettings(**kwargs)
