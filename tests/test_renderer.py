import numpy as np
import pytest

from mandelbrot.kernel import Complex, stability
from mandelbrot.palette import color_for
from mandelbrot.renderer import RenderParameters, TileTask, render_tile
from mandelbrot.tiles import Tile


def make_params(**overrides):
    values = dict(
        width=12, height=10, tile_edge=5,
        viewport_width=3.0, viewport_height=2.5, zoom=1.0,
        anchor_re=-2.1, anchor_im=-1.25, max_iterations=40,
    )
    values.update(overrides)
    return RenderParameters(**values)


def test_anchor_maps_to_top_left_pixel():
    params = make_params()
    assert params.pixel_to_complex(0, 0) == Complex(-2.1, -1.25)


def test_viewport_mapping_applies_zoom():
    params = make_params(width=4, height=4, viewport_width=4.0, viewport_height=8.0, zoom=2.0, anchor_re=0.0, anchor_im=0.0)

    assert params.pixel_to_complex(2, 1) == Complex(1.0, 1.0)
    assert params.pixel_to_complex(3, 3) == Complex(1.5, 3.0)


def test_plane_grid_matches_pixel_to_complex():
    params = make_params()
    tile = Tile(start_x=5, end_x=10, start_y=5, end_y=10)

    c_re, c_im = params.plane_grid(tile)

    assert c_re.shape == (5, 5)
    for row in range(tile.height):
        for col in range(tile.width):
            point = params.pixel_to_complex(tile.start_x + col, tile.start_y + row)
            assert c_re[row, col] == point.re
            assert c_im[row, col] == point.im


def test_render_tile_matches_scalar_rule():
    params = make_params()
    tile = Tile(start_x=0, end_x=12, start_y=5, end_y=10)

    buffer = render_tile(TileTask(tile=tile, params=params))

    assert buffer.shape == (5, 12, 3)
    assert buffer.dtype == np.uint8
    for row in range(tile.height):
        for col in range(tile.width):
            point = params.pixel_to_complex(tile.start_x + col, tile.start_y + row)
            expected = color_for(stability(point, params.max_iterations, params.escape_radius), params.max_iterations)
            assert tuple(int(v) for v in buffer[row, col]) == expected


@pytest.mark.parametrize(
    "overrides",
    [
        dict(width=0),
        dict(height=-2),
        dict(tile_edge=0),
        dict(zoom=0.0),
        dict(max_iterations=0),
        dict(escape_radius=0.0),
        dict(anchor_re=float("nan")),
        dict(anchor_im=float("-inf")),
        dict(viewport_width=float("inf")),
        dict(viewport_height=float("nan")),
        dict(zoom=float("nan")),
        dict(escape_radius=float("inf")),
        dict(escape_radius=float("nan")),
    ],
)
def test_invalid_parameters(overrides):
    with pytest.raises(ValueError):
        make_params(**overrides)
