import numpy as np
import pytest

from mandelbrot.renderer import RenderParameters, build_tasks
from mandelbrot.tiles import Tile, partition, tile_count


@pytest.mark.parametrize(
    "width, height, tile_edge",
    [(4, 4, 2), (5, 3, 2), (1, 1, 1), (7, 11, 3), (10, 10, 100), (100, 60, 16), (9, 9, 9)],
)
def test_tiles_exactly_partition_the_canvas(width, height, tile_edge):
    tiles = list(partition(width, height, tile_edge))
    coverage = np.zeros((height, width), dtype=np.int64)

    for tile in tiles:
        assert 0 <= tile.start_x < tile.end_x <= width
        assert 0 <= tile.start_y < tile.end_y <= height
        assert tile.width <= tile_edge and tile.height <= tile_edge
        coverage[tile.start_y:tile.end_y, tile.start_x:tile.end_x] += 1

    assert (coverage == 1).all()
    assert len(tiles) == tile_count(width, height, tile_edge)


def test_tile_count_rounds_up():
    assert tile_count(4, 4, 2) == 4
    assert tile_count(5, 4, 2) == 6
    assert tile_count(1000, 1000, 1000) == 1
    assert tile_count(1001, 1000, 1000) == 2


def test_last_row_and_column_are_clipped():
    tiles = list(partition(5, 3, 2))

    assert tiles[-1] == Tile(start_x=4, end_x=5, start_y=2, end_y=3)
    assert tiles[-1].width == 1
    assert tiles[-1].height == 1


def test_partition_is_row_major():
    origins = [tile.origin for tile in partition(4, 4, 2)]
    assert origins == [(0, 0), (2, 0), (0, 2), (2, 2)]


@pytest.mark.parametrize("width, height, tile_edge", [(0, 4, 2), (4, -1, 2), (4, 4, 0)])
def test_invalid_dimensions(width, height, tile_edge):
    with pytest.raises(ValueError):
        list(partition(width, height, tile_edge))
    with pytest.raises(ValueError):
        tile_count(width, height, tile_edge)


def test_build_tasks_shares_parameters():
    params = RenderParameters(
        width=5, height=3, tile_edge=2,
        viewport_width=4.0, viewport_height=4.0, zoom=1.0,
        anchor_re=-2.0, anchor_im=-2.0, max_iterations=10,
    )

    tasks = build_tasks(params)

    assert [task.tile for task in tasks] == list(partition(5, 3, 2))
    assert all(task.params is params for task in tasks)
