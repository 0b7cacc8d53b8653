from pathlib import Path as FsPath

import numpy as np
import pytest
from shapely.geometry import Polygon

from src.diffgrowth.bounds import Bounds
from src.diffgrowth.colors import BLACK
from src.diffgrowth.path import path_from_points

SQUARE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]


def test_contains_is_strict_interior() -> None:
    bounds = Bounds(SQUARE)
    assert bounds.contains((5.0, 5.0))
    assert not bounds.contains((15.0, 5.0))
    assert not bounds.contains((10.0, 5.0))


@pytest.mark.parametrize(
    "vertices",
    [
        [(0.0, 0.0), (1.0, 1.0)],
        [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0)],
        [(0.0, 0.0), (np.nan, 0.0), (1.0, 1.0)],
    ],
)
def test_rejects_bad_vertices(vertices) -> None:
    with pytest.raises(ValueError):
        Bounds(vertices)


def test_rejects_degenerate_polygon() -> None:
    with pytest.raises(ValueError):
        Bounds([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)])


def test_self_intersecting_polygon_is_repaired() -> None:
    bounds = Bounds([(0.0, 0.0), (10.0, 10.0), (10.0, 0.0), (0.0, 10.0)])
    assert bounds.polygon.is_valid
    assert bounds.polygon.area > 0


def test_vertices_are_read_only() -> None:
    bounds = Bounds(SQUARE)
    with pytest.raises(ValueError):
        bounds.vertices[0, 0] = 3.0


def test_from_path_uses_node_positions() -> None:
    path = path_from_points(SQUARE, {}, is_closed=True)
    bounds = Bounds.from_path(path)
    np.testing.assert_allclose(bounds.vertices, np.array(SQUARE))
    assert bounds.contains((2.0, 8.0))


def test_from_svg_flattens_first_path(tmp_path: FsPath) -> None:
    svg = tmp_path / "outline.svg"
    svg.write_text(
        '<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200">'
        '<path d="M 0 0 L 100 0 L 100 100 L 0 100 Z"/></svg>',
        encoding="utf-8",
    )
    bounds = Bounds.from_svg(str(svg), flat_tol=5.0)
    assert bounds.vertices.shape[1] == 2
    assert bounds.contains((50.0, 50.0))
    assert not bounds.contains((150.0, 50.0))


def test_from_svg_without_path_raises(tmp_path: FsPath) -> None:
    svg = tmp_path / "empty.svg"
    svg.write_text(
        '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10">'
        '<g id="empty"></g></svg>',
        encoding="utf-8",
    )
    with pytest.raises(ValueError):
        Bounds.from_svg(str(svg))


def test_repaired_outline_is_what_gets_drawn(make_canvas) -> None:
    bounds = Bounds([(0.0, 0.0), (10.0, 10.0), (10.0, 0.0), (0.0, 10.0)])
    assert Polygon(bounds.vertices).equals(bounds.polygon)

    canvas = make_canvas()
    bounds.draw(canvas, BLACK)
    (poly,) = canvas.named("polyline")
    assert poly["closed"]
    np.testing.assert_allclose(np.array(poly["points"]), bounds.vertices)
