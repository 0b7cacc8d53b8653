from pathlib import Path as FsPath

import pytest
from PIL import Image

from src.diffgrowth.colors import BLACK, WHITE, Color, hue_ramp
from src.diffgrowth.export_svg import SvgCanvas
from src.diffgrowth.raster import RasterCanvas, save_gif


def test_color_conversions() -> None:
    assert WHITE.to_hex() == "#ffffff"
    assert BLACK.to_rgba() == (0, 0, 0, 255)
    assert Color(0, 255, 255).to_hex() == "#ff0000"
    assert BLACK.with_alpha(300).a == 255.0
    assert BLACK.with_alpha(-5).opacity == 0.0


def test_hue_ramp_walks_hue() -> None:
    assert hue_ramp(0, 5).h == 0.0
    assert hue_ramp(4, 5).h == pytest.approx(255.0)
    assert hue_ramp(0, 1).s == 255


def test_svg_canvas_shapes() -> None:
    canvas = SvgCanvas(200, 100)
    canvas.background(WHITE)
    canvas.polyline([(0, 0), (10, 0), (10, 10)], stroke=BLACK, closed=True)
    canvas.polyline([(0, 0), (5, 5)], stroke=BLACK.with_alpha(51))
    canvas.line((0, 0), (1, 1), stroke=BLACK)
    canvas.circle((5, 5), 2.0, fill=BLACK)
    text = canvas.tostring()
    assert text.count("<rect") == 1
    assert "<polygon" in text
    assert "<polyline" in text
    assert 'stroke-opacity="0.2"' in text
    assert "<circle" in text
    assert 'viewBox="0.0 0.0 200.0 100.0"' in text


def test_svg_background_starts_new_drawing() -> None:
    canvas = SvgCanvas(50, 50)
    canvas.polyline([(0, 0), (5, 5)], stroke=BLACK)
    canvas.background(BLACK)
    assert "<polyline" not in canvas.tostring()


def test_svg_save(tmp_path: FsPath) -> None:
    canvas = SvgCanvas(20, 20, canvas_size=("20mm", "20mm"))
    canvas.polyline([(0, 0), (5, 5)], stroke=BLACK)
    out = tmp_path / "out.svg"
    canvas.save(str(out))
    assert 'width="20mm"' in out.read_text(encoding="utf-8")


def test_raster_line_and_blend() -> None:
    canvas = RasterCanvas(20, 20)
    canvas.background(WHITE)
    canvas.line((0, 10), (19, 10), stroke=BLACK)
    assert canvas.image.getpixel((10, 10)) == (0, 0, 0)
    assert canvas.image.getpixel((10, 2)) == (255, 255, 255)

    canvas.background(WHITE)
    canvas.polyline([(0, 5), (19, 5)], stroke=BLACK.with_alpha(128))
    r, g, b = canvas.image.getpixel((10, 5))
    assert 100 < r < 160 and r == g == b


def test_raster_closed_fill_and_scale() -> None:
    canvas = RasterCanvas(20, 20, scale=2.0)
    assert canvas.image.size == (40, 40)
    canvas.background(WHITE)
    canvas.polyline(
        [(2, 2), (18, 2), (18, 18), (2, 18)], stroke=BLACK, fill=BLACK, closed=True
    )
    assert canvas.image.getpixel((20, 20)) == (0, 0, 0)
    snap = canvas.snapshot()
    canvas.background(WHITE)
    assert snap.getpixel((20, 20)) == (0, 0, 0)


def test_save_gif(tmp_path: FsPath) -> None:
    frames = []
    canvas = RasterCanvas(10, 10)
    for shade in (0, 128, 255):
        canvas.background(Color(0, 0, shade))
        frames.append(canvas.snapshot())
    out = save_gif(frames, tmp_path / "anim.gif", fps=10.0)
    with Image.open(out) as gif:
        assert gif.n_frames == 3

    with pytest.raises(ValueError):
        save_gif([], tmp_path / "none.gif")
    with pytest.raises(ValueError):
        save_gif(frames, tmp_path / "bad.gif", fps=0.0)
