import pytest

from src.diffgrowth.colors import Color


class RecordingCanvas:
    """Canvas double that keeps every draw call."""

    def __init__(self, width: int = 100, height: int = 100) -> None:
        self.width = width
        self.height = height
        self.calls: list[tuple[str, dict]] = []

    def background(self, color: Color) -> None:
        self.calls.append(("background", {"color": color}))

    def polyline(self, points, *, stroke, fill=None, closed=False, stroke_width=1.0) -> None:
        self.calls.append(
            ("polyline", {"points": list(points), "stroke": stroke, "fill": fill, "closed": closed})
        )

    def line(self, p0, p1, *, stroke, stroke_width=1.0) -> None:
        self.calls.append(("line", {"p0": p0, "p1": p1, "stroke": stroke}))

    def circle(self, center, radius, *, fill) -> None:
        self.calls.append(("circle", {"center": center, "radius": radius, "fill": fill}))

    def named(self, name: str) -> list[dict]:
        return [kw for call, kw in self.calls if call == name]


@pytest.fixture
def make_canvas() -> type[RecordingCanvas]:
    return RecordingCanvas
