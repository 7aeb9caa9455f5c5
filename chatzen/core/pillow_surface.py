from __future__ import annotations

from PIL import Image, ImageDraw

from .renderer import Color, GradientStops, interpolate_stops


def _rgba(color: Color) -> tuple[int, int, int, int]:
    r, g, b, a = color
    return int(r), int(g), int(b), max(0, min(255, int(round(a * 255))))


class PillowSurface:
    """
    Off-screen drawing surface backed by a Pillow image. The radial glow is
    approximated with concentric rings, painted outermost first.
    """

    def __init__(self, width: int, height: int) -> None:
        self._image = Image.new("RGBA", (int(width), int(height)), (0, 0, 0, 255))

    @property
    def width(self) -> float:
        return float(self._image.width)

    @property
    def height(self) -> float:
        return float(self._image.height)

    def resize(self, width: int, height: int) -> None:
        self._image = Image.new("RGBA", (int(width), int(height)), (0, 0, 0, 255))

    def clear(self, color: Color) -> None:
        draw = ImageDraw.Draw(self._image)
        draw.rectangle((0, 0, self._image.width, self._image.height), fill=_rgba(color))

    def fill_radial_gradient_circle(self, x: float, y: float, radius: float, stops: GradientStops) -> None:
        if radius <= 0:
            return
        overlay = Image.new("RGBA", self._image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        rings = max(8, int(radius))
        for i in range(rings, 0, -1):
            r = radius * i / rings
            draw.ellipse((x - r, y - r, x + r, y + r), fill=_rgba(interpolate_stops(stops, r / radius)))
        self._image = Image.alpha_composite(self._image, overlay)

    def fill_circle(self, x: float, y: float, radius: float, color: Color) -> None:
        overlay = Image.new("RGBA", self._image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        draw.ellipse((x - radius, y - radius, x + radius, y + radius), fill=_rgba(color))
        self._image = Image.alpha_composite(self._image, overlay)

    def to_image(self) -> Image.Image:
        return self._image.convert("RGB")
