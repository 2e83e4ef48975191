"""Drawing buildings, highways and lane areas of an OSM map."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence
from itertools import pairwise

from PIL import Image, ImageDraw

from osmplot.geometry import Line, Point, World, flip_y
from osmplot.osm import OsmMap, parse_file

WHITE = (255, 255, 255)
BLUE = (100, 100, 255)
GREEN = (100, 255, 100)
BACKGROUND = (0, 0, 0)

DEFAULT_HEIGHT = 1500
_FAR_AWAY = 1e37

Pixel = tuple[int, int]
Color = tuple[int, int, int]


class Canvas:
    """An RGBA image that maps world coordinates onto its pixels."""

    def __init__(
        self, world: World, width: int, height: int, background: Color = BACKGROUND
    ) -> None:
        self.world = world
        self.image = Image.new("RGBA", (width, height), (*background, 255))

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def to_pixel(self, x: float, y: float) -> Pixel:
        """Pixel for a world position, with the y axis pointing up."""
        px = int(self.width * x / self.world.width())
        py = flip_y(int(self.height * y / self.world.height()), self.height)
        return px, py

    def _blend(
        self,
        points: Sequence[Pixel],
        color: Color,
        opacity: float,
        paint: Callable[[ImageDraw.ImageDraw, list[Pixel], tuple[int, ...]], None],
    ) -> None:
        pad = 2
        xs = [x for x, _ in points]
        ys = [y for _, y in points]
        left = max(0, min(xs) - pad)
        top = max(0, min(ys) - pad)
        right = min(self.width, max(xs) + pad + 1)
        bottom = min(self.height, max(ys) + pad + 1)
        if left >= right or top >= bottom:
            return
        layer = Image.new("RGBA", (right - left, bottom - top), (0, 0, 0, 0))
        shifted = [(x - left, y - top) for x, y in points]
        paint(ImageDraw.Draw(layer), shifted, (*color, round(255 * opacity)))
        self.image.alpha_composite(layer, dest=(left, top))

    def polygon(self, points: Sequence[Pixel], color: Color, opacity: float) -> None:
        self._blend(
            points, color, opacity, lambda draw, xy, fill: draw.polygon(xy, fill=fill)
        )

    def line(
        self, start: Pixel, end: Pixel, color: Color, opacity: float = 1.0
    ) -> None:
        if opacity >= 1.0:
            ImageDraw.Draw(self.image).line([start, end], fill=(*color, 255))
            return
        self._blend(
            [start, end],
            color,
            opacity,
            lambda draw, xy, fill: draw.line(xy, fill=fill),
        )

    def circle(
        self, center: Pixel, radius: int, color: Color, *, outline: bool = False
    ) -> None:
        x, y = center
        box = [x - radius, y - radius, x + radius, y + radius]
        draw = ImageDraw.Draw(self.image)
        if outline:
            draw.ellipse(box, outline=(*color, 255))
        else:
            draw.ellipse(box, fill=(*color, 255))


def lane_widths(osm_map: OsmMap) -> dict[tuple[str, str], float]:
    """Widest lane for each directed way segment that stays clear of buildings."""
    nodes = osm_map.nodes
    buildings = sorted(osm_map.buildings)
    widths: dict[tuple[str, str], float] = {}
    for src in sorted(osm_map.ways):
        for dst in sorted(osm_map.ways[src]):
            path = Line(nodes[src], nodes[dst])
            min_dist = _FAR_AWAY
            for building in buildings:
                for first, second in pairwise(building):
                    corner = nodes[first]
                    edge = Line(corner, nodes[second])
                    min_dist = min(
                        min_dist,
                        corner.dist_sqr_to_line(path) ** 0.5,
                        path.a.dist_sqr_to_line(edge) ** 0.5,
                        path.b.dist_sqr_to_line(edge) ** 0.5,
                    )
            widths[(src, dst)] = min(osm_map.ways[src][dst], min_dist)
    return widths


def lane_polygon(src: Point, dst: Point, width: float) -> list[Point]:
    """Corners of the lane of ``width`` beside the segment from ``src`` to ``dst``."""
    length = src.dist_sqr(dst) ** 0.5
    if length == 0.0:
        raise ValueError("a lane needs a segment of non-zero length")
    xdf = dst.x - src.x
    ydf = dst.y - src.y
    factor = width / length
    x = src.x + factor * ydf
    y = src.y - factor * xdf
    return [src, Point(x, y), Point(x + xdf, y + ydf), dst]


def plot_buildings(canvas: Canvas, osm_map: OsmMap) -> None:
    radius = int(canvas.height / 3000.0)
    for building in sorted(osm_map.buildings):
        pixels = [
            canvas.to_pixel(osm_map.nodes[ref].x, osm_map.nodes[ref].y)
            for ref in building
        ]
        for previous, current in pairwise(pixels):
            canvas.line(previous, current, WHITE, 0.75)
        for pixel in pixels:
            canvas.circle(pixel, radius, WHITE)
        canvas.polygon(pixels, WHITE, 0.35)


def plot_ways(canvas: Canvas, osm_map: OsmMap) -> None:
    radius = int(canvas.height / 1000.0)
    for src in sorted(osm_map.ways):
        for dst in sorted(osm_map.ways[src]):
            a, b = osm_map.nodes[src], osm_map.nodes[dst]
            start = canvas.to_pixel(a.x, a.y)
            end = canvas.to_pixel(b.x, b.y)
            canvas.line(start, end, BLUE)
            canvas.circle(start, radius, BLUE, outline=True)
            canvas.circle(end, radius, BLUE, outline=True)


def plot_lanes(canvas: Canvas, osm_map: OsmMap) -> None:
    """Shade lanes beside each way, narrowed so they stay off buildings."""
    for (src, dst), width in lane_widths(osm_map).items():
        osm_map.ways[src][dst] = width
        try:
            corners = lane_polygon(osm_map.nodes[src], osm_map.nodes[dst], width)
        except ValueError:
            continue
        canvas.polygon([canvas.to_pixel(p.x, p.y) for p in corners], GREEN, 0.25)


def render(osm_map: OsmMap, height: int = DEFAULT_HEIGHT) -> Image.Image:
    """Draw the whole map into an RGB image ``height`` pixels tall."""
    world = osm_map.world
    scale = world.width() / world.height()
    canvas = Canvas(world, int(height * scale), height)
    plot_buildings(canvas, osm_map)
    plot_ways(canvas, osm_map)
    plot_lanes(canvas, osm_map)
    return canvas.image.convert("RGB")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="osmplot", description="Plot buildings, highways and lanes of an OSM file."
    )
    parser.add_argument("file", help="OSM XML file")
    parser.add_argument("-o", "--output", help="save the image here instead of showing it")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="image height")
    args = parser.parse_args(argv)

    try:
        osm_map = parse_file(args.file)
    except OSError:
        print(f"Error opening file: {args.file}", file=sys.stderr)
        return 1

    image = render(osm_map, args.height)
    if args.output:
        image.save(args.output)
    else:
        image.show(title="Map")
    return 0


if __name__ == "__main__":
    sys.exit(main())