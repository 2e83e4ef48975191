# osmplot

osmplot reads an OpenStreetMap XML export and draws a map of it on a black
background: buildings as white outlines with a light fill, highways as blue
lines, and a green lane along each road segment. A lane is as wide as the
configured lane width (5 m by default). Where a building stands closer to the
road than that, the lane is narrowed so it stops short of the building.

Coordinates are projected to UTM. The image is laid out in metres relative to
the `<bounds>` of the file, and its width keeps the map's aspect ratio.

## Installation

```
pip install .
```

## Command line

```
osmplot map.osm
```

This parses `map.osm`, renders the map and opens it in the system's image
viewer. Options:

- `-o FILE`, `--output FILE` — save the image to `FILE` instead of showing it
  (the format follows the file extension, e.g. `map.png`).
- `--height N` — image height in pixels (default 1500).

If the file cannot be opened, `Error opening file: <name>` is printed to
standard error and the command exits with status 1.

## Library use

```python
from osmplot.osm import parse_file
from osmplot.render import render, lane_widths

osm_map = parse_file("map.osm", 5.0)
widths = lane_widths(osm_map)         # {(src_id, dst_id): width in metres}
image = render(osm_map, 1500)         # a Pillow RGB image
image.save("map.png")
```

`parse_file` returns an `OsmMap` with:

- `world` — a `World` holding the map extent in UTM metres,
- `nodes` — node id to `Point`, in metres from the lower-left corner of the bounds,
- `ways` — node id to neighbouring node id to lane width, for highway segments
  in both directions,
- `buildings` — building outlines as tuples of node ids.

`parse_lines` does the same from any iterable of lines. Note that `render`
(through `plot_lanes`) stores the narrowed lane widths back into
`osm_map.ways`.

The building blocks can also be used on their own:

```python
from osmplot.utm import CoordinateConverter
from osmplot.geometry import Point, Line

conv = CoordinateConverter()
utm = conv.lon_lat_to_utm(24.94, 60.17)   # UTMCoordinate(x, y, zone, letter)
metres = conv.calculate_distance(24.94, 60.17, 24.95, 60.17)

road = Line(Point(0.0, 0.0), Point(10.0, 0.0))
corner = Point(3.0, 4.0)
print(corner.dist_sqr_to_line(road))  # 16.0
```

## Limitations

- The input is read line by line, looking for `<bounds`, `<node`, `<way`,
  `<nd ` and `<tag ` on separate lines, as in typical OSM exports; it is not a
  general XML parser. The file must contain a `<bounds>` element.
- Only ways tagged `building` or `highway` are used; relations and all other
  tags are ignored.
- There is no interactive map window: the image is either saved or handed to
  the system image viewer.

## Tests

```
pip install .[test]
pytest
```