"""Reading the nodes, highways and buildings of an OSM XML file."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from itertools import pairwise
from os import PathLike

from osmplot.geometry import Point, World

LANE_WIDTH_METERS = 5.0


def split_string(text: str, delim: str = " ") -> list[str]:
    """Split ``text`` on ``delim`` and drop empty pieces."""
    return [token for token in text.split(delim) if token]


def detect_delimiter(line: str) -> str:
    """Return the quote character used for attribute values on ``line``."""
    if '"' in line:
        return '"'
    if "'" in line:
        return "'"
    return " "


def _attribute_value(token: str, delim: str) -> str:
    parts = split_string(token, delim)
    if len(parts) < 2:
        raise ValueError(f"malformed attribute: {token!r}")
    return parts[1]


def _is_id(token: str) -> bool:
    return "id=" in token and "uid=" not in token


@dataclass
class OsmMap:
    """Nodes keyed by id, undirected highway segments and building outlines."""

    world: World = field(default_factory=World)
    nodes: dict[str, Point] = field(default_factory=dict)
    ways: dict[str, dict[str, float]] = field(default_factory=dict)
    buildings: set[tuple[str, ...]] = field(default_factory=set)
    lane_width: float = LANE_WIDTH_METERS

    def add_way(self, noderefs: Iterable[str]) -> None:
        """Connect each pair of consecutive nodes in both directions."""
        for first, second in pairwise(noderefs):
            self.ways.setdefault(first, {})[second] = self.lane_width
            self.ways.setdefault(second, {})[first] = self.lane_width

    def convert_nodes(self) -> None:
        """Replace every lon/lat node with its UTM offset from the world corner."""
        for node_id in sorted(self.nodes):
            self.nodes[node_id] = self.world.convert(self.nodes[node_id])


def _parse_bounds(osm: OsmMap, line: str, delim: str) -> None:
    values: dict[str, str] = {}
    for token in split_string(line):
        for key in ("minlat=", "minlon=", "maxlat=", "maxlon="):
            if key in token:
                values[key] = _attribute_value(token, delim)
                break
    try:
        osm.world.set_limits(
            float(values["minlon="]),
            float(values["minlat="]),
            float(values["maxlon="]),
            float(values["maxlat="]),
        )
    except KeyError as missing:
        raise ValueError(f"bounds lack {missing.args[0]!r}: {line!r}") from None


def _parse_node(osm: OsmMap, line: str, delim: str) -> None:
    node_id = lat = lon = None
    for token in split_string(line):
        if _is_id(token):
            node_id = _attribute_value(token, delim)
        elif "lat=" in token:
            lat = _attribute_value(token, delim)
        elif "lon=" in token:
            lon = _attribute_value(token, delim)
    if node_id is None or lat is None or lon is None:
        raise ValueError(f"node needs id, lat and lon: {line!r}")
    osm.nodes[node_id] = Point(float(lon), float(lat))


def _parse_way(osm: OsmMap, lines: Iterator[str], delim: str) -> None:
    is_building = False
    is_highway = False
    noderefs: list[str] = []

    for raw in lines:
        line = raw.rstrip("\n")
        if "way>" in line:
            if noderefs:
                if is_building:
                    osm.buildings.add(tuple(noderefs))
                elif is_highway:
                    osm.add_way(noderefs)
            return
        if "<nd " in line:
            noderefs.extend(
                _attribute_value(token, delim)
                for token in split_string(line)
                if "ref=" in token
            )
        elif "<tag " in line:
            for token in split_string(line):
                if "k=" not in token:
                    continue
                key = _attribute_value(token, delim)
                if key == "building":
                    is_building = True
                elif key == "highway":
                    is_highway = True


def parse_lines(lines: Iterable[str], lane_width: float = LANE_WIDTH_METERS) -> OsmMap:
    """Build an :class:`OsmMap` from the lines of an OSM XML document."""
    osm = OsmMap(lane_width=lane_width)
    stream = iter(lines)
    for raw in stream:
        line = raw.rstrip("\n")
        delim = detect_delimiter(line)
        if "<bounds" in line:
            _parse_bounds(osm, line, delim)
        elif "<node" in line:
            _parse_node(osm, line, delim)
        elif "<way" in line:
            _parse_way(osm, stream, delim)
    osm.convert_nodes()
    return osm


def parse_file(
    path: str | PathLike[str], lane_width: float = LANE_WIDTH_METERS
) -> OsmMap:
    """Read an OSM XML file; raises ``OSError`` if it cannot be opened."""
    with open(path, encoding="utf-8") as handle:
        return parse_lines(handle, lane_width)