import pytest

from osmplot.geometry import Point
from osmplot.osm import (
    LANE_WIDTH_METERS,
    OsmMap,
    detect_delimiter,
    parse_file,
    parse_lines,
    split_string,
)

SAMPLE = """<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="sample">
 <bounds minlat="60.0" minlon="24.0" maxlat="60.01" maxlon="24.02"/>
 <node id="1" uid="99" lat="60.0" lon="24.0"/>
 <node id="2" lat="60.005" lon="24.01"/>
 <node id="3" lat="60.01" lon="24.02"/>
 <node id="4" lat="60.002" lon="24.002"/>
 <node id="5" lat="60.002" lon="24.004"/>
 <node id="6" lat="60.004" lon="24.004"/>
 <way id="10">
  <nd ref="1"/>
  <nd ref="2"/>
  <nd ref="3"/>
  <tag k="highway" v="residential"/>
 </way>
 <way id="11">
  <nd ref="4"/>
  <nd ref="5"/>
  <nd ref="6"/>
  <nd ref="4"/>
  <tag k="building" v="yes"/>
 </way>
 <way id="12">
  <nd ref="5"/>
  <nd ref="6"/>
  <tag k="waterway" v="stream"/>
 </way>
</osm>
"""


def test_split_string_drops_empty_tokens():
    assert split_string("a  b   c") == ["a", "b", "c"]


def test_split_string_on_quote():
    assert split_string('lat="60.1"/>', '"') == ["lat=", "60.1", "/>"]


def test_detect_delimiter_prefers_double_quote():
    assert detect_delimiter("<node id=\"1\" k='x'>") == '"'
    assert detect_delimiter("<node id='1'>") == "'"
    assert detect_delimiter("<osm>") == " "


def test_parse_lines_highway_is_symmetric():
    osm = parse_lines(SAMPLE.splitlines())
    assert osm.ways["1"] == {"2": LANE_WIDTH_METERS}
    assert osm.ways["2"] == {"1": LANE_WIDTH_METERS, "3": LANE_WIDTH_METERS}
    assert osm.ways["3"] == {"2": LANE_WIDTH_METERS}


def test_parse_lines_buildings_and_ignored_ways():
    osm = parse_lines(SAMPLE.splitlines())
    assert osm.buildings == {("4", "5", "6", "4")}
    assert "5" not in osm.ways


def test_parse_lines_uses_id_not_uid():
    osm = parse_lines(SAMPLE.splitlines())
    assert set(osm.nodes) == {"1", "2", "3", "4", "5", "6"}


def test_nodes_are_converted_relative_to_world_corner():
    osm = parse_lines(SAMPLE.splitlines())
    assert osm.nodes["1"] == Point(0.0, 0.0)
    far = osm.nodes["3"]
    assert far.x == pytest.approx(osm.world.width())
    assert far.y == pytest.approx(osm.world.height())
    assert osm.world.width() > 0
    assert osm.world.height() > 0


def test_single_quoted_attributes():
    lines = [
        "<bounds minlat='1.0' minlon='2.0' maxlat='1.5' maxlon='2.5'/>",
        "<node id='7' lat='1.0' lon='2.0'/>",
    ]
    osm = parse_lines(lines)
    assert osm.nodes["7"] == Point(0.0, 0.0)


def test_lane_width_is_applied():
    osm = parse_lines(SAMPLE.splitlines(), lane_width=2.5)
    assert osm.ways["1"]["2"] == 2.5


def test_node_without_lat_raises():
    with pytest.raises(ValueError):
        parse_lines(['<node id="1" lon="24.0"/>'])


def test_bounds_missing_value_raises():
    with pytest.raises(ValueError):
        parse_lines(['<bounds minlat="60.0" minlon="24.0" maxlat="60.1"/>'])


def test_add_way_single_node_adds_nothing():
    osm = OsmMap()
    osm.add_way(["1"])
    assert osm.ways == {}


def test_add_way_uses_map_lane_width():
    osm = OsmMap(lane_width=3.0)
    osm.add_way(["a", "b"])
    assert osm.ways == {"a": {"b": 3.0}, "b": {"a": 3.0}}


def test_parse_file_matches_parse_lines(tmp_path):
    path = tmp_path / "map.osm"
    path.write_text(SAMPLE, encoding="utf-8")
    from_file = parse_file(path)
    from_lines = parse_lines(SAMPLE.splitlines())
    assert from_file.ways == from_lines.ways
    assert from_file.buildings == from_lines.buildings
    assert from_file.nodes["2"] == from_lines.nodes["2"]


def test_parse_file_missing_raises(tmp_path):
    with pytest.raises(OSError):
        parse_file(tmp_path / "absent.osm")