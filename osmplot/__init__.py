"""Plot buildings, roads and lane widths from OpenStreetMap XML files."""

__version__ = "0.1.0"
__all__ = ["geometry", "osm", "render", "utm"]