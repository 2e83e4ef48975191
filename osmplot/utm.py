"""Longitude/latitude to UTM conversion and great-circle distances."""

from __future__ import annotations

import math
from dataclasses import dataclass

ZONE_LETTERS = "CDEFGHJKLMNPQRSTUVW"
FIRST_ZONE_DEG = -72.0
LAST_ZONE_DEG = 72.0
ZONE_STEP_DEG = 8.0
DEFAULT_ZONE_LETTER = "X"

SCALE_FACTOR = 0.9996
FALSE_EASTING = 500000.0
SOUTHERN_OFFSET = 9999999.0

EQUATORIAL_RADIUS_METERS = 6378137.0
POLAR_RADIUS_METERS = 6356752.314245


def fix(value: float) -> int:
    """Truncate ``value`` towards zero."""
    return math.trunc(value)


@dataclass(frozen=True)
class UTMCoordinate:
    """A position in UTM: easting, northing, zone number and band letter."""

    x: float
    y: float
    zone: int
    letter: str


def _zone_letter(lat_deg: float) -> str:
    for index, letter in enumerate(ZONE_LETTERS):
        if lat_deg < FIRST_ZONE_DEG + index * ZONE_STEP_DEG:
            return letter
    return DEFAULT_ZONE_LETTER


class CoordinateConverter:
    """Converts geographic coordinates on the WGS84 ellipsoid."""

    def __init__(
        self,
        equatorial_radius: float = EQUATORIAL_RADIUS_METERS,
        polar_radius: float = POLAR_RADIUS_METERS,
    ) -> None:
        self.equatorial_radius = equatorial_radius
        self.polar_radius = polar_radius
        self._e2squared = (
            math.sqrt(equatorial_radius**2 - polar_radius**2) / polar_radius
        ) ** 2
        self._c = equatorial_radius**2 / polar_radius
        self._alpha = 0.75 * self._e2squared
        self._beta = (5.0 / 3.0) * self._alpha**2
        self._gamma = (35.0 / 27.0) * self._alpha**3

    def lon_lat_to_utm(self, lon_deg: float, lat_deg: float) -> UTMCoordinate:
        """Convert a longitude/latitude pair in degrees to UTM."""
        lat_rad = lat_deg * (math.pi / 180)
        lon_rad = lon_deg * (math.pi / 180)

        zone = fix(lon_deg / 6.0 + 31)
        central = zone * 6 - 183
        delta_s = lon_rad - central * (math.pi / 180)
        letter = _zone_letter(lat_deg)

        e2 = self._e2squared
        cos_lat = math.cos(lat_rad)
        cos_lat_sq = cos_lat**2

        a = cos_lat * math.sin(delta_s)
        epsilon = 0.5 * math.log((1 + a) / (1 - a))
        nu = math.atan(math.tan(lat_rad) / math.cos(delta_s)) - lat_rad
        v = (self._c / math.sqrt(1 + e2 * cos_lat_sq)) * SCALE_FACTOR
        ta = ((e2 / 2) * epsilon) ** 2 * cos_lat_sq
        a1 = math.sin(2 * lat_rad)
        a2 = a1 * cos_lat_sq
        j2 = lat_rad + a1 / 2.0
        j4 = (3 * j2 + a2) / 4.0
        j6 = (5 * j4 + a2 * cos_lat_sq) / 3.0
        bm = (
            SCALE_FACTOR
            * self._c
            * (lat_rad - self._alpha * j2 + self._beta * j4 - self._gamma * j6)
        )

        x = epsilon * v * (1 + ta / 3.0) + FALSE_EASTING
        y = nu * v * (1 + ta) + bm
        if y < 0:
            y += SOUTHERN_OFFSET

        return UTMCoordinate(x, y, zone, letter)

    def calculate_distance(
        self, lon1_deg: float, lat1_deg: float, lon2_deg: float, lat2_deg: float
    ) -> float:
        """Great-circle (haversine) distance in meters on the equatorial sphere."""
        d_lat = (lat2_deg - lat1_deg) * math.pi / 180.0
        d_lon = (lon2_deg - lon1_deg) * math.pi / 180.0
        a = math.sin(d_lat / 2) ** 2 + math.cos(lat1_deg * math.pi / 180.0) * math.cos(
            lat2_deg * math.pi / 180.0
        ) * math.sin(d_lon / 2) ** 2
        return self.equatorial_radius * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))