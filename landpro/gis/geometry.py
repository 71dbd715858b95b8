# ============================================================
# File: landpro/gis/geometry.py
# LandPro: boundary geometry utilities
# ============================================================

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence, Tuple

from pyproj import Geod
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry


# ============================================================
# UNIT CONSTANTS
# ============================================================

ACRES_PER_SQUARE_METER = 0.000247105
SQUARE_METERS_PER_ACRE = 4046.86
SQUARE_FEET_PER_SQUARE_METER = 10.7639
FEET_PER_METER = 3.28084
FEET_PER_MILE = 5280

GEOD = Geod(ellps="WGS84")

Position = Sequence[float]


def round_half_up(value: float, places: int = 0) -> float:
    """
    Round like Math.round does in the browser (halves go up), not banker's
    rounding.
    """
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded) if places else float(int(rounded))


# ============================================================
# GeoJSON → Polygon
# ============================================================

def _geojson_to_geometry(obj: dict) -> dict:
    """
    Accepts Feature, FeatureCollection or bare Geometry and returns the
    first geometry dict found.
    """
    if not isinstance(obj, dict):
        raise ValueError("GeoJSON object must be a dictionary.")

    kind = obj.get("type")
    if kind == "FeatureCollection":
        features = obj.get("features")
        if not isinstance(features, list) or not features:
            raise ValueError("GeoJSON FeatureCollection has no features.")
        return _geojson_to_geometry(features[0])
    if kind == "Feature":
        geom = obj.get("geometry")
        if not isinstance(geom, dict):
            raise ValueError("GeoJSON Feature missing geometry.")
        return geom
    return obj


def _parse_position(pos) -> List[float]:
    if not isinstance(pos, (list, tuple)) or len(pos) < 2:
        raise ValueError("Polygon positions must be [longitude, latitude] pairs.")
    try:
        lon, lat = float(pos[0]), float(pos[1])
    except (TypeError, ValueError):
        raise ValueError("Polygon positions must be numeric.") from None
    # NaN fails both comparisons as well
    if not (-180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0):
        raise ValueError("Polygon coordinates out of range.")
    return [lon, lat]


def parse_polygon(obj: dict, min_vertices: int = 0) -> dict:
    """
    Return a GeoJSON Polygon dict from any GeoJSON object.

    A MultiPolygon yields its first member. Anything that is not polygonal
    raises ValueError, as does an outer ring with fewer than
    ``min_vertices`` distinct vertices. Short rings are accepted by default
    so the boundary editor can clear acreage on them.
    """
    geom = _geojson_to_geometry(obj)
    kind = geom.get("type")
    coords = geom.get("coordinates")

    if kind == "MultiPolygon":
        if not isinstance(coords, list) or not coords:
            raise ValueError("MultiPolygon has no members.")
        coords = coords[0]
    elif kind != "Polygon":
        raise ValueError(f"Expected a Polygon geometry, got {kind!r}.")

    if not isinstance(coords, list) or not coords:
        raise ValueError("Polygon must contain at least one linear ring.")

    rings = []
    for ring in coords:
        if not isinstance(ring, list) or not ring:
            raise ValueError("Polygon rings must be non-empty lists of positions.")
        rings.append([_parse_position(pos) for pos in ring])

    if distinct_vertex_count(rings[0]) < min_vertices:
        raise ValueError(f"Polygon needs at least {min_vertices} distinct vertices.")

    return {"type": "Polygon", "coordinates": rings}


def _closed(ring: Sequence[Position]) -> List[Tuple[float, float]]:
    points = [(float(p[0]), float(p[1])) for p in ring]
    if points and points[0] != points[-1]:
        points.append(points[0])
    return points


def distinct_vertex_count(ring: Sequence[Position]) -> int:
    """Vertices of a ring, not counting the closing repeat of the first one."""
    points = _closed(ring)
    return max(len(points) - 1, 0)


# ============================================================
# AREA / ACREAGE
# ============================================================

def _ring_area_m2(ring: Sequence[Position]) -> float:
    points = _closed(ring)
    if len(points) < 4:
        return 0.0
    lons, lats = zip(*points)
    area, _ = GEOD.polygon_area_perimeter(lons, lats)
    return abs(area)


def polygon_area_m2(polygon: dict) -> float:
    """
    Geodesic area of a GeoJSON Polygon on the WGS84 ellipsoid, in square
    meters. Holes are subtracted from the outer ring.
    """
    rings = polygon.get("coordinates") or []
    if not rings:
        return 0.0
    outer = _ring_area_m2(rings[0])
    holes = sum(_ring_area_m2(r) for r in rings[1:])
    return max(outer - holes, 0.0)


def square_meters_to_acres(area_m2: float) -> float:
    return area_m2 * ACRES_PER_SQUARE_METER


def calculate_acreage(polygon: Optional[dict]) -> Optional[float]:
    """
    Acreage of a boundary, rounded to two decimals.

    Returns None when there is no polygon or its outer ring has fewer than
    three vertices; callers clear their acreage instead of converting.
    """
    if not polygon:
        return None
    rings = polygon.get("coordinates") or []
    if not rings or distinct_vertex_count(rings[0]) < 3:
        return None
    return round_half_up(square_meters_to_acres(polygon_area_m2(polygon)), 2)


def line_length_m(points: Sequence[Position]) -> float:
    """Geodesic length of a polyline in meters."""
    if len(points) < 2:
        return 0.0
    lons = [float(p[0]) for p in points]
    lats = [float(p[1]) for p in points]
    return GEOD.line_length(lons, lats)


# ============================================================
# CENTROID / VALIDITY
# ============================================================

def ring_centroid(polygon: dict) -> Tuple[float, float]:
    """
    Arithmetic mean of the outer ring's positions as given, closing vertex
    included. Not area-weighted; good enough for rough prompt context.
    """
    ring = polygon["coordinates"][0]
    n = len(ring)
    lon = sum(float(p[0]) for p in ring) / n
    lat = sum(float(p[1]) for p in ring) / n
    return lon, lat


def to_shape(polygon: dict) -> BaseGeometry:
    return shape(polygon)


def is_self_intersecting(polygon: dict) -> bool:
    """True when the polygon is not a valid simple polygon (e.g. a bow-tie)."""
    rings = polygon.get("coordinates") or []
    if not rings or distinct_vertex_count(rings[0]) < 3:
        return False
    closed = {"type": "Polygon", "coordinates": [_closed(r) for r in rings]}
    return not to_shape(closed).is_valid
