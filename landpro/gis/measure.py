# File: landpro/gis/measure.py

"""
Scratch measurement tool for the map.

A transient, non-persisted state machine::

    none -> distance | area -> none

Toggling the active mode again returns to ``none``; switching or leaving a
mode clears every collected point and the preview layer.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from landpro.gis.geometry import (
    ACRES_PER_SQUARE_METER,
    FEET_PER_METER,
    FEET_PER_MILE,
    SQUARE_FEET_PER_SQUARE_METER,
    line_length_m,
    polygon_area_m2,
    round_half_up,
)

MODE_NONE = "none"
MODE_DISTANCE = "distance"
MODE_AREA = "area"
MEASURE_MODES = (MODE_DISTANCE, MODE_AREA)


@dataclass
class Measurement:
    value: float
    unit: str
    label: str


def measure_distance(points: List[Tuple[float, float]]) -> Optional[Measurement]:
    if len(points) < 2:
        return None
    feet = line_length_m(points) * FEET_PER_METER
    if feet >= FEET_PER_MILE:
        miles = feet / FEET_PER_MILE
        return Measurement(round_half_up(miles, 2), "miles", f"{miles:.2f} miles")
    rounded = int(round_half_up(feet))
    return Measurement(rounded, "ft", f"{rounded} ft")


def measure_area(points: List[Tuple[float, float]]) -> Optional[Measurement]:
    if len(points) < 3:
        return None
    ring = [list(p) for p in points] + [list(points[0])]
    area_m2 = polygon_area_m2({"type": "Polygon", "coordinates": [ring]})
    acres = area_m2 * ACRES_PER_SQUARE_METER
    if acres >= 1:
        return Measurement(round_half_up(acres, 2), "acres", f"{acres:.2f} acres")
    sqft = int(round_half_up(area_m2 * SQUARE_FEET_PER_SQUARE_METER))
    return Measurement(sqft, "sq ft", f"{sqft} sq ft")


def measure(mode: str, points: List[Tuple[float, float]]) -> Optional[Measurement]:
    if mode == MODE_DISTANCE:
        return measure_distance(points)
    if mode == MODE_AREA:
        return measure_area(points)
    return None


@dataclass
class MeasureTool:
    mode: str = MODE_NONE
    points: List[Tuple[float, float]] = field(default_factory=list)
    measurement: Optional[Measurement] = None

    @property
    def active(self) -> bool:
        return self.mode != MODE_NONE

    @property
    def result(self) -> Optional[str]:
        return self.measurement.label if self.measurement else None

    def clear(self) -> None:
        self.points = []
        self.measurement = None

    def toggle(self, mode: str) -> str:
        if mode not in MEASURE_MODES:
            raise ValueError(f"Unknown measure mode: {mode!r}")
        self.mode = MODE_NONE if self.mode == mode else mode
        self.clear()
        return self.mode

    def add_point(self, lon: float, lat: float) -> Optional[str]:
        """Append a clicked vertex; clicks outside a mode are ignored."""
        if not self.active:
            return None
        self.points.append((float(lon), float(lat)))
        self.measurement = measure(self.mode, self.points)
        return self.result

    def preview(self) -> dict:
        """GeoJSON for the live preview layer: the shape plus one point per vertex."""
        features = []
        if self.active and len(self.points) >= 2:
            if self.mode == MODE_AREA and len(self.points) >= 3:
                ring = [list(p) for p in self.points] + [list(self.points[0])]
                geometry = {"type": "Polygon", "coordinates": [ring]}
            else:
                geometry = {"type": "LineString", "coordinates": [list(p) for p in self.points]}
            features.append({"type": "Feature", "properties": {}, "geometry": geometry})
            features.extend(
                {"type": "Feature", "properties": {}, "geometry": {"type": "Point", "coordinates": list(p)}}
                for p in self.points
            )
        return {"type": "FeatureCollection", "features": features}
