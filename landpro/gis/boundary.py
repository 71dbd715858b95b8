# File: landpro/gis/boundary.py

"""
Land-boundary editor state.

Mirrors the draw lifecycle of the map editor: creating or reshaping the
polygon recomputes acreage and drops any analysis computed for the old
shape; deleting it resets everything to empty.
"""

from dataclasses import dataclass
from typing import Optional

from landpro.gis.geometry import calculate_acreage, is_self_intersecting, parse_polygon


@dataclass
class BoundaryEditor:
    polygon: Optional[dict] = None
    acreage: Optional[float] = None
    analysis: Optional[dict] = None
    has_changes: bool = False
    analysis_invalidated: bool = False
    self_intersecting: bool = False

    def _apply(self, polygon: dict) -> Optional[float]:
        polygon = parse_polygon(polygon)
        acreage = calculate_acreage(polygon)
        if acreage is None:
            # Too few vertices to enclose an area
            self.polygon = None
            self.acreage = None
            self.self_intersecting = False
        else:
            self.polygon = polygon
            self.acreage = acreage
            self.self_intersecting = is_self_intersecting(polygon)
        self.has_changes = True
        if self.analysis is not None:
            self.analysis_invalidated = True
        self.analysis = None
        return self.acreage

    def create(self, polygon: dict) -> Optional[float]:
        return self._apply(polygon)

    def update(self, polygon: dict) -> Optional[float]:
        return self._apply(polygon)

    def delete(self) -> None:
        if self.analysis is not None:
            self.analysis_invalidated = True
        self.polygon = None
        self.acreage = None
        self.analysis = None
        self.has_changes = False
        self.self_intersecting = False

    def attach_analysis(self, analysis: dict) -> None:
        self.analysis = analysis
        self.analysis_invalidated = False
