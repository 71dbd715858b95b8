# File: tests/test_boundary.py

from conftest import square
from landpro.gis.boundary import BoundaryEditor


def test_create_computes_acreage():
    editor = BoundaryEditor()
    acreage = editor.create(square(0.001))
    assert acreage is not None and acreage > 0
    assert editor.has_changes
    assert not editor.analysis_invalidated


def test_update_invalidates_analysis():
    editor = BoundaryEditor()
    editor.create(square(0.001))
    editor.attach_analysis({"summary": "flat pasture"})
    bigger = editor.update(square(0.002))
    assert bigger > 3
    assert editor.analysis is None
    assert editor.analysis_invalidated


def test_delete_resets_everything():
    editor = BoundaryEditor()
    editor.create(square(0.001))
    editor.attach_analysis({"summary": "x"})
    editor.delete()
    assert editor.polygon is None
    assert editor.acreage is None
    assert editor.analysis is None
    assert not editor.has_changes


def test_degenerate_polygon_clears_acreage():
    editor = BoundaryEditor()
    editor.create(square(0.001))
    editor.update({"type": "Polygon", "coordinates": [[[0, 0], [0.001, 0], [0, 0]]]})
    assert editor.acreage is None
    assert editor.polygon is None
