import pytest

from ledge_runner.errors import GeometryError, LedgeRunnerError
from ledge_runner.geometry import Rect, overlaps, contains_point, midbottom


PAIRS = [
    (Rect(0, 0, 10, 10), Rect(5, 5, 10, 10)),
    (Rect(0, 0, 10, 10), Rect(10, 0, 5, 5)),      # touching right edge
    (Rect(0, 0, 10, 10), Rect(0, 10, 10, 10)),    # touching bottom edge
    (Rect(0, 0, 10, 10), Rect(10.5, 0, 5, 5)),    # just apart
    (Rect(0, 0, 100, 20), Rect(40, -30, 10, 100)),  # crossing
    (Rect(-50, -50, 10, 10), Rect(50, 50, 10, 10)),
]


@pytest.mark.parametrize('a, b', PAIRS)
def test_overlap_is_symmetric(a, b):
    assert overlaps(a, b) == overlaps(b, a)


@pytest.mark.parametrize('rect', [a for a, _ in PAIRS] + [Rect(3, 4, 0, 0)])
def test_rect_overlaps_itself(rect):
    assert rect.overlaps(rect)


def test_touching_edges_count_as_overlap():
    assert Rect(0, 0, 10, 10).overlaps(Rect(10, 0, 5, 5))
    assert Rect(0, 0, 10, 10).overlaps(Rect(0, 10, 5, 5))


def test_separated_rects_do_not_overlap():
    assert not Rect(0, 0, 10, 10).overlaps(Rect(10.5, 0, 5, 5))
    assert not Rect(0, 0, 10, 10).overlaps(Rect(0, 10.01, 5, 5))


def test_contains_point_is_inclusive():
    r = Rect(10, 20, 30, 40)
    assert contains_point(r, 10, 20)
    assert contains_point(r, 40, 60)
    assert contains_point(r, 25, 40)
    assert not contains_point(r, 40.5, 30)
    assert not contains_point(r, 20, 19.9)


def test_derived_edges_and_midbottom():
    r = Rect(10, 20, 30, 40)
    assert r.left == 10
    assert r.right == 40
    assert r.bottom == 60
    assert r.center_x == 25
    assert midbottom(r) == (25, 60)


def test_setting_bottom_keeps_height():
    r = Rect(0, 0, 50, 50)
    r.bottom = 580
    assert r.y == 530
    assert r.height == 50


def test_setting_left_moves_rect():
    r = Rect(0, 0, 50, 50)
    r.left = 12
    assert r.x == 12
    assert r.right == 62


def test_moved_returns_shifted_copy():
    r = Rect(1, 2, 3, 4)
    moved = r.moved(10, -2)
    assert moved == Rect(11, 0, 3, 4)
    assert r == Rect(1, 2, 3, 4)
    assert r.copy() is not r


@pytest.mark.parametrize('width, height', [(-1, 5), (5, -0.5)])
def test_negative_size_is_rejected(width, height):
    with pytest.raises(GeometryError):
        Rect(0, 0, width, height)


def test_geometry_error_is_a_value_error():
    with pytest.raises(ValueError):
        Rect(0, 0, -1, 1)
    assert issubclass(GeometryError, LedgeRunnerError)
