"""Tests for geometry primitives."""

import pytest

from sheet_beautify.geometry import BoundingBox, XYPos, euclidean_distance, overlap_2d, sheet_box


class TestXYPos:
    """Test point arithmetic and approximate comparison."""

    def test_arithmetic(self):
        """Addition, subtraction, scaling and negation."""
        a = XYPos(3.0, 4.0)
        b = XYPos(1.0, -2.0)
        assert a + b == XYPos(4.0, 2.0)
        assert a - b == XYPos(2.0, 6.0)
        assert a * 2 == XYPos(6.0, 8.0)
        assert 0.5 * a == XYPos(1.5, 2.0)
        assert -a == XYPos(-3.0, -4.0)

    def test_manhattan(self):
        assert XYPos(-3.0, 4.0).manhattan() == 7.0

    def test_approx_equal_absorbs_drift(self):
        """Summing many lengths does not break equality."""
        total = XYPos.zero()
        for _ in range(10):
            total = total + XYPos(0.1, 0.0)
        assert total != XYPos(1.0, 0.0)
        assert total.approx_equal(XYPos(1.0, 0.0))

    def test_is_zero(self):
        assert XYPos(0.00001, -0.00001).is_zero()
        assert not XYPos(0.1, 0.0).is_zero()

    def test_euclidean_distance(self):
        assert euclidean_distance(XYPos(0, 0), XYPos(3, 4)) == pytest.approx(5.0)


class TestBoundingBox:
    """Test box edges, overlap and containment."""

    def test_edges_and_centre(self):
        box = BoundingBox(XYPos(10, 20), 30, 40)
        assert (box.left, box.top, box.right, box.bottom) == (10, 20, 40, 60)
        assert box.centre == XYPos(25, 40)

    def test_overlap(self):
        """Interiors that intersect overlap."""
        a = BoundingBox(XYPos(0, 0), 10, 10)
        b = BoundingBox(XYPos(5, 5), 10, 10)
        assert a.overlaps(b)
        assert overlap_2d(b, a)

    def test_touching_boxes_do_not_overlap(self):
        """Sharing an edge is not an overlap."""
        a = BoundingBox(XYPos(0, 0), 10, 10)
        right = BoundingBox(XYPos(10, 0), 10, 10)
        below = BoundingBox(XYPos(0, 10), 10, 10)
        assert not overlap_2d(a, right)
        assert not overlap_2d(a, below)

    def test_disjoint_boxes(self):
        a = BoundingBox(XYPos(0, 0), 10, 10)
        b = BoundingBox(XYPos(100, 100), 10, 10)
        assert not overlap_2d(a, b)

    def test_contains_box(self):
        """Containment includes the edges."""
        sheet = sheet_box(100)
        assert sheet.contains_box(BoundingBox(XYPos(0, 0), 100, 100))
        assert sheet.contains_box(BoundingBox(XYPos(10, 10), 20, 20))
        assert not sheet.contains_box(BoundingBox(XYPos(-1, 10), 20, 20))
        assert not sheet.contains_box(BoundingBox(XYPos(90, 90), 20, 20))


class TestSegmentIntersection:
    """Test axis-parallel segments against box interiors."""

    box = BoundingBox(XYPos(0, 0), 10, 10)

    def test_horizontal_through(self):
        assert self.box.intersects_segment(XYPos(-5, 5), XYPos(15, 5))

    def test_vertical_through(self):
        assert self.box.intersects_segment(XYPos(5, 20), XYPos(5, -20))

    def test_segment_on_edge(self):
        """Running along an edge does not intersect."""
        assert not self.box.intersects_segment(XYPos(-5, 0), XYPos(15, 0))
        assert not self.box.intersects_segment(XYPos(10, -5), XYPos(10, 15))

    def test_segment_outside(self):
        assert not self.box.intersects_segment(XYPos(-5, 5), XYPos(-1, 5))

    def test_diagonal_rejected(self):
        with pytest.raises(ValueError, match="not axis-parallel"):
            self.box.intersects_segment(XYPos(0, 0), XYPos(5, 5))
