import math
import pytest

from trimosaic.geometry import (
    angle_at, triangle_angles, rotate_points, rotate_lines, scale_polygon,
    polygon_centroid, gap_scale_factor, round_half_up, lerp, clamp
)


class TestAngles:
    """Test cases for angle computation."""

    @pytest.mark.parametrize("triangle", [
        [(0, 0), (1, 0), (0, 1)],
        [(0, 0), (4, 0), (1, 3)],
        [(10.5, -3.2), (7.1, 8.8), (-2.0, 0.4)],
        [(0, 0), (1000, 1), (500, 2)],
    ])
    def test_angles_sum_to_pi(self, triangle):
        """Test that interior angles of a proper triangle sum to pi."""
        assert sum(triangle_angles(*triangle)) == pytest.approx(math.pi, abs=1e-6)

    def test_right_triangle_angles(self):
        """Test angle ordering: centered on p1, p2, then p0."""
        angles = triangle_angles((0, 0), (1, 0), (0, 1))
        assert angles[0] == pytest.approx(math.pi / 4)
        assert angles[1] == pytest.approx(math.pi / 4)
        assert angles[2] == pytest.approx(math.pi / 2)

    def test_angle_in_degrees(self):
        """Test degree output."""
        assert angle_at((1, 0), (0, 0), (0, 1), in_degrees=True) == pytest.approx(90)

    def test_coincident_points_give_nan(self):
        """Test that a zero-length arm yields NaN instead of raising."""
        assert math.isnan(angle_at((1, 1), (1, 1), (2, 3)))
        assert any(math.isnan(a) for a in triangle_angles((0, 0), (0, 0), (5, 5)))

    def test_collinear_points(self):
        """Test that collinear points produce 0 or pi, never an error."""
        angles = triangle_angles((0, 0), (1, 1), (3, 3))
        assert sorted(angles) == pytest.approx([0, 0, math.pi], abs=1e-6)


class TestTransforms:
    """Test cases for rotation and scaling."""

    @pytest.mark.parametrize("degrees", [0, 37.5, -123, 90, 720.25])
    def test_rotation_round_trip(self, degrees):
        """Test that rotating by theta then -theta restores the points."""
        points = [(3, 4), (-2.5, 7), (100, -50)]
        center = (1.5, -2)
        restored = rotate_points(rotate_points(points, center, degrees), center, -degrees)
        for original, back in zip(points, restored):
            assert back == pytest.approx(original, abs=1e-9)

    def test_rotation_quarter_turn(self):
        """Test rotation direction about the origin."""
        (x, y), = rotate_points([(1, 0)], (0, 0), 90)
        assert x == pytest.approx(0, abs=1e-12)
        assert y == pytest.approx(1)

    def test_rotation_leaves_input_untouched(self):
        """Test that rotation returns new points."""
        points = [[1.0, 2.0], [3.0, 4.0]]
        rotate_points(points, (0, 0), 45)
        assert points == [[1.0, 2.0], [3.0, 4.0]]

    def test_rotate_lines(self):
        """Test that lines keep their pairing after rotation."""
        lines = [((1, 0), (2, 0)), ((0, 1), (0, 2))]
        rotated = rotate_lines(lines, (0, 0), 180)
        assert len(rotated) == 2
        assert rotated[0][0] == pytest.approx((-1, 0), abs=1e-12)
        assert rotated[1][1] == pytest.approx((0, -2), abs=1e-12)

    def test_scale_identity(self):
        """Test that a factor of 1 returns the same polygon."""
        polygon = [(0.0, 0.0), (4.0, 0.0), (0.0, 3.0)]
        assert scale_polygon(polygon, 1.0) == polygon

    def test_scale_zero_collapses_to_centroid(self):
        """Test that a factor of 0 collapses every vertex onto the centroid."""
        scaled = scale_polygon([(0, 0), (4, 0), (0, 3)], 0)
        for point in scaled:
            assert point == pytest.approx((4 / 3, 1))

    def test_scale_half(self):
        """Test scaling about the centroid."""
        scaled = scale_polygon([(0, 0), (4, 0), (0, 3)], 0.5)
        assert scaled[0] == pytest.approx((2 / 3, 0.5))
        assert scaled[1] == pytest.approx((8 / 3, 0.5))

    def test_centroid_of_square(self):
        """Test area-weighted centroid."""
        assert polygon_centroid([(0, 0), (2, 0), (2, 2), (0, 2)]) == pytest.approx((1, 1))

    def test_centroid_of_degenerate_polygon(self):
        """Test vertex-mean fallback for zero-area polygons."""
        assert polygon_centroid([(0, 0), (2, 0), (4, 0)]) == pytest.approx((2, 0))


class TestHelpers:
    """Test cases for small numeric helpers."""

    def test_gap_scale_factor(self):
        assert gap_scale_factor(0) == 1
        assert gap_scale_factor(5) == pytest.approx(0.5)
        assert gap_scale_factor(10) == pytest.approx(0)

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(-0.5) == 0
        assert round_half_up(2.4) == 2

    def test_lerp_and_clamp(self):
        assert lerp(10, 20, 0.5) == 15
        assert clamp(25, 2, 20) == 20
        assert clamp(1, 2, 20) == 2
