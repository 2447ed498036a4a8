import math
from typing import List, Sequence, Tuple

Point = Tuple[float, float]
Line = Tuple[Point, Point]


def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation between start and end."""
    return start * (1 - t) + end * t


def clamp(value: float, minimum: float, maximum: float) -> float:
    return min(max(value, minimum), maximum)


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def angle_at(p_prev: Sequence[float], p_center: Sequence[float],
             p_next: Sequence[float], in_degrees: bool = False) -> float:
    """
    Interior angle at p_center formed by p_prev and p_next (law of cosines).

    Args:
        p_prev: Point on the first arm
        p_center: Vertex of the angle
        p_next: Point on the second arm
        in_degrees: Return degrees instead of radians

    Returns:
        The angle, or NaN if either arm has zero length
    """
    b = (p_center[0] - p_prev[0]) ** 2 + (p_center[1] - p_prev[1]) ** 2
    a = (p_center[0] - p_next[0]) ** 2 + (p_center[1] - p_next[1]) ** 2
    c = (p_next[0] - p_prev[0]) ** 2 + (p_next[1] - p_prev[1]) ** 2

    if a == 0 or b == 0:
        return math.nan

    # Collinear points can land a hair outside [-1, 1]
    cosine = clamp((a + b - c) / math.sqrt(4 * a * b), -1.0, 1.0)
    angle = math.acos(cosine)
    return math.degrees(angle) if in_degrees else angle


def triangle_angles(p0: Sequence[float], p1: Sequence[float], p2: Sequence[float],
                    in_degrees: bool = False) -> List[float]:
    """The three interior angles of a triangle, centered on p1, p2 and p0."""
    return [
        angle_at(p0, p1, p2, in_degrees),
        angle_at(p1, p2, p0, in_degrees),
        angle_at(p2, p0, p1, in_degrees),
    ]


def rotate_points(points: Sequence[Sequence[float]], center: Sequence[float],
                  degrees: float) -> List[Point]:
    """
    Rotate points about center.

    The input is left untouched; a new list of (x, y) tuples is returned.
    """
    cx, cy = center
    angle = math.radians(degrees)
    cos = math.cos(angle)
    sin = math.sin(angle)

    rotated = []
    for x, y in points:
        rotated.append((
            (x - cx) * cos - (y - cy) * sin + cx,
            (x - cx) * sin + (y - cy) * cos + cy,
        ))
    return rotated


def rotate_lines(lines: Sequence[Line], center: Sequence[float], degrees: float) -> List[Line]:
    """Rotate both endpoints of every line about center."""
    flat = [point for line in lines for point in line]
    rotated = rotate_points(flat, center, degrees)
    return [(rotated[i], rotated[i + 1]) for i in range(0, len(rotated), 2)]


def polygon_area(points: Sequence[Sequence[float]]) -> float:
    """Signed area (shoelace formula)."""
    area = 0.0
    n = len(points)
    for i in range(n):
        x0, y0 = points[i]
        x1, y1 = points[(i + 1) % n]
        area += x0 * y1 - x1 * y0
    return area / 2


def polygon_centroid(points: Sequence[Sequence[float]]) -> Point:
    """
    Area-weighted centroid of a simple polygon.

    Falls back to the vertex mean when the polygon has no area.
    """
    if not points:
        raise ValueError("Cannot compute the centroid of an empty polygon")

    area = polygon_area(points)
    if area == 0:
        n = len(points)
        return (sum(p[0] for p in points) / n, sum(p[1] for p in points) / n)

    cx = 0.0
    cy = 0.0
    n = len(points)
    for i in range(n):
        x0, y0 = points[i]
        x1, y1 = points[(i + 1) % n]
        cross = x0 * y1 - x1 * y0
        cx += (x0 + x1) * cross
        cy += (y0 + y1) * cross
    return (cx / (6 * area), cy / (6 * area))


def scale_polygon(points: Sequence[Sequence[float]], factor: float) -> List[Point]:
    """Uniformly scale a polygon about its centroid."""
    if factor == 1:
        return [(float(x), float(y)) for x, y in points]

    cx, cy = polygon_centroid(points)
    return [(cx + (x - cx) * factor, cy + (y - cy) * factor) for x, y in points]


def gap_scale_factor(grid_gap: float) -> float:
    """Scale factor applied to every triangle for a given grid gap."""
    return abs(1 - grid_gap / 10) if grid_gap > 0 else 1.0
