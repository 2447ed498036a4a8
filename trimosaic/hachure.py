"""
Scan-line hachure fill.

Converts a simple polygon into parallel line segments covering its interior,
the sketched fill style used for the hatch layers of a mosaic.
"""

from dataclasses import dataclass
from functools import cmp_to_key
from typing import List, Sequence

from .geometry import Line, Point, polygon_area, rotate_lines, rotate_points, round_half_up

MIN_GAP = 0.1


@dataclass
class HachureOptions:
    """
    Fill options for the hachure engine.

    Attributes:
        gap: Distance between scan lines; negative selects 4 * stroke_width
        stroke_width: Stroke width used to derive a gap when none is given
        angle: Hatch direction in degrees, rounded to a whole degree
    """
    gap: float = -1.0
    stroke_width: float = 1.0
    angle: float = 0.0


@dataclass
class Edge:
    """A non-horizontal polygon side tracked by the scan."""
    ymin: float
    ymax: float
    x: float
    islope: float


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _compare_edges(e1: Edge, e2: Edge) -> int:
    # ymin, then x, then ymax, all ascending
    if e1.ymin != e2.ymin:
        return -1 if e1.ymin < e2.ymin else 1
    if e1.x != e2.x:
        return -1 if e1.x < e2.x else 1
    return _sign(e1.ymax - e2.ymax)


def resolve_gap(options: HachureOptions) -> float:
    gap = options.gap
    if gap < 0:
        gap = options.stroke_width * 4
    return max(gap, MIN_GAP)


def build_edge_table(vertices: Sequence[Point]) -> List[Edge]:
    """Sorted edge table for a closed vertex list; horizontal sides are skipped."""
    edges = []
    for i in range(len(vertices) - 1):
        p1 = vertices[i]
        p2 = vertices[i + 1]
        if p1[1] != p2[1]:
            ymin = min(p1[1], p2[1])
            edges.append(Edge(
                ymin=ymin,
                ymax=max(p1[1], p2[1]),
                x=p1[0] if ymin == p1[1] else p2[0],
                islope=(p2[0] - p1[0]) / (p2[1] - p1[1]),
            ))
    return sorted(edges, key=cmp_to_key(_compare_edges))


def straight_hachure_lines(points: Sequence[Sequence[float]], options: HachureOptions) -> List[Line]:
    """
    Fill a polygon with horizontal segments spaced options.gap apart.

    Args:
        points: Polygon vertices, closed or not
        options: Fill options (the angle is ignored here)

    Returns:
        List of ((x0, y), (x1, y)) segments; endpoint x values are rounded
        to whole units. Empty for polygons that cannot be scanned.
    """
    vertices: List[Point] = [(p[0], p[1]) for p in points]
    lines: List[Line] = []
    if len(vertices) < 3 or polygon_area(vertices) == 0:
        return lines

    if vertices[0] != vertices[-1]:
        vertices.append(vertices[0])

    gap = resolve_gap(options)
    edges = build_edge_table(vertices)
    if not edges:
        return lines

    active: List[Edge] = []
    y = edges[0].ymin
    while active or edges:
        if edges:
            ix = -1
            for i, edge in enumerate(edges):
                if edge.ymin > y:
                    break
                ix = i
            active.extend(edges[:ix + 1])
            del edges[:ix + 1]

        active = [edge for edge in active if edge.ymax > y]
        # Stable sort keeps insertion order for equal intercepts
        active.sort(key=lambda edge: edge.x)

        for i in range(0, len(active) - 1, 2):
            current = active[i]
            following = active[i + 1]
            lines.append(((round_half_up(current.x), y), (round_half_up(following.x), y)))

        y += gap
        for edge in active:
            edge.x += gap * edge.islope

    return lines


def polygon_hachure_lines(points: Sequence[Sequence[float]], options: HachureOptions) -> List[Line]:
    """
    Fill a polygon with segments at options.angle degrees.

    The polygon is rotated by -angle about the origin, scanned with
    straight_hachure_lines and the segments rotated back by +angle.
    """
    if len(points) < 3 or polygon_area(points) == 0:
        return []

    center = (0.0, 0.0)
    angle = round_half_up(options.angle)
    if not angle:
        return straight_hachure_lines(points, options)

    rotated = rotate_points(points, center, -angle)
    lines = straight_hachure_lines(rotated, options)
    return rotate_lines(lines, center, angle)
