"""
Triangle mesh generation.

A jittered triangular lattice is sampled in the unit square, mapped onto the
page, triangulated, and every surviving triangle receives a fill color and
optional hatch layers.
"""

import warnings
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np
from omegaconf import DictConfig
from scipy.spatial import Delaunay, QhullError

from .geometry import Line, Point, clamp, lerp, triangle_angles
from .hachure import HachureOptions, polygon_hachure_lines
from .palettes import Palette
from .random_source import RandomSource


@dataclass
class GridItem:
    """A lattice sample in normalized [0, 1] x [0, 1] space."""
    position: Point
    index: Tuple[int, int]


@dataclass
class HatchLine:
    start: Point
    end: Point
    color: str


@dataclass
class HatchLayer:
    """One set of parallel hatch segments over a triangle."""
    color: str
    angle: float
    gap: float
    lines: List[Line] = field(default_factory=list)

    def hatch_lines(self) -> List[HatchLine]:
        return [HatchLine(start, end, self.color) for start, end in self.lines]


@dataclass
class Triangle:
    points: List[Point]
    fill_color: str
    hatch_layers: List[HatchLayer] = field(default_factory=list)


@dataclass
class Mosaic:
    """Everything one render needs to draw; rebuilt from scratch each time."""
    palette: Palette
    grid: List[GridItem]
    points: List[Point]
    triangles: List[Triangle]

    @property
    def hatch_layers(self) -> List[HatchLayer]:
        return [layer for triangle in self.triangles for layer in triangle.hatch_layers]


def get_uv(value: float, count: int) -> float:
    """Normalize a grid index into [0, 1]."""
    return 0.5 if count <= 1 else value / (count - 1)


def build_grid(size: int, distortion: float, rng: RandomSource) -> List[GridItem]:
    """
    Sample a jittered triangular lattice.

    Every other row is shifted half a cell. Each sample is displaced by
    coherent noise keyed on its grid indices, scaled by distortion percent.
    Samples pushed outside the unit square are dropped, not clamped.

    Args:
        size: Number of rows and columns
        distortion: Displacement amount in percent
        rng: Random source of the current render

    Returns:
        List of GridItem in row-major order
    """
    grid_items = []
    amount = distortion / 100
    odd = True

    for y in range(size):
        odd = not odd
        for x in range(size):
            u = get_uv(x if odd else x + 0.5, size)
            v = get_uv(y, size)

            u = u + rng.sign() * rng.noise2d(x, y) * amount
            v = v + rng.sign() * rng.noise2d(x, y) * amount

            if 0 <= u <= 1 and 0 <= v <= 1:
                grid_items.append(GridItem(position=(u, v), index=(x, y)))

    return grid_items


def map_to_page(grid: Sequence[GridItem], width: float, height: float, margin: float) -> List[Point]:
    """Interpolate normalized samples into the margin-inset page area."""
    return [
        (lerp(margin, width - margin, u), lerp(margin, height - margin, v))
        for u, v in (item.position for item in grid)
    ]


def triangulate(points: Sequence[Point]) -> List[Tuple[int, int, int]]:
    """
    Delaunay triangulation of a point set.

    Returns:
        Index triples into points. Empty when the set cannot be triangulated.
    """
    try:
        delaunay = Delaunay(np.asarray(points, dtype=float).reshape(-1, 2))
    except (QhullError, ValueError):
        warnings.warn(f"Could not triangulate {len(points)} points (degenerate input)")
        return []

    return [tuple(int(i) for i in simplex) for simplex in delaunay.simplices]


def filter_degenerate(points: Sequence[Point], minimum_angle: float) -> bool:
    """
    Keep a triangle only if all of its interior angles exceed minimum_angle.

    Angles are compared in degrees. A NaN angle (coincident vertices) never
    passes.
    """
    return all(angle > minimum_angle for angle in triangle_angles(*points, in_degrees=True))


def hatch_line_spacing(rng: RandomSource, hatch_cfg: DictConfig, line_width: float) -> float:
    space_factor = abs(rng.gaussian(hatch_cfg.space_factor_mean, hatch_cfg.space_factor_deviation))
    return line_width * clamp(space_factor, hatch_cfg.min_line_space_factor, hatch_cfg.max_line_space_factor)


def assign_fills_and_hatches(triangles: Sequence[Sequence[Point]], colors: Sequence[str],
                             rng: RandomSource, hatch_cfg: DictConfig,
                             line_width: float) -> List[Triangle]:
    """
    Draw a fill color, and optionally hatch layers, for every triangle.

    Args:
        triangles: Vertex triples in page space
        colors: Active palette colors
        rng: Random source of the current render
        hatch_cfg: Hatch section of the configuration
        line_width: Base stroke width; hatch spacing is a multiple of it

    Returns:
        List of Triangle
    """
    result = []
    for points in triangles:
        triangle = Triangle(points=list(points), fill_color=rng.pick(colors))

        if hatch_cfg.enabled and hatch_cfg.layers >= 1:
            for _ in range(rng.range_int(1, hatch_cfg.layers)):
                gap = hatch_line_spacing(rng, hatch_cfg, line_width)
                angle = rng.range(-180, 180)
                lines = polygon_hachure_lines(triangle.points, HachureOptions(
                    gap=gap, stroke_width=line_width, angle=angle))
                triangle.hatch_layers.append(HatchLayer(
                    color=rng.pick(colors), angle=angle, gap=gap, lines=lines))

        result.append(triangle)
    return result

