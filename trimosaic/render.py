"""
Render driver.

One call to render() clears the surface, builds a fresh mosaic from the
configuration and paints it: every fill first, then every hatch stroke.
Nothing is kept between calls.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from omegaconf import DictConfig

from .geometry import gap_scale_factor, scale_polygon
from .mesh import (
    Mosaic, Triangle, assign_fills_and_hatches, build_grid, filter_degenerate,
    map_to_page, triangulate
)
from .palettes import get_palette_source
from .random_source import RandomSource
from .renderer import DrawingSurface, create_surface


class RenderStage(Enum):
    CLEAR_SURFACE = "clear_surface"
    SAMPLE_POINTS = "sample_points"
    TRIANGULATE = "triangulate"
    FILTER_AND_ASSIGN = "filter_and_assign"
    DRAW_FILLS = "draw_fills"
    DRAW_HATCHES = "draw_hatches"
    DONE = "done"


@dataclass
class RenderResult:
    surface: DrawingSurface
    mosaic: Mosaic
    stages: List[RenderStage] = field(default_factory=list)


def line_width_for(cfg: DictConfig) -> float:
    return cfg.canvas.width * cfg.canvas.line_width_ratio


def draw_triangle(surface: DrawingSurface, triangle: Triangle) -> None:
    (x0, y0), (x1, y1), (x2, y2) = triangle.points
    surface.begin_path()
    surface.move_to(x0, y0)
    surface.line_to(x1, y1)
    surface.line_to(x2, y2)
    surface.line_to(x0, y0)
    surface.close_path()
    surface.fill(triangle.fill_color)


def draw_hatches(surface: DrawingSurface, mosaic: Mosaic, line_width: float, cap: str) -> None:
    for layer in mosaic.hatch_layers:
        for line in layer.hatch_lines():
            surface.begin_path()
            surface.move_to(*line.start)
            surface.line_to(*line.end)
            surface.stroke(line.color, line_width, cap)


def render(surface: DrawingSurface, cfg: DictConfig, rng: Optional[RandomSource] = None) -> RenderResult:
    """
    Render one mosaic onto surface.

    Args:
        surface: Drawing target, normally sized cfg.canvas.width x height
        cfg: Full configuration
        rng: Random source; a fresh one seeded with cfg.random_seed by default

    Returns:
        RenderResult with the mosaic that was drawn and the stages run
    """
    if rng is None:
        rng = RandomSource(cfg.random_seed)
    else:
        rng.set_seed(cfg.random_seed)

    stages = []
    width = cfg.canvas.width
    height = cfg.canvas.height
    margin = width * cfg.canvas.margin_ratio
    line_width = line_width_for(cfg)

    stages.append(RenderStage.CLEAR_SURFACE)
    if cfg.use_background_color:
        surface.fill_rect(0, 0, width, height, cfg.background_color)
    palette = get_palette_source(cfg.palette.library).get_random(rng)

    stages.append(RenderStage.SAMPLE_POINTS)
    grid = build_grid(cfg.mesh.grid_size, cfg.mesh.distortion, rng)
    points = map_to_page(grid, width, height, margin)
    if cfg.mesh.show_grid:
        for x, y in points:
            surface.circle(x, y, cfg.mesh.grid_dot_radius, cfg.mesh.grid_dot_color)

    stages.append(RenderStage.TRIANGULATE)
    scale_factor = gap_scale_factor(cfg.mesh.grid_gap)
    coordinates = [
        scale_polygon([points[i] for i in simplex], scale_factor)
        for simplex in triangulate(points)
    ]

    stages.append(RenderStage.FILTER_AND_ASSIGN)
    # Angles are scale invariant; a zero scale factor collapses every triangle
    kept = [coords for coords in coordinates if filter_degenerate(coords, cfg.mesh.minimum_angle)]
    triangles = assign_fills_and_hatches(kept, palette.colors, rng, cfg.hatch, line_width)
    mosaic = Mosaic(palette=palette, grid=grid, points=points, triangles=triangles)

    stages.append(RenderStage.DRAW_FILLS)
    if cfg.mesh.fill_triangles:
        for triangle in mosaic.triangles:
            draw_triangle(surface, triangle)

    stages.append(RenderStage.DRAW_HATCHES)
    draw_hatches(surface, mosaic, line_width, cfg.hatch.line_cap)

    stages.append(RenderStage.DONE)
    return RenderResult(surface=surface, mosaic=mosaic, stages=stages)


def render_to(kind: str, cfg: DictConfig) -> RenderResult:
    """Create a canvas-sized surface of the given kind and render onto it."""
    surface = create_surface(kind, cfg.canvas.width, cfg.canvas.height)
    return render(surface, cfg)
