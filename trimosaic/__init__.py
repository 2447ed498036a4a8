"""
trimosaic - Procedural triangle mosaic artwork.

Samples a jittered triangular lattice, triangulates it, fills every triangle
with a palette color and optionally overlays scan-line hachure strokes.
Renders to raster (Pillow) or vector (SVG) surfaces.
"""

__version__ = "1.0.0"

from .config import MosaicConfig, load_config, validate_config
from .hachure import HachureOptions, straight_hachure_lines, polygon_hachure_lines
from .mesh import Mosaic, Triangle, HatchLayer, HatchLine, GridItem
from .random_source import RandomSource
from .render import RenderResult, RenderStage, render, render_to
from .renderer import RasterSurface, SvgSurface, RecordingSurface, create_surface
from .session import ParameterSession

__all__ = [
    'MosaicConfig',
    'load_config',
    'validate_config',
    'HachureOptions',
    'straight_hachure_lines',
    'polygon_hachure_lines',
    'Mosaic',
    'Triangle',
    'HatchLayer',
    'HatchLine',
    'GridItem',
    'RandomSource',
    'RenderResult',
    'RenderStage',
    'render',
    'render_to',
    'RasterSurface',
    'SvgSurface',
    'RecordingSurface',
    'create_surface',
    'ParameterSession'
]
