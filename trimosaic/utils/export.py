from pathlib import Path
from typing import Union

import numpy as np

from ..render import RenderResult
from ..renderer import RasterSurface, SvgSurface


def output_filename(prefix: str, seed: int, extension: str) -> str:
    """File name carrying the seed, e.g. mosaic-1234.png."""
    return f"{prefix}-{seed}.{extension.lstrip('.')}"


def surface_to_array(surface: RasterSurface) -> np.ndarray:
    """
    Convert a raster surface to a numpy array.

    Returns:
        Array (H, W, 4) of uint8 (RGBA)
    """
    return np.array(surface.to_image())


def save_png(result: RenderResult, path: Union[str, Path]) -> Path:
    """Save a raster render as PNG."""
    if not isinstance(result.surface, RasterSurface):
        raise TypeError("PNG export needs a render onto a RasterSurface")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    result.surface.save(str(path))
    return path


def save_svg(result: RenderResult, path: Union[str, Path]) -> Path:
    """Save a vector render as SVG."""
    if not isinstance(result.surface, SvgSurface):
        raise TypeError("SVG export needs a render onto an SvgSurface")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        f.write(result.surface.to_string())
    return path

