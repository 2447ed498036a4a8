from .surfaces import (
    DrawingSurface, RasterSurface, SvgSurface, RecordingSurface, create_surface
)

__all__ = ['DrawingSurface', 'RasterSurface', 'SvgSurface', 'RecordingSurface', 'create_surface']
