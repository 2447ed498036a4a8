"""
Parameter session.

Holds the current configuration for an interactive front end. Changes are
queued with set()/update() and applied by flush(), which runs exactly one
full render with the latest values. Changes queued between two flushes are
coalesced: the last value for each key wins and intermediate states are
never rendered.
"""

import copy
from typing import Any, Callable, Dict, List, Optional

from omegaconf import DictConfig, OmegaConf

from .config import validate_config
from .render import RenderResult, render
from .renderer import DrawingSurface, create_surface

SurfaceFactory = Callable[[int, int], DrawingSurface]
RenderListener = Callable[[RenderResult], None]


class ParameterSession:
    """Caller-driven render loop over a mutable parameter set."""

    def __init__(self, cfg: DictConfig, surface_factory: Optional[SurfaceFactory] = None):
        validate_config(cfg)
        self._cfg = copy.deepcopy(cfg)
        self._pending: Dict[str, Any] = {}
        self._listeners: List[RenderListener] = []
        self._surface_factory = surface_factory or (
            lambda width, height: create_surface('raster', width, height))
        self.render_count = 0
        self.last_result: Optional[RenderResult] = None

    @property
    def config(self) -> DictConfig:
        return self._cfg

    @property
    def dirty(self) -> bool:
        return bool(self._pending)

    def subscribe(self, listener: RenderListener) -> None:
        self._listeners.append(listener)

    def set(self, key: str, value: Any) -> None:
        """
        Queue a change to one dotted key, e.g. 'mesh.grid_size'.

        The change is validated against the current configuration right
        away; nothing is rendered until flush().

        Raises:
            AssertionError: If the value is outside its parameter range
            omegaconf.errors.ConfigKeyError: If the key does not exist
        """
        candidate = self._merged(dict(self._pending, **{key: value}))
        validate_config(candidate)
        self._pending[key] = value

    def update(self, **changes: Any) -> None:
        """Queue several changes. Use '__' for dots: mesh__grid_size=10."""
        for key, value in changes.items():
            self.set(key.replace('__', '.'), value)

    def flush(self) -> Optional[RenderResult]:
        """Apply queued changes and render once. Returns None when clean."""
        if not self._pending and self.last_result is not None:
            return None
        return self._render(self._merged(self._pending))

    def rerender(self) -> RenderResult:
        """Render with the latest values even if nothing changed."""
        return self._render(self._merged(self._pending))

    def _render(self, cfg: DictConfig) -> RenderResult:
        self._cfg = cfg
        self._pending = {}
        surface = self._surface_factory(cfg.canvas.width, cfg.canvas.height)
        result = render(surface, cfg)
        self.render_count += 1
        self.last_result = result
        for listener in self._listeners:
            listener(result)
        return result

    def _merged(self, changes: Dict[str, Any]) -> DictConfig:
        cfg = copy.deepcopy(self._cfg)
        for key, value in changes.items():
            OmegaConf.update(cfg, key, value, merge=False)
        return cfg
