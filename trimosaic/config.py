from dataclasses import dataclass, field
from typing import List, Optional
from omegaconf import DictConfig, OmegaConf
from hydra.core.config_store import ConfigStore
import os

from .palettes import library_names


@dataclass
class CanvasConfig:
    width: int = 4096
    height: int = 4096
    margin_ratio: float = 0.02      # Margin as a fraction of width
    line_width_ratio: float = 0.002 # Base stroke width as a fraction of width


@dataclass
class MeshConfig:
    grid_size: int = 50             # Rows/columns of the sample grid
    distortion: float = 10          # Jitter in percent of the unit square
    grid_gap: float = 0             # 0..10, shrinks triangles about their centroid
    minimum_angle: float = 1        # Degrees; thinner triangles are dropped
    fill_triangles: bool = True
    show_grid: bool = False
    grid_dot_radius: float = 10
    grid_dot_color: str = 'red'


@dataclass
class HatchConfig:
    enabled: bool = False
    layers: int = 2
    min_line_space_factor: float = 2
    max_line_space_factor: float = 20
    space_factor_mean: float = 2
    space_factor_deviation: float = 5
    line_cap: str = 'round'


@dataclass
class PaletteConfig:
    library: str = 'nice_color_palettes'


@dataclass
class PathsConfig:
    output_dir: str = 'outputs'


@dataclass
class MosaicConfig:
    random_seed: int = 0
    background_color: str = '#ffffff'
    use_background_color: bool = True
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    mesh: MeshConfig = field(default_factory=MeshConfig)
    hatch: HatchConfig = field(default_factory=HatchConfig)
    palette: PaletteConfig = field(default_factory=PaletteConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)


@dataclass
class ParameterRange:
    """Control-panel contract for one adjustable parameter."""
    key: str
    label: str
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    step: Optional[float] = None
    choices: Optional[List[str]] = None

    def describe(self) -> str:
        if self.choices is not None:
            return f"{self.key} ({self.label}): one of {', '.join(self.choices)}"
        if self.minimum is None:
            return f"{self.key} ({self.label}): on/off"
        return f"{self.key} ({self.label}): {self.minimum}..{self.maximum} step {self.step}"


PARAMETER_RANGES: List[ParameterRange] = [
    ParameterRange('random_seed', 'Random seed', 0, 999999, 1),
    ParameterRange('mesh.grid_size', 'Rows/Columns', 0, 100, 1),
    ParameterRange('mesh.grid_gap', 'Grid gap', 0, 10, 0.1),
    ParameterRange('palette.library', 'Color library', choices=library_names()),
    ParameterRange('mesh.fill_triangles', 'Fill triangles'),
    ParameterRange('hatch.enabled', 'Add hatch lines'),
    ParameterRange('hatch.layers', '# of line layers', 0, 5, 1),
    ParameterRange('mesh.minimum_angle', 'Minimum angle', 0, 30, 1),
    ParameterRange('mesh.distortion', 'Distortion', 0, 10, 1),
]


def register_configs():
    """Register configuration schemas with Hydra."""
    cs = ConfigStore.instance()
    cs.store(name="config", node=MosaicConfig)


def load_config(config_path: Optional[str] = None, overrides: Optional[List[str]] = None) -> DictConfig:
    """Load configuration from file with optional overrides."""
    cfg = OmegaConf.structured(MosaicConfig)
    if config_path and os.path.exists(config_path):
        cfg = OmegaConf.merge(cfg, OmegaConf.load(config_path))
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_cli(overrides))
    return cfg


def validate_config(cfg: DictConfig) -> None:
    """Validate configuration values against the parameter ranges."""
    assert cfg.canvas.width > 0, "canvas.width must be positive"
    assert cfg.canvas.height > 0, "canvas.height must be positive"
    assert 0 <= cfg.canvas.margin_ratio < 0.5, "canvas.margin_ratio must be in [0, 0.5)"
    assert cfg.canvas.line_width_ratio > 0, "canvas.line_width_ratio must be positive"
    assert cfg.hatch.min_line_space_factor <= cfg.hatch.max_line_space_factor, \
        "hatch.min_line_space_factor must not exceed hatch.max_line_space_factor"

    for param in PARAMETER_RANGES:
        value = OmegaConf.select(cfg, param.key)
        if param.choices is not None:
            assert value in param.choices, \
                f"{param.key} must be one of {', '.join(param.choices)}"
        elif param.minimum is not None:
            assert param.minimum <= value <= param.maximum, \
                f"{param.key} must be between {param.minimum} and {param.maximum}"


def setup_paths(cfg: DictConfig) -> None:
    """Create necessary directories based on configuration."""
    os.makedirs(cfg.paths.output_dir, exist_ok=True)
