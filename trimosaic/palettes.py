"""
Palette provider.

Palettes ship as package data in palettes.yaml and are grouped into a fixed
set of libraries. Every library answers the same two questions: all of its
palettes, or one picked with the render's random source.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Union

from omegaconf import OmegaConf

from .random_source import RandomSource

PALETTES_FILE = Path(__file__).parent / 'palettes.yaml'


class ColorLibrary(Enum):
    """Palette libraries available to a render."""
    NICE_COLOR_PALETTES = "nice_color_palettes"
    CHROMOTOME = "chromotome"


@dataclass
class Palette:
    name: str
    colors: List[str] = field(default_factory=list)
    background: Optional[str] = None
    stroke: Optional[str] = None


@lru_cache(maxsize=None)
def _load_palette_data() -> Dict[str, list]:
    return OmegaConf.to_container(OmegaConf.load(PALETTES_FILE), resolve=True)


def _to_palette(library: ColorLibrary, index: int, entry: Union[list, dict]) -> Palette:
    # nice_color_palettes entries are bare color lists
    if isinstance(entry, list):
        return Palette(name=f"{library.value}-{index}", colors=list(entry))
    return Palette(
        name=entry.get('name', f"{library.value}-{index}"),
        colors=list(entry['colors']),
        background=entry.get('background'),
        stroke=entry.get('stroke'),
    )


class PaletteSource:
    """One palette library."""

    def __init__(self, library: ColorLibrary):
        self.library = library
        entries = _load_palette_data()[library.value]
        self._palettes = [_to_palette(library, i, entry) for i, entry in enumerate(entries)]

    @property
    def name(self) -> str:
        return self.library.value

    def get_all(self) -> List[Palette]:
        return list(self._palettes)

    def get_random(self, rng: RandomSource) -> Palette:
        return rng.pick(self._palettes)

    def __len__(self) -> int:
        return len(self._palettes)


def library_names() -> List[str]:
    return [library.value for library in ColorLibrary]


def get_palette_source(library: Union[str, ColorLibrary]) -> PaletteSource:
    """
    Look up a palette library by name.

    Raises:
        KeyError: If no library has that name
    """
    if isinstance(library, ColorLibrary):
        return PaletteSource(library)
    try:
        return PaletteSource(ColorLibrary(library))
    except ValueError:
        raise KeyError(f"Unknown color library '{library}'. "
                       f"Available: {', '.join(library_names())}") from None
