from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

import svgwrite
from PIL import Image, ImageDraw

Point = Tuple[float, float]


class DrawingSurface(ABC):
    """
    Canvas-like drawing target.

    Paths are built with begin_path/move_to/line_to/close_path and then
    painted with fill or stroke. Subclasses only implement the painting.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._subpaths: List[List[Point]] = []
        self._closed: List[bool] = []

    def begin_path(self) -> None:
        self._subpaths = []
        self._closed = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([(x, y)])
        self._closed.append(False)

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(x, y)
            return
        self._subpaths[-1].append((x, y))

    def close_path(self) -> None:
        if self._subpaths:
            self._closed[-1] = True

    def current_path(self) -> List[Tuple[List[Point], bool]]:
        return [(list(points), closed) for points, closed in zip(self._subpaths, self._closed)]

    @abstractmethod
    def fill(self, color: str) -> None:
        """Fill the current path."""

    @abstractmethod
    def stroke(self, color: str, width: float, cap: str = 'butt') -> None:
        """Stroke the current path."""

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        pass

    @abstractmethod
    def circle(self, x: float, y: float, radius: float, color: str) -> None:
        pass


class RasterSurface(DrawingSurface):
    """Pixel surface backed by a Pillow image."""

    def __init__(self, width: int, height: int, background: Optional[str] = None):
        super().__init__(width, height)
        fill = background if background is not None else (0, 0, 0, 0)
        self.image = Image.new('RGBA', (width, height), fill)
        self.draw = ImageDraw.Draw(self.image, 'RGBA')

    def fill(self, color: str) -> None:
        for points, _ in self.current_path():
            if len(points) >= 3:
                self.draw.polygon(points, fill=color)

    def stroke(self, color: str, width: float, cap: str = 'butt') -> None:
        line_width = max(1, int(round(width)))
        for points, closed in self.current_path():
            if closed and points[0] != points[-1]:
                points = points + [points[0]]
            if len(points) >= 2:
                self.draw.line(points, fill=color, width=line_width, joint='curve')
            if cap == 'round':
                radius = line_width / 2
                for x, y in (points[0], points[-1]):
                    self.draw.ellipse([x - radius, y - radius, x + radius, y + radius], fill=color)

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        self.draw.rectangle([x, y, x + width - 1, y + height - 1], fill=color)

    def circle(self, x: float, y: float, radius: float, color: str) -> None:
        self.draw.ellipse([x - radius, y - radius, x + radius, y + radius], fill=color)

    def to_image(self) -> Image.Image:
        """RGBA copy of the surface; unpainted pixels stay transparent."""
        return self.image.copy()

    def save(self, path: str) -> None:
        self.to_image().save(path)


class SvgSurface(DrawingSurface):
    """Vector surface emitting SVG path elements through svgwrite."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.drawing = svgwrite.Drawing(size=(width, height), profile='full', debug=False)

    def path_data(self) -> str:
        commands = []
        for points, closed in self.current_path():
            x, y = points[0]
            commands.append(f"M{x:.2f},{y:.2f}")
            for x, y in points[1:]:
                commands.append(f"L{x:.2f},{y:.2f}")
            if closed:
                commands.append("Z")
        return ' '.join(commands)

    def fill(self, color: str) -> None:
        if self._subpaths:
            self.drawing.add(self.drawing.path(d=self.path_data(), fill=color, stroke='none'))

    def stroke(self, color: str, width: float, cap: str = 'butt') -> None:
        if self._subpaths:
            self.drawing.add(self.drawing.path(
                d=self.path_data(), fill='none', stroke=color,
                stroke_width=width, stroke_linecap=cap))

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        self.drawing.add(self.drawing.rect(insert=(x, y), size=(width, height), fill=color))

    def circle(self, x: float, y: float, radius: float, color: str) -> None:
        self.drawing.add(self.drawing.circle(center=(x, y), r=radius, fill=color))

    def to_string(self) -> str:
        return self.drawing.tostring()

    def save(self, path: str) -> None:
        self.drawing.saveas(path)


class RecordingSurface(DrawingSurface):
    """Surface that only records painting calls, for tests and dry runs."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.operations: List[tuple] = []

    def fill(self, color: str) -> None:
        self.operations.append(('fill', color, self.current_path()))

    def stroke(self, color: str, width: float, cap: str = 'butt') -> None:
        self.operations.append(('stroke', color, width, cap, self.current_path()))

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        self.operations.append(('fill_rect', x, y, width, height, color))

    def circle(self, x: float, y: float, radius: float, color: str) -> None:
        self.operations.append(('circle', x, y, radius, color))

    def count(self, name: str) -> int:
        return sum(1 for op in self.operations if op[0] == name)


SURFACE_TYPES = {
    'raster': RasterSurface,
    'svg': SvgSurface,
    'recording': RecordingSurface,
}


def create_surface(kind: str, width: int, height: int) -> DrawingSurface:
    """Create a drawing surface by name."""
    if kind not in SURFACE_TYPES:
        raise ValueError(f"Unknown surface type '{kind}'. "
                         f"Available: {', '.join(SURFACE_TYPES)}")
    return SURFACE_TYPES[kind](width, height)
