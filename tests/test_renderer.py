import pytest

from trimosaic.renderer import RasterSurface, RecordingSurface, SvgSurface, create_surface


def draw_triangle(surface):
    surface.begin_path()
    surface.move_to(10, 10)
    surface.line_to(90, 10)
    surface.line_to(50, 90)
    surface.close_path()


class TestSurfaces:
    """Test cases for drawing surfaces."""

    def test_raster_fill(self):
        """Test filling a path on a raster surface."""
        surface = RasterSurface(100, 100, background='#ffffff')
        draw_triangle(surface)
        surface.fill('#ff0000')

        image = surface.to_image()
        assert image.size == (100, 100)
        assert image.getpixel((50, 40)) == (255, 0, 0, 255)
        assert image.getpixel((5, 95)) == (255, 255, 255, 255)

    def test_raster_background_rect(self):
        surface = RasterSurface(20, 20)
        surface.fill_rect(0, 0, 20, 20, '#00ff00')
        assert surface.to_image().getpixel((19, 19)) == (0, 255, 0, 255)

    def test_raster_stroke(self):
        surface = RasterSurface(50, 50, background='#ffffff')
        surface.begin_path()
        surface.move_to(5, 25)
        surface.line_to(45, 25)
        surface.stroke('#0000ff', 3, 'round')
        assert surface.to_image().getpixel((25, 25)) == (0, 0, 255, 255)

    def test_round_caps_match_line_width(self):
        """Test that round caps are sized from the drawn stroke width."""
        surface = RasterSurface(40, 40)
        surface.begin_path()
        surface.move_to(20, 10)
        surface.line_to(20, 30)
        caps = []
        draw_ellipse = surface.draw.ellipse
        surface.draw.ellipse = lambda box, fill: caps.append(box) or draw_ellipse(box, fill=fill)
        surface.stroke('#0000ff', 0.4, 'round')

        assert len(caps) == 2
        for x0, y0, x1, y1 in caps:
            assert x1 - x0 == pytest.approx(1)
            assert y1 - y0 == pytest.approx(1)
        assert surface.to_image().getpixel((20, 20))[3] == 255

    def test_unpainted_pixels_transparent(self):
        surface = RasterSurface(10, 10)
        image = surface.to_image()
        assert image.mode == 'RGBA'
        assert image.getpixel((5, 5)) == (0, 0, 0, 0)

    def test_svg_paths(self):
        """Test SVG output of filled and stroked paths."""
        surface = SvgSurface(512, 512)
        surface.fill_rect(0, 0, 512, 512, '#ffffff')
        draw_triangle(surface)
        surface.fill('#ff0000')
        surface.begin_path()
        surface.move_to(0, 0)
        surface.line_to(100, 100)
        surface.stroke('#0000ff', 2, 'round')

        svg = surface.to_string()
        assert '<svg' in svg
        assert 'width="512"' in svg
        assert '<path' in svg
        assert 'M10.00,10.00 L90.00,10.00 L50.00,90.00 Z' in svg
        assert 'stroke-linecap="round"' in svg
        assert '<rect' in svg

    def test_recording_surface(self):
        surface = RecordingSurface(100, 100)
        surface.fill_rect(0, 0, 100, 100, '#ffffff')
        draw_triangle(surface)
        surface.fill('#123456')
        surface.circle(5, 5, 2, 'red')

        assert [op[0] for op in surface.operations] == ['fill_rect', 'fill', 'circle']
        assert surface.count('fill') == 1
        path = surface.operations[1][2]
        assert path == [([(10, 10), (90, 10), (50, 90)], True)]

    def test_begin_path_resets(self):
        surface = RecordingSurface(10, 10)
        draw_triangle(surface)
        surface.begin_path()
        assert surface.current_path() == []

    def test_line_to_without_move_to(self):
        surface = RecordingSurface(10, 10)
        surface.line_to(3, 4)
        assert surface.current_path() == [([(3, 4)], False)]

    def test_create_surface(self):
        assert isinstance(create_surface('raster', 10, 10), RasterSurface)
        assert isinstance(create_surface('svg', 10, 10), SvgSurface)
        assert isinstance(create_surface('recording', 10, 10), RecordingSurface)

    def test_create_surface_unknown(self):
        with pytest.raises(ValueError):
            create_surface('canvas', 10, 10)
