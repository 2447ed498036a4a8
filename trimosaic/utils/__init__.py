from .export import output_filename, surface_to_array, save_png, save_svg

__all__ = [
    'output_filename',
    'surface_to_array',
    'save_png',
    'save_svg'
]
