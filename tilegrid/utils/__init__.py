from .export import render_text, export_grid_to_png, DEFAULT_COLORS

__all__ = ['render_text', 'export_grid_to_png', 'DEFAULT_COLORS']
