"""
Rendering of flood states.
"""

from .text import ConsoleSink, RENDERERS, render_basic, render_values, render_shade

__all__ = ['ConsoleSink', 'RENDERERS', 'render_basic', 'render_values', 'render_shade']
