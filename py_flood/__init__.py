"""Flood simulation over elevation grids."""

__version__ = "0.1.0"
