"""
Interaction Package

Read-only consumers of tracker output: hit testing and render styling.
"""

from .hit_test import capture_radius, find_hit, find_hits, is_stable
from .render_style import RenderStyle, render_style

__all__ = [
    "RenderStyle",
    "capture_radius",
    "find_hit",
    "find_hits",
    "is_stable",
    "render_style",
]
