"""
Rendering and export backends for dynview.

Usage:
    from dynview.visualization import MatplotlibRenderer

    renderer = MatplotlibRenderer()
    renderer.render(graph, 'graph.png')
"""

from .base import BaseRenderer, RenderConfig
from .matplotlib_renderer import MatplotlibRenderer
from .networkx_export import to_networkx, write_graphml

__all__ = [
    'BaseRenderer',
    'RenderConfig',
    'MatplotlibRenderer',
    'to_networkx',
    'write_graphml',
]
