"""
Matplotlib-based graph rendering.

Draws nodes as rounded boxes with a header band, an optional content band and
port markers, and connectors as cubic curves behind them. All positions come
from the layout engine; one graph unit maps to one point on the figure.
"""

from pathlib import Path
from typing import Optional, Union

from matplotlib.figure import Figure
from matplotlib.patches import FancyBboxPatch, PathPatch, Rectangle
from matplotlib.path import Path as MplPath

from ..config.settings import get_settings
from ..exceptions import RenderError
from ..layout import GraphLayout, LayoutEngine, NodeGeometry
from ..models import Graph, Node, PortSide
from ..monitoring.logger import get_logger
from .base import BaseRenderer

logger = get_logger(__name__)


class MatplotlibRenderer(BaseRenderer):
    """Graph renderer writing PNG, SVG or PDF files through Matplotlib.

    One graph unit is drawn as one typographic point, so font sizes given in
    the theme line up with the pixel constants used to size the nodes.
    Document text is drawn literally; a ``$`` never starts mathtext.
    """

    POINTS_PER_INCH = 72.0
    MAX_FIGURE_INCHES = 200.0
    EMPTY_CANVAS = (0.0, 0.0, 160.0, 60.0)

    def __init__(self, layout_engine: Optional[LayoutEngine] = None,
                 dpi: Optional[int] = None, margin: Optional[float] = None):
        settings = get_settings()
        super().__init__(layout_engine or LayoutEngine(settings.layout_config))
        render_config = settings.render_config
        self.dpi = dpi or render_config['dpi']
        self.margin = render_config['margin'] if margin is None else margin
        self.font_scale = 1.0

    # ========== Public Interface ==========

    def render(self, graph: Graph, output_path: Union[str, Path],
               layout: Optional[GraphLayout] = None) -> Path:
        """Draw ``graph`` to ``output_path``.

        Args:
            graph: Normalized graph to draw
            output_path: Target file; the suffix selects the format
            layout: Precomputed layout (computed here when omitted)

        Returns:
            Path of the written file

        Raises:
            RenderError: if the format is unsupported or the file cannot be written
        """
        output_path = Path(output_path)
        try:
            fmt = self.output_format(output_path)
        except ValueError as e:
            raise RenderError(str(e)) from e

        layout = self.ensure_layout(graph, layout)
        fig = self._create_figure(layout)
        ax = fig.axes[0]

        self._draw_connectors(ax, layout)
        for node in graph.nodes:
            self._draw_node(ax, node, layout.nodes[node.id])

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(output_path, format=fmt, dpi=self.dpi, facecolor=fig.get_facecolor())
        except (OSError, ValueError) as e:
            raise RenderError(f"Could not write {output_path}: {e}") from e

        logger.info("Rendered %d nodes and %d connectors to %s",
                    len(layout.nodes), len(layout.connectors), output_path)
        return output_path

    # ========== Figure Setup ==========

    def _create_figure(self, layout: GraphLayout) -> Figure:
        min_x, min_y, max_x, max_y = layout.bounds() or self.EMPTY_CANVAS
        min_x -= self.margin
        min_y -= self.margin
        max_x += self.margin
        max_y += self.margin

        width_in = (max_x - min_x) / self.POINTS_PER_INCH
        height_in = (max_y - min_y) / self.POINTS_PER_INCH
        self.font_scale = min(1.0, self.MAX_FIGURE_INCHES / max(width_in, height_in))

        fig = Figure(figsize=(width_in * self.font_scale, height_in * self.font_scale))
        fig.patch.set_facecolor(self.config.BACKGROUND_COLOR)
        ax = fig.add_axes((0, 0, 1, 1))
        ax.set_xlim(min_x, max_x)
        # Canvas y grows downward
        ax.set_ylim(max_y, min_y)
        ax.set_aspect('equal')
        ax.axis('off')
        return fig

    def _font(self, size: float) -> float:
        return size * self.font_scale

    # ========== Drawing ==========

    def _draw_connectors(self, ax, layout: GraphLayout):
        codes = [MplPath.MOVETO, MplPath.CURVE4, MplPath.CURVE4, MplPath.CURVE4]
        for connector_layout in layout.connectors:
            vertices = [(p.x, p.y) for p in connector_layout.curve.points]
            color = (self.config.CONNECTOR_COLOR if connector_layout.in_range
                     else self.config.OUT_OF_RANGE_CONNECTOR_COLOR)
            ax.add_patch(PathPatch(
                MplPath(vertices, codes),
                facecolor='none',
                edgecolor=color,
                linewidth=self.config.CONNECTOR_WIDTH * self.font_scale,
                alpha=self.config.CONNECTOR_ALPHA,
                zorder=1,
            ))

    def _draw_node(self, ax, node: Node, geometry: NodeGeometry):
        cfg = self.config
        layout_config = geometry.config
        x, y, width, height = geometry.x, geometry.y, geometry.width, geometry.height

        ax.add_patch(FancyBboxPatch(
            (x, y), width, height,
            boxstyle=f"round,pad=0,rounding_size={cfg.NODE_CORNER_RADIUS}",
            facecolor=cfg.NODE_FILL, edgecolor=cfg.NODE_STROKE, linewidth=1, zorder=2,
        ))
        ax.add_patch(Rectangle(
            (x, y), width, layout_config.header_height,
            facecolor=cfg.HEADER_FILL, edgecolor='none', zorder=3,
        ))

        inner_width = width - 2 * cfg.TEXT_INSET
        title_chars = int(inner_width // layout_config.title_char_width)
        ax.text(
            x + cfg.TEXT_INSET, y + layout_config.header_height / 2,
            self.truncate(node.display_label, title_chars),
            color=cfg.TITLE_COLOR, fontsize=self._font(cfg.TITLE_FONT_SIZE), fontweight='bold',
            ha='left', va='center', zorder=4, parse_math=False,
        )

        if geometry.has_content_band:
            content_chars = int(inner_width // layout_config.port_char_width)
            ax.text(
                x + cfg.TEXT_INSET, y + layout_config.header_height + 5,
                "\n".join(self.content_lines(node, content_chars)),
                color=cfg.CONTENT_COLOR, fontsize=self._font(cfg.CONTENT_FONT_SIZE),
                family=cfg.CONTENT_FONT_FAMILY, ha='left', va='top', zorder=4, parse_math=False,
            )

        for side in (PortSide.INPUT, PortSide.OUTPUT):
            for port in node.ports(side):
                self._draw_port(ax, port.name, geometry, side, port.index)

    def _draw_port(self, ax, name: str, geometry: NodeGeometry, side: PortSide, index: int):
        cfg = self.config
        marker = geometry.config.port_marker_size
        anchor = geometry.anchor(side, index)

        ax.add_patch(Rectangle(
            (anchor.x - marker / 2, anchor.y - marker / 2), marker, marker,
            facecolor=cfg.PORT_FILL, edgecolor=cfg.PORT_STROKE, linewidth=1, zorder=5,
        ))

        if side is PortSide.INPUT:
            label_x, align = anchor.x + cfg.TEXT_INSET, 'left'
        else:
            label_x, align = anchor.x - cfg.TEXT_INSET, 'right'
        ax.text(
            label_x, anchor.y, name,
            color=cfg.PORT_LABEL_COLOR, fontsize=self._font(cfg.PORT_FONT_SIZE),
            ha=align, va='center', zorder=5, parse_math=False,
        )
