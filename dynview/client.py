"""
Simple client interface for loading and laying out graph documents.

Usage:
    from dynview import GraphLoader

    loader = GraphLoader()
    graph = loader.load("example.dyn")
    print(loader.status)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .config.layout import LayoutConfig
from .config.settings import get_settings
from .exceptions import DocumentReadError
from .layout import GraphLayout, LayoutEngine
from .models import Graph
from .monitoring.logger import get_logger
from .normalizer import SchemaNormalizer

logger = get_logger(__name__)


def read_document(path: Union[str, Path]) -> bytes:
    """
    Read a document's raw bytes; the file handle is closed before returning.

    Raises:
        DocumentReadError: if the file cannot be opened or read
    """
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise DocumentReadError(f"Could not read {path}: {e}") from e


@dataclass(frozen=True)
class LoadedGraph:
    """A normalized graph together with the layout measured for it."""

    path: Optional[Path]
    graph: Graph
    layout: GraphLayout

    @property
    def status(self) -> str:
        source = self.path.name if self.path else "<text>"
        return (f"Loaded: {source} | Nodes: {len(self.graph.nodes)}, "
                f"Connectors: {len(self.graph.connectors)}")


class GraphLoader:
    """
    Simple interface for the load, normalize and layout pipeline.

    Keeps the most recently loaded graph. A failed load raises and leaves
    that graph in place.
    """

    def __init__(self,
                 layout_config: Optional[LayoutConfig] = None,
                 normalizer: Optional[SchemaNormalizer] = None):
        """
        Initialize the loader.

        Args:
            layout_config: Layout constants (defaults to the configured settings)
            normalizer: Schema normalizer (defaults to every known variant)
        """
        self.layout_engine = LayoutEngine(layout_config or get_settings().layout_config)
        self.normalizer = normalizer or SchemaNormalizer()
        self.current: Optional[LoadedGraph] = None

    @property
    def graph(self) -> Optional[Graph]:
        return self.current.graph if self.current else None

    @property
    def layout(self) -> Optional[GraphLayout]:
        return self.current.layout if self.current else None

    @property
    def status(self) -> str:
        return self.current.status if self.current else "No graph loaded"

    def load(self, path: Union[str, Path]) -> Graph:
        """
        Load a document from disk.

        Args:
            path: Path to a ``.dyn``/``.json`` document

        Returns:
            The normalized graph

        Raises:
            DocumentReadError: if the file cannot be read
            MalformedDocumentError: if the file is not parseable structured data
        """
        path = Path(path)
        logger.info("Loading %s", path)
        raw = read_document(path)
        return self._accept(path, raw)

    def load_text(self, text: Union[str, bytes]) -> Graph:
        """Load a document that is already in memory."""
        return self._accept(None, text)

    def _accept(self, path: Optional[Path], raw: Union[str, bytes]) -> Graph:
        graph = self.normalizer.normalize(raw)
        layout = self.layout_engine.layout(graph)
        # Swapped in only after every step succeeded
        self.current = LoadedGraph(path=path, graph=graph, layout=layout)
        logger.info(self.current.status)
        return graph


def load_graph(path: Union[str, Path], layout_config: Optional[LayoutConfig] = None) -> LoadedGraph:
    """Convenience function to load one document with its layout."""
    loader = GraphLoader(layout_config=layout_config)
    loader.load(path)
    return loader.current
