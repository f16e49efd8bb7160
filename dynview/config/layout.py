"""
Immutable layout constants shared by every geometry computation.
"""

from dataclasses import dataclass, fields
from typing import Dict


@dataclass(frozen=True)
class LayoutConfig:
    """
    Pixel constants used to size nodes and place ports and connectors.

    A single instance is threaded through the geometry engine so that node
    sizing, port anchoring and connector shaping always use the same numbers.
    """

    min_node_width: float = 160.0
    min_node_height: float = 60.0

    # Label measurement
    title_char_width: float = 8.0
    title_padding: float = 30.0
    port_char_width: float = 7.0
    port_column_gap: float = 40.0

    # Vertical rhythm
    row_pitch: float = 20.0
    header_allowance: float = 40.0
    content_allowance: float = 40.0
    header_offset: float = 35.0
    header_height: float = 25.0
    port_marker_size: float = 10.0

    # Connectors
    min_curve_offset: float = 50.0

    def __post_init__(self):
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"{f.name} must not be negative")

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_LAYOUT_CONFIG = LayoutConfig()
