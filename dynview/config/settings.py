"""
Centralized configuration management for dynview.

All environment variables and settings are managed here so the loader, the
layout engine, the renderer and the CLI read the same values.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional, Dict, Any
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from ..exceptions import ConfigurationError
from .layout import LayoutConfig


class Settings(BaseSettings):
    """
    Centralized settings for dynview.

    Every value can be overridden with a ``DYNVIEW_``-prefixed environment
    variable or a ``.env`` file. Uses Pydantic for validation and type safety.
    """

    # === Application Settings ===
    app_name: str = Field(default="dynview", description="Application name")
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")

    # === Rendering Settings ===
    output_dir: Path = Field(default=Path("renders"), description="Default directory for rendered files")
    render_dpi: int = Field(default=150, description="Raster resolution for rendered images")
    render_margin: float = Field(default=40.0, description="Blank border around the drawing in graph units")

    # === Layout Settings ===
    layout_min_node_width: float = Field(default=160.0, description="Minimum node width")
    layout_min_node_height: float = Field(default=60.0, description="Minimum node height")
    layout_title_char_width: float = Field(default=8.0, description="Pixels per title character")
    layout_title_padding: float = Field(default=30.0, description="Padding added to the title width")
    layout_port_char_width: float = Field(default=7.0, description="Pixels per port label character")
    layout_port_column_gap: float = Field(default=40.0, description="Gap between input and output label columns")
    layout_row_pitch: float = Field(default=20.0, description="Vertical distance between port rows")
    layout_header_allowance: float = Field(default=40.0, description="Height added on top of port rows")
    layout_content_allowance: float = Field(default=40.0, description="Height of the code/value content band")
    layout_header_offset: float = Field(default=35.0, description="Offset of the first port row from the node top")
    layout_header_height: float = Field(default=25.0, description="Height of the drawn header band")
    layout_port_marker_size: float = Field(default=10.0, description="Port marker edge length")
    layout_min_curve_offset: float = Field(default=50.0, description="Minimum connector control-point offset")

    # === Logging Configuration ===
    @property
    def logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return {
            'level': self.log_level,
            'file': self.log_file,
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        }

    # === Rendering Configuration ===
    @property
    def render_config(self) -> Dict[str, Any]:
        """Get rendering configuration."""
        return {
            'output_dir': self.output_dir,
            'dpi': self.render_dpi,
            'margin': self.render_margin,
        }

    # === Layout Configuration ===
    @property
    def layout_config(self) -> LayoutConfig:
        """Build the immutable layout constants from the ``layout_*`` fields."""
        prefix = 'layout_'
        values = {
            name[len(prefix):]: getattr(self, name)
            for name in type(self).model_fields
            if name.startswith(prefix)
        }
        return LayoutConfig(**values)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @field_validator('render_dpi')
    @classmethod
    def validate_dpi(cls, v):
        if v <= 0:
            raise ValueError("render_dpi must be positive")
        return v

    @field_validator(
        'layout_min_node_width', 'layout_min_node_height', 'layout_title_char_width',
        'layout_port_char_width', 'layout_row_pitch', 'layout_port_marker_size',
    )
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Layout sizes must be positive")
        return v

    @field_validator(
        'layout_title_padding', 'layout_port_column_gap', 'layout_header_allowance',
        'layout_content_allowance', 'layout_header_offset', 'layout_header_height',
        'layout_min_curve_offset', 'render_margin',
    )
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("Layout offsets must not be negative")
        return v

    model_config = {
        "env_prefix": "DYNVIEW_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_settings(**overrides) -> Settings:
    """Build a fresh Settings instance, wrapping validation failures."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid dynview settings: {e}") from e


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once per process.
    """
    return load_settings()


def reload_settings() -> Settings:
    """Drop the cached settings and load them again from the environment."""
    get_settings.cache_clear()
    return get_settings()
