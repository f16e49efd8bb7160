"""
Common exceptions for dynview.
"""


class DynViewError(Exception):
    """Base exception for all dynview errors."""
    pass


class MalformedDocumentError(DynViewError):
    """Raised when a graph document cannot be parsed as structured data."""
    pass


class DocumentReadError(DynViewError):
    """Raised when a graph document cannot be read from disk."""
    pass


class ConfigurationError(DynViewError):
    """Raised when there are configuration issues."""
    pass


class RenderError(DynViewError):
    """Raised when drawing or exporting a graph fails."""
    pass
