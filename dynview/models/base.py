"""
Base model for dynview.
"""

from pydantic import BaseModel as PydanticBaseModel


class BaseModel(PydanticBaseModel):
    """
    Base model for all dynview data structures.

    Provides common configuration and utilities.
    """

    model_config = {
        # Validate assignments after object creation
        "validate_assignment": True,
        # Reject unknown fields
        "extra": "forbid",
    }
