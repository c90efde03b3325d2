"""
Pydantic schemas
"""

from .theme import RenderRequest
from .contributors import (
    ContributorResponse,
    ResourceURLSetResponse,
    RegisterContributorRequest,
)

__all__ = [
    "RenderRequest",
    "ContributorResponse",
    "ResourceURLSetResponse",
    "RegisterContributorRequest",
]
