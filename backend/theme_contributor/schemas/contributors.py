"""
Contributor control plane schemas
"""

from typing import List

from pydantic import BaseModel, Field

from theme_contributor.core.contributor import BundleWebResources
from theme_contributor.core.resource_registry import ResourceURLSet


class RegisterContributorRequest(BundleWebResources):
    """Bundle web resources announced by the host."""


class ContributorResponse(BaseModel):
    contributor_id: str
    servlet_context_path: str
    css_resource_paths: List[str]
    js_resource_paths: List[str]
    created: bool = Field(False, description="False when an existing identity was replaced")


class ResourceURLSetResponse(BaseModel):
    css: List[str]
    js: List[str]
    
    @classmethod
    def from_url_set(cls, urls: ResourceURLSet) -> "ResourceURLSetResponse":
        return cls(css=list(urls.css), js=list(urls.js))
