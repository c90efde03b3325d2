"""
Resource contributor handles
Flow: bundle starts → handle created → registry reads paths on each rebuild → bundle stops
"""

from typing import List, Protocol, runtime_checkable

from pydantic import BaseModel, Field


@runtime_checkable
class ResourceContributor(Protocol):
    """
    Handle for a bundle that supplies web resources.
    
    ``contributor_id`` is the stable identity used for set membership and
    ordering. The getters are called on every rebuild and may raise
    ContributorUnavailableError when the bundle stops mid-read.
    """
    
    @property
    def contributor_id(self) -> str: ...
    
    def get_servlet_context_path(self) -> str: ...
    
    def get_css_resource_paths(self) -> List[str]: ...
    
    def get_js_resource_paths(self) -> List[str]: ...


class BundleWebResources(BaseModel):
    """In-memory contributor with a fixed set of resource paths."""
    
    contributor_id: str = Field(..., min_length=1, description="Stable bundle identity")
    servlet_context_path: str = Field(default="", description="Context path prefix, e.g. /o/my-theme-contributor")
    css_resource_paths: List[str] = Field(default_factory=list, description="CSS paths under the context path")
    js_resource_paths: List[str] = Field(default_factory=list, description="JS paths under the context path")
    
    def get_servlet_context_path(self) -> str:
        return self.servlet_context_path
    
    def get_css_resource_paths(self) -> List[str]:
        return list(self.css_resource_paths)
    
    def get_js_resource_paths(self) -> List[str]:
        return list(self.js_resource_paths)
