"""
Contributor control plane endpoints
Flow: host bundle events → HTTP → lifecycle → registry rebuild
"""

from typing import List

from fastapi import APIRouter, Depends, status

from theme_contributor.api.dependencies import get_lifecycle, get_registry
from theme_contributor.core.exceptions import NotFoundError, ValidationError
from theme_contributor.core.lifecycle import ContributorLifecycle
from theme_contributor.core.resource_registry import RegistryStats, ResourceRegistry
from theme_contributor.schemas.contributors import (
    ContributorResponse,
    RegisterContributorRequest,
    ResourceURLSetResponse,
)

router = APIRouter()


@router.get("/", response_model=List[str])
async def list_contributors(registry: ResourceRegistry = Depends(get_registry)):
    """List registered contributor ids in rendering order."""
    return registry.contributors()


@router.post("/", response_model=ContributorResponse, status_code=status.HTTP_201_CREATED)
async def register_contributor(
    contributor: RegisterContributorRequest,
    registry: ResourceRegistry = Depends(get_registry),
    lifecycle: ContributorLifecycle = Depends(get_lifecycle),
):
    """Announce a contributing bundle as available."""
    for path in [*contributor.css_resource_paths, *contributor.js_resource_paths]:
        if not path.startswith("/"):
            raise ValidationError(
                "Resource paths must start with '/'",
                field="resource_paths",
                value=path,
            )
    
    created = contributor.contributor_id not in registry
    lifecycle.bundle_available(contributor)
    
    return ContributorResponse(
        contributor_id=contributor.contributor_id,
        servlet_context_path=contributor.servlet_context_path,
        css_resource_paths=contributor.css_resource_paths,
        js_resource_paths=contributor.js_resource_paths,
        created=created,
    )


@router.delete("/{contributor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unregister_contributor(
    contributor_id: str,
    registry: ResourceRegistry = Depends(get_registry),
    lifecycle: ContributorLifecycle = Depends(get_lifecycle),
):
    """Announce a contributing bundle as stopped."""
    contributor = registry.get(contributor_id)
    if contributor is None:
        raise NotFoundError(
            f"Contributor {contributor_id} is not registered",
            resource_type="contributor",
            resource_id=contributor_id,
        )
    
    lifecycle.bundle_unavailable(contributor)


@router.get("/urls", response_model=ResourceURLSetResponse)
async def current_urls(registry: ResourceRegistry = Depends(get_registry)):
    """Get the published resource URL snapshot."""
    return ResourceURLSetResponse.from_url_set(registry.current_urls())


@router.get("/stats", response_model=RegistryStats)
async def registry_stats(registry: ResourceRegistry = Depends(get_registry)):
    """Get registry statistics."""
    return registry.get_registry_stats()
