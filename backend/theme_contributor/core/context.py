"""
Service wiring
Flow: process start → build registry, lifecycle, freshness, includes → hand to the app
"""

from dataclasses import dataclass

import structlog

from theme_contributor.config.settings import Settings, get_settings

from .aggregator import ResourceAggregator
from .dynamic_include import DynamicIncludeRegistry, ThemeContributorInclude
from .host import LastModifiedTracker
from .lifecycle import ContributorLifecycle
from .resource_registry import ResourceRegistry

logger = structlog.get_logger()


@dataclass
class ThemeContributorContext:
    """Process-lifetime objects shared by every request."""
    settings: Settings
    registry: ResourceRegistry
    lifecycle: ContributorLifecycle
    freshness: LastModifiedTracker
    includes: DynamicIncludeRegistry
    theme_include: ThemeContributorInclude


def build_context(settings: Settings | None = None) -> ThemeContributorContext:
    """
    Build and wire the theme contributor objects.
    
    Wiring:
    1. lifecycle events feed the registry
    2. every published snapshot bumps the freshness stamp
    3. the theme include registers at the top head point
    """
    settings = settings or get_settings()
    
    registry = ResourceRegistry()
    freshness = LastModifiedTracker()
    registry.subscribe(lambda urls: freshness.touch())
    
    lifecycle = ContributorLifecycle()
    lifecycle.subscribe(registry)
    
    theme_include = ThemeContributorInclude(
        registry,
        freshness,
        aggregator=ResourceAggregator(combo_path=settings.COMBO_PATH),
        include_key=settings.DYNAMIC_INCLUDE_KEY,
    )
    includes = DynamicIncludeRegistry()
    includes.add(theme_include)
    
    logger.info("Theme contributor context built", include_keys=includes.keys())
    
    return ThemeContributorContext(
        settings=settings,
        registry=registry,
        lifecycle=lifecycle,
        freshness=freshness,
        includes=includes,
        theme_include=theme_include,
    )
