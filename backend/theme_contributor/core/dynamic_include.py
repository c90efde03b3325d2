"""
Theme head dynamic include
Flow: page render → registry snapshot → CSS (combo | simple) → JS (combo | simple) → response stream
"""

from collections import defaultdict
from typing import Dict, List, Protocol, TextIO

import structlog

from theme_contributor.config.settings import get_settings
from theme_contributor.schemas.theme import RenderRequest

from .aggregator import ResourceAggregator
from .host import FreshnessSource
from .link_renderer import LinkKind, render_links
from .resource_registry import ResourceRegistry

logger = structlog.get_logger()


class DynamicInclude(Protocol):
    """Render hook invoked by the host at a template point."""
    
    def include(self, request: RenderRequest, out: TextIO) -> None: ...
    
    def register(self, dynamic_include_registry: "DynamicIncludeRegistry") -> None: ...


class DynamicIncludeRegistry:
    """Host side: template points and the includes rendered after them."""
    
    def __init__(self):
        self._includes: Dict[str, List[DynamicInclude]] = defaultdict(list)
    
    def add(self, dynamic_include: DynamicInclude) -> None:
        """Let an include register itself at the points it wants."""
        dynamic_include.register(self)
    
    def register(self, key: str, dynamic_include: DynamicInclude) -> None:
        self._includes[key].append(dynamic_include)
        logger.info("Dynamic include registered", key=key,
                    include=type(dynamic_include).__name__)
    
    def include_all(self, key: str, request: RenderRequest, out: TextIO) -> int:
        """Render every include registered at ``key``. Returns how many ran."""
        includes = list(self._includes.get(key, ()))
        for dynamic_include in includes:
            dynamic_include.include(request, out)
        return len(includes)
    
    def keys(self) -> List[str]:
        return sorted(self._includes)


class ThemeContributorInclude:
    """
    Writes the contributed CSS and JS links into the theme head.
    
    CSS and JS branch independently on their fast load toggles. The only
    error that leaves include() is RenderWriteError from the output stream.
    """
    
    def __init__(
        self,
        registry: ResourceRegistry,
        freshness: FreshnessSource,
        aggregator: ResourceAggregator | None = None,
        include_key: str | None = None,
    ):
        self._registry = registry
        self._freshness = freshness
        self._aggregator = aggregator or ResourceAggregator()
        self._include_key = include_key or get_settings().DYNAMIC_INCLUDE_KEY
    
    def include(self, request: RenderRequest, out: TextIO) -> None:
        urls = self._registry.current_urls()
        last_modified = self._freshness.get_last_modified()
        
        for kind, resource_urls, fast_load in (
            (LinkKind.CSS, urls.css, request.css_fast_load),
            (LinkKind.JS, urls.js, request.js_fast_load),
        ):
            links = self._aggregator.aggregate(
                resource_urls, last_modified, fast_load, kind, request
            )
            render_links(out, links, kind.renderer)
    
    def register(self, dynamic_include_registry: DynamicIncludeRegistry) -> None:
        dynamic_include_registry.register(self._include_key, self)
