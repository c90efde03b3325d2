"""
Resource Aggregator - combo vs. simple URL building
Flow: resource URLs + freshness token → fast load? → one combo URL | one URL per resource
"""

from typing import List, Optional, Sequence

from theme_contributor.config.settings import get_settings
from theme_contributor.schemas.theme import RenderRequest

from .host import StaticResourceURLBuilder, append_freshness_query
from .link_renderer import LinkKind


class ResourceAggregator:
    """
    Turns published resource URLs into the URLs a page should request.
    
    Modes:
    - fast load: a single combo URL,
      ``{path_context}{combo_path}?minifierType={kind}&{stamp}&{url1}&{url2}...``
    - simple: ``{portal_url}{path_proxy}{url}`` plus the stamp, per resource
    
    Input order is kept in both modes; resource URLs are appended verbatim.
    """
    
    def __init__(
        self,
        url_builder: Optional[StaticResourceURLBuilder] = None,
        combo_path: Optional[str] = None,
    ):
        self._url_builder = url_builder or append_freshness_query
        self._combo_path = combo_path if combo_path is not None else get_settings().COMBO_PATH
    
    def aggregate(
        self,
        resource_urls: Sequence[str],
        freshness_token: int,
        fast_load: bool,
        kind: LinkKind,
        request: RenderRequest,
    ) -> List[str]:
        """Build the URLs to render; empty input renders nothing."""
        if not resource_urls:
            return []
        
        if fast_load:
            return [self.combo_url(resource_urls, freshness_token, kind, request)]
        
        return self.static_urls(resource_urls, freshness_token, request)
    
    def combo_url(
        self,
        resource_urls: Sequence[str],
        freshness_token: int,
        kind: LinkKind,
        request: RenderRequest,
    ) -> str:
        """Build one combo request URL covering every resource."""
        base = self._url_builder(
            request.path_context + self._combo_path,
            f"minifierType={kind.value}",
            freshness_token,
        )
        return "".join([base, *("&" + url for url in resource_urls)])
    
    def static_urls(
        self,
        resource_urls: Sequence[str],
        freshness_token: int,
        request: RenderRequest,
    ) -> List[str]:
        """Build one absolute static resource URL per resource."""
        prefix = request.portal_url + request.path_proxy
        return [
            self._url_builder(prefix + url, None, freshness_token)
            for url in resource_urls
        ]
