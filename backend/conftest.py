from typing import List

import pytest
from fastapi.testclient import TestClient

from theme_contributor.core.contributor import BundleWebResources
from theme_contributor.core.exceptions import ContributorUnavailableError
from theme_contributor.core.resource_registry import ResourceRegistry
from theme_contributor.schemas.theme import RenderRequest


class FlakyContributor:
    """Contributor whose bundle stops after ``fail_after`` successful reads."""
    
    def __init__(self, contributor_id: str, context_path: str, css: List[str], js: List[str], fail_after: int = 0):
        self.contributor_id = contributor_id
        self._context_path = context_path
        self._css = css
        self._js = js
        self._reads_left = fail_after
    
    def _read(self):
        if self._reads_left <= 0:
            raise ContributorUnavailableError(
                "Bundle stopped", contributor_id=self.contributor_id
            )
        self._reads_left -= 1
    
    def get_servlet_context_path(self) -> str:
        self._read()
        return self._context_path
    
    def get_css_resource_paths(self) -> List[str]:
        self._read()
        return list(self._css)
    
    def get_js_resource_paths(self) -> List[str]:
        self._read()
        return list(self._js)


@pytest.fixture
def registry() -> ResourceRegistry:
    return ResourceRegistry()


@pytest.fixture
def bundle_a() -> BundleWebResources:
    return BundleWebResources(
        contributor_id="a",
        servlet_context_path="/o/a",
        css_resource_paths=["/css/main.css"],
        js_resource_paths=["/js/main.js", "/js/extra.js"],
    )


@pytest.fixture
def bundle_b() -> BundleWebResources:
    return BundleWebResources(
        contributor_id="b",
        servlet_context_path="/o/b",
        css_resource_paths=["/b.css"],
        js_resource_paths=[],
    )


@pytest.fixture
def render_request() -> RenderRequest:
    return RenderRequest(
        css_fast_load=True,
        js_fast_load=True,
        portal_url="http://portal.test",
        path_context="/ctx",
        path_proxy="/proxy",
    )


@pytest.fixture
def client():
    from theme_contributor.main import create_app
    
    with TestClient(create_app()) as test_client:
        yield test_client
