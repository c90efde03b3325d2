"""
Theme head rendering endpoint
"""

import io
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from theme_contributor.api.dependencies import get_context
from theme_contributor.core.logging import get_logger
from theme_contributor.core.context import ThemeContributorContext
from theme_contributor.schemas.theme import RenderRequest

router = APIRouter()
logger = get_logger(__name__)


@router.get("/top-head", response_class=HTMLResponse)
async def render_top_head(
    css_fast_load: Optional[bool] = Query(None, description="Override the CSS fast load default"),
    js_fast_load: Optional[bool] = Query(None, description="Override the JS fast load default"),
    context: ThemeContributorContext = Depends(get_context),
):
    """Render the markup every include adds after the theme top head."""
    settings = context.settings
    request = RenderRequest(
        css_fast_load=settings.CSS_FAST_LOAD if css_fast_load is None else css_fast_load,
        js_fast_load=settings.JS_FAST_LOAD if js_fast_load is None else js_fast_load,
        portal_url=settings.PORTAL_URL,
        path_context=settings.PATH_CONTEXT,
        path_proxy=settings.PATH_PROXY,
    )
    
    out = io.StringIO()
    includes_run = context.includes.include_all(settings.DYNAMIC_INCLUDE_KEY, request, out)
    fragment = out.getvalue()
    
    logger.info(
        "Theme head rendered",
        include_key=settings.DYNAMIC_INCLUDE_KEY,
        includes_run=includes_run,
        css_fast_load=request.css_fast_load,
        js_fast_load=request.js_fast_load,
        tags=fragment.count("\n"),
        fragment_bytes=len(fragment.encode("utf-8")),
    )
    return HTMLResponse(fragment)
