"""
Theme render schemas
"""

from pydantic import BaseModel, Field


class RenderRequest(BaseModel):
    """Per-render display context supplied by the host."""
    css_fast_load: bool = Field(True, description="Combine CSS into one combo request")
    js_fast_load: bool = Field(True, description="Combine JS into one combo request")
    portal_url: str = Field("", description="Absolute site base, e.g. https://portal.example.com")
    path_context: str = Field("", description="Portal context path")
    path_proxy: str = Field("", description="Proxy path prefix")
    
    model_config = {"frozen": True}
