"""
Application Settings using Pydantic Settings
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # Application
    APP_NAME: str = Field(default="Theme Contributor Service")
    APP_VERSION: str = Field(default="0.1.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")
    
    # Backend Server
    BACKEND_HOST: str = Field(default="localhost")
    BACKEND_PORT: int = Field(default=8080)
    
    # Portal URLs
    PORTAL_URL: str = Field(default="http://localhost:8080")
    PATH_CONTEXT: str = Field(default="")
    PATH_PROXY: str = Field(default="")
    COMBO_PATH: str = Field(default="/combo")
    
    # Cache busting: empty name appends the bare timestamp
    FRESHNESS_PARAM: str = Field(default="")
    
    # Theme display defaults
    CSS_FAST_LOAD: bool = Field(default=True)
    JS_FAST_LOAD: bool = Field(default=True)
    
    # Render hook point
    DYNAMIC_INCLUDE_KEY: str = Field(default="/html/common/themes/top_head.jsp#post")
    
    # CORS
    CORS_ORIGINS: List[str] = Field(default=["http://localhost:8080"])
    
    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
