"""
Host collaborators: static resource URLs and freshness timestamps
Flow: contributions change → tracker touched → renders read last modified → URLs carry the stamp
"""

import threading
import time
from typing import Optional, Protocol

from theme_contributor.config.settings import get_settings


class StaticResourceURLBuilder(Protocol):
    """Builds a cache-busted static resource URL."""
    
    def __call__(self, uri: str, query_string: Optional[str], timestamp: int) -> str: ...


class FreshnessSource(Protocol):
    """Source of the freshness token for contributed resources."""
    
    def get_last_modified(self) -> int: ...


def freshness_parameter(timestamp: int, param_name: Optional[str] = None) -> str:
    """
    Format the cache-busting query segment.
    
    An empty parameter name yields the bare timestamp, which is the shape the
    combo endpoint expects: ``minifierType=css&123&/a/x.css``.
    """
    if param_name is None:
        param_name = get_settings().FRESHNESS_PARAM
    if param_name:
        return f"{param_name}={timestamp}"
    return str(timestamp)


def append_freshness_query(uri: str, query_string: Optional[str], timestamp: int) -> str:
    """Default StaticResourceURLBuilder: ``uri?query&stamp``."""
    parts = []
    if query_string:
        parts.append(query_string)
    parts.append(freshness_parameter(timestamp))
    
    separator = "&" if "?" in uri else "?"
    return uri + separator + "&".join(parts)


class LastModifiedTracker:
    """
    In-memory FreshnessSource.
    
    The stamp is wall clock milliseconds and only ever replaced, never
    compared, so it carries no ordering guarantee.
    """
    
    def __init__(self, initial: Optional[int] = None):
        self._lock = threading.Lock()
        self._last_modified = initial if initial is not None else _now_millis()
    
    def get_last_modified(self) -> int:
        return self._last_modified
    
    def touch(self, timestamp: Optional[int] = None) -> int:
        """Record a change to the contributed resources."""
        with self._lock:
            self._last_modified = timestamp if timestamp is not None else _now_millis()
            return self._last_modified


def _now_millis() -> int:
    return int(time.time() * 1000)
