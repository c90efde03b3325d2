"""
Resource Registry - Contributor set and published URL snapshot
Flow: add/remove → rebuild under lock → publish snapshot → notify listeners
"""

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

import structlog
from pydantic import BaseModel, Field

from .contributor import ResourceContributor

logger = structlog.get_logger()


@dataclass(frozen=True)
class ResourceURLSet:
    """CSS and JS resource URLs in contributor order. Never mutated after publish."""
    css: Tuple[str, ...] = ()
    js: Tuple[str, ...] = ()
    
    def is_empty(self) -> bool:
        return not self.css and not self.js


EMPTY_URL_SET = ResourceURLSet()

SnapshotListener = Callable[[ResourceURLSet], None]


class RegistryStats(BaseModel):
    """Resource registry statistics."""
    total_contributors: int = Field(..., description="Registered contributors")
    css_urls: int = Field(..., description="Published CSS URLs")
    js_urls: int = Field(..., description="Published JS URLs")
    skipped_contributors: List[str] = Field(..., description="Contributors left out of the last rebuild")
    rebuild_count: int = Field(..., description="Rebuilds since start")
    last_rebuild_time: Optional[str] = Field(default=None, description="Last rebuild timestamp")


class ResourceRegistry:
    """
    Thread-safe registry of resource contributors.
    
    Concurrency Model:
    - add() / remove() / rebuild run under one lock, so updates are never lost
    - the derived URLs live in one immutable ResourceURLSet that is swapped by
      a single attribute assignment
    - current_urls() reads that attribute without locking, so readers get
      either the old or the new snapshot, never a mix
    
    Contributors are iterated in ascending ``contributor_id`` order, which
    makes the published URL order independent of registration order.
    """
    
    def __init__(self):
        """Initialize an empty registry."""
        self._contributors: Dict[str, ResourceContributor] = {}
        self._lock = threading.Lock()
        self._urls: ResourceURLSet = EMPTY_URL_SET
        self._listeners: List[SnapshotListener] = []
        self._notify_lock = threading.Lock()
        self._notified_count = 0
        
        self._skipped: List[str] = []
        self._rebuild_count = 0
        self._last_rebuild_time: Optional[datetime] = None
        
        self.logger = logger.bind(registry_id="resource_registry")
    
    def add(self, contributor: ResourceContributor) -> bool:
        """
        Register a contributor and rebuild the URL snapshot.
        
        Re-adding a known identity replaces the handle; its URLs are not
        duplicated.
        
        Returns:
            bool: True if the identity was not registered before
        """
        contributor_id = contributor.contributor_id
        with self._lock:
            is_new = contributor_id not in self._contributors
            self._contributors[contributor_id] = contributor
            urls = self._rebuild()
            rebuild_count = self._rebuild_count
        
        self.logger.info("Contributor added", contributor_id=contributor_id, replaced=not is_new)
        self._notify(urls, rebuild_count)
        return is_new
    
    def remove(self, contributor: ResourceContributor) -> bool:
        """
        Deregister a contributor by identity and rebuild the URL snapshot.
        
        Returns:
            bool: True if the contributor was registered, False for a no-op
        """
        return self.remove_by_id(contributor.contributor_id)
    
    def remove_by_id(self, contributor_id: str) -> bool:
        """Deregister a contributor by its identity."""
        with self._lock:
            if contributor_id not in self._contributors:
                return False
            del self._contributors[contributor_id]
            urls = self._rebuild()
            rebuild_count = self._rebuild_count
        
        self.logger.info("Contributor removed", contributor_id=contributor_id)
        self._notify(urls, rebuild_count)
        return True
    
    def current_urls(self) -> ResourceURLSet:
        """Get the last published URL snapshot. Never blocks."""
        return self._urls
    
    def get(self, contributor_id: str) -> Optional[ResourceContributor]:
        """Get a registered contributor handle by identity."""
        return self._contributors.get(contributor_id)
    
    def contributors(self) -> List[str]:
        """Get registered contributor ids in rebuild order."""
        with self._lock:
            return sorted(self._contributors)
    
    def subscribe(self, listener: SnapshotListener) -> None:
        """
        Call ``listener`` with newly published snapshots, oldest first.
        
        When two writers race, a snapshot that was superseded before its
        delivery is dropped, so a listener never sees an older set after a
        newer one. The latest snapshot is always delivered.
        """
        self._listeners.append(listener)
    
    def __len__(self) -> int:
        return len(self._contributors)
    
    def __contains__(self, contributor_id: object) -> bool:
        return contributor_id in self._contributors
    
    def _rebuild(self) -> ResourceURLSet:
        """
        Recompute and publish the URL snapshot. Caller holds the lock.
        
        A contributor whose paths cannot be read is skipped for this pass;
        nothing it returned before failing reaches the snapshot.
        """
        css_urls: List[str] = []
        js_urls: List[str] = []
        skipped: List[str] = []
        
        for contributor_id in sorted(self._contributors):
            contributor = self._contributors[contributor_id]
            try:
                # Paths may be lazy; materialise both lists before touching the accumulators.
                context_path = contributor.get_servlet_context_path()
                css = [context_path + path for path in contributor.get_css_resource_paths()]
                js = [context_path + path for path in contributor.get_js_resource_paths()]
            except Exception as e:
                skipped.append(contributor_id)
                self.logger.warning("Contributor skipped during rebuild",
                                    contributor_id=contributor_id,
                                    error=str(e))
                continue
            
            css_urls.extend(css)
            js_urls.extend(js)
        
        urls = ResourceURLSet(css=tuple(css_urls), js=tuple(js_urls))
        self._urls = urls
        
        self._skipped = skipped
        self._rebuild_count += 1
        self._last_rebuild_time = datetime.utcnow()
        
        self.logger.debug("URL snapshot published",
                          contributors=len(self._contributors),
                          css_urls=len(urls.css),
                          js_urls=len(urls.js),
                          skipped=len(skipped))
        return urls
    
    def _notify(self, urls: ResourceURLSet, rebuild_count: int) -> None:
        with self._notify_lock:
            if rebuild_count <= self._notified_count:
                return  # superseded
            self._notified_count = rebuild_count
            for listener in list(self._listeners):
                try:
                    listener(urls)
                except Exception as e:
                    self.logger.error("Snapshot listener failed", error=str(e))
    
    def get_registry_stats(self) -> RegistryStats:
        """Get registry statistics."""
        with self._lock:
            urls = self._urls
            return RegistryStats(
                total_contributors=len(self._contributors),
                css_urls=len(urls.css),
                js_urls=len(urls.js),
                skipped_contributors=list(self._skipped),
                rebuild_count=self._rebuild_count,
                last_rebuild_time=self._last_rebuild_time.isoformat() if self._last_rebuild_time else None,
            )
