"""
Contributor lifecycle notifications
Flow: host reports bundle available/unavailable → lifecycle → subscribed listeners add/remove
"""

import threading
from typing import Callable, Dict, List, Protocol

import structlog

from .contributor import ResourceContributor

logger = structlog.get_logger()


class ContributorListener(Protocol):
    """Receives contributor lifecycle events. ResourceRegistry is one."""
    
    def add(self, contributor: ResourceContributor) -> bool: ...
    
    def remove(self, contributor: ResourceContributor) -> bool: ...


class ContributorLifecycle:
    """
    Observer hub between the host's bundle events and contributor listeners.
    
    Listeners that subscribe late are replayed every contributor that is
    currently available, so subscription order does not matter.
    """
    
    def __init__(self):
        self._available: Dict[str, ResourceContributor] = {}
        self._listeners: List[ContributorListener] = []
        self._lock = threading.RLock()
        self.logger = logger.bind(module="contributor_lifecycle")
    
    def subscribe(self, listener: ContributorListener) -> None:
        with self._lock:
            self._listeners.append(listener)
            for contributor_id in sorted(self._available):
                self._deliver(listener.add, self._available[contributor_id], "add")
    
    def unsubscribe(self, listener: ContributorListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
    
    def bundle_available(self, contributor: ResourceContributor) -> None:
        """Host hook: a contributing bundle started."""
        with self._lock:
            self._available[contributor.contributor_id] = contributor
            self.logger.info("Bundle available", contributor_id=contributor.contributor_id)
            for listener in list(self._listeners):
                self._deliver(listener.add, contributor, "add")
    
    def bundle_unavailable(self, contributor: ResourceContributor) -> None:
        """Host hook: a contributing bundle stopped."""
        with self._lock:
            if self._available.pop(contributor.contributor_id, None) is None:
                return
            self.logger.info("Bundle unavailable", contributor_id=contributor.contributor_id)
            for listener in list(self._listeners):
                self._deliver(listener.remove, contributor, "remove")
    
    def _deliver(self, callback: Callable[[ResourceContributor], object], contributor: ResourceContributor, event: str) -> None:
        # One failing listener must not keep the others from hearing about the bundle.
        try:
            callback(contributor)
        except Exception as e:
            self.logger.error("Contributor listener failed",
                              contributor_id=contributor.contributor_id,
                              lifecycle_event=event,
                              error=str(e))
    
    def available(self) -> List[str]:
        with self._lock:
            return sorted(self._available)
