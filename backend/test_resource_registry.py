import threading

from conftest import FlakyContributor
from theme_contributor.core.contributor import BundleWebResources
from theme_contributor.core.exceptions import ContributorUnavailableError
from theme_contributor.core.resource_registry import EMPTY_URL_SET, ResourceURLSet


def test_empty_registry_publishes_empty_set(registry):
    assert registry.current_urls() is EMPTY_URL_SET
    assert registry.current_urls().is_empty()
    assert len(registry) == 0


def test_add_builds_urls_from_context_path(registry, bundle_a):
    assert registry.add(bundle_a) is True
    
    urls = registry.current_urls()
    assert urls.css == ("/o/a/css/main.css",)
    assert urls.js == ("/o/a/js/main.js", "/o/a/js/extra.js")
    assert "a" in registry


def test_contributors_ordered_by_identity(registry, bundle_a, bundle_b):
    registry.add(bundle_b)
    registry.add(bundle_a)
    
    assert registry.contributors() == ["a", "b"]
    assert registry.current_urls().css == ("/o/a/css/main.css", "/o/b/b.css")


def test_adding_same_identity_twice_does_not_duplicate(registry, bundle_a):
    registry.add(bundle_a)
    assert registry.add(bundle_a.model_copy()) is False
    
    urls = registry.current_urls()
    assert urls.css == ("/o/a/css/main.css",)
    assert len(urls.js) == 2


def test_re_adding_identity_replaces_handle(registry, bundle_a):
    registry.add(bundle_a)
    registry.add(BundleWebResources(contributor_id="a", servlet_context_path="/o/a2", css_resource_paths=["/x.css"]))
    
    assert registry.current_urls() == ResourceURLSet(css=("/o/a2/x.css",), js=())


def test_remove_drops_urls(registry, bundle_a, bundle_b):
    registry.add(bundle_a)
    registry.add(bundle_b)
    
    assert registry.remove(bundle_a) is True
    assert registry.current_urls() == ResourceURLSet(css=("/o/b/b.css",), js=())
    assert registry.contributors() == ["b"]


def test_remove_non_member_is_noop(registry, bundle_a, bundle_b):
    registry.add(bundle_a)
    before = registry.current_urls()
    rebuilds = registry.get_registry_stats().rebuild_count
    
    assert registry.remove(bundle_b) is False
    assert registry.current_urls() is before
    assert registry.get_registry_stats().rebuild_count == rebuilds


def test_unavailable_contributor_is_skipped(registry, bundle_a, bundle_b):
    registry.add(bundle_a)
    registry.add(FlakyContributor("m", "/o/m", ["/m.css"], ["/m.js"], fail_after=0))
    registry.add(bundle_b)
    
    urls = registry.current_urls()
    assert urls.css == ("/o/a/css/main.css", "/o/b/b.css")
    assert urls.js == ("/o/a/js/main.js", "/o/a/js/extra.js")
    assert registry.get_registry_stats().skipped_contributors == ["m"]


def test_contributor_failing_mid_read_leaves_no_partial_urls(registry):
    # Context path and CSS succeed, JS lookup fails.
    registry.add(FlakyContributor("m", "/o/m", ["/m.css"], ["/m.js"], fail_after=2))
    
    assert registry.current_urls().is_empty()


def test_skipped_contributor_returns_on_next_rebuild(registry, bundle_a):
    flaky = FlakyContributor("m", "/o/m", ["/m.css"], [], fail_after=0)
    registry.add(flaky)
    assert registry.current_urls().css == ()
    
    flaky._reads_left = 100
    registry.add(bundle_a)
    assert registry.current_urls().css == ("/o/a/css/main.css", "/o/m/m.css")


def test_subscribers_receive_published_snapshots(registry, bundle_a):
    seen = []
    registry.subscribe(seen.append)
    
    registry.add(bundle_a)
    registry.remove(bundle_a)
    
    assert [snapshot.css for snapshot in seen] == [("/o/a/css/main.css",), ()]


def test_failing_subscriber_does_not_break_add(registry, bundle_a):
    def boom(urls):
        raise RuntimeError("listener down")
    
    registry.subscribe(boom)
    registry.add(bundle_a)
    
    assert registry.current_urls().css == ("/o/a/css/main.css",)


def test_stats(registry, bundle_a, bundle_b):
    registry.add(bundle_a)
    registry.add(bundle_b)
    
    stats = registry.get_registry_stats()
    assert stats.total_contributors == 2
    assert stats.css_urls == 2
    assert stats.js_urls == 2
    assert stats.rebuild_count == 2
    assert stats.last_rebuild_time is not None


def test_concurrent_readers_never_see_partial_sets(registry):
    bundles = [
        BundleWebResources(
            contributor_id=f"c{i}",
            servlet_context_path=f"/o/c{i}",
            css_resource_paths=[f"/{i}-1.css", f"/{i}-2.css"],
            js_resource_paths=[f"/{i}.js"],
        )
        for i in range(3)
    ]
    
    valid = set()
    for mask in range(1 << len(bundles)):
        members = [b for i, b in enumerate(bundles) if mask & (1 << i)]
        valid.add(ResourceURLSet(
            css=tuple(b.servlet_context_path + p for b in members for p in b.css_resource_paths),
            js=tuple(b.servlet_context_path + p for b in members for p in b.js_resource_paths),
        ))
    
    stop = threading.Event()
    invalid = []
    
    def read():
        while not stop.is_set():
            snapshot = registry.current_urls()
            if snapshot not in valid:
                invalid.append(snapshot)
    
    def write():
        for _ in range(200):
            for bundle in bundles:
                registry.add(bundle)
            for bundle in bundles:
                registry.remove(bundle)
    
    readers = [threading.Thread(target=read) for _ in range(4)]
    writers = [threading.Thread(target=write) for _ in range(2)]
    for thread in readers + writers:
        thread.start()
    for thread in writers:
        thread.join()
    stop.set()
    for thread in readers:
        thread.join()
    
    assert invalid == []
    assert registry.current_urls().is_empty()


class LazyContributor:
    """Yields its first CSS path, then the bundle stops mid-iteration."""
    
    def __init__(self, contributor_id: str):
        self.contributor_id = contributor_id
    
    def get_servlet_context_path(self):
        return "/o/" + self.contributor_id
    
    def get_css_resource_paths(self):
        yield "/m.css"
        raise ContributorUnavailableError("Bundle stopped", contributor_id=self.contributor_id)
    
    def get_js_resource_paths(self):
        return ["/m.js"]


def test_contributor_failing_during_path_iteration_is_skipped(registry, bundle_a, bundle_b):
    registry.add(bundle_a)
    
    assert registry.add(LazyContributor("m")) is True
    
    assert registry.current_urls() == ResourceURLSet(
        css=("/o/a/css/main.css",), js=("/o/a/js/main.js", "/o/a/js/extra.js")
    )
    assert registry.get_registry_stats().skipped_contributors == ["m"]
    
    # Later writes keep publishing around the bad handle.
    registry.add(bundle_b)
    assert registry.current_urls().css == ("/o/a/css/main.css", "/o/b/b.css")
    assert registry.remove(bundle_a) is True
    assert registry.current_urls() == ResourceURLSet(css=("/o/b/b.css",), js=())


def test_malformed_context_path_is_skipped(registry, bundle_a):
    registry.add(FlakyContributor("n", None, ["/n.css"], [], fail_after=100))
    registry.add(bundle_a)
    
    assert registry.current_urls().css == ("/o/a/css/main.css",)
    assert registry.get_registry_stats().skipped_contributors == ["n"]
    
    registry.remove_by_id("n")
    assert registry.get_registry_stats().skipped_contributors == []
    assert registry.current_urls().css == ("/o/a/css/main.css",)


def test_superseded_snapshot_is_not_delivered(registry, bundle_a, bundle_b):
    seen = []
    registry.subscribe(seen.append)
    registry.add(bundle_a)
    registry.add(bundle_b)
    stale = ResourceURLSet(css=("/stale.css",))
    
    # A writer that lost the race delivers its older snapshot last.
    registry._notify(stale, 1)
    
    assert stale not in seen
    assert seen[-1].css == ("/o/a/css/main.css", "/o/b/b.css")
