"""
Unit tests for the plugin registry and its fallback chain.
"""
from bs4 import BeautifulSoup

from capture.plugins.base import ExtractionOutcome, ExtractionPlugin, create_empty_result, create_success_result
from capture.plugins.registry import PluginRegistry, get_plugin_registry
from pipeline.models import JobOffer

URL = "https://acme.example/jobs/42"


class StubPlugin(ExtractionPlugin):
    """Plugin with canned behaviour"""

    def __init__(self, name, priority=50, handles=True, outcome=None, error=None, handle_error=None):
        super().__init__(name=name, priority=priority)
        self.handles = handles
        self.outcome = outcome
        self.error = error
        self.handle_error = handle_error
        self.calls = 0

    def can_handle(self, url, soup):
        if self.handle_error:
            raise self.handle_error
        return self.handles

    def extract(self, url, soup):
        self.calls += 1
        if self.error:
            raise self.error
        if self.outcome is not None:
            return self.outcome
        return create_empty_result(self.name)


def _offer(title="Engineer", description="Build things"):
    return JobOffer(source_url=URL, title=title, description=description)


def _succeeding(name, priority=50, confidence=0.7):
    return StubPlugin(name, priority, outcome=create_success_result(name, _offer(), confidence))


def _soup():
    return BeautifulSoup("<html><body></body></html>", 'html.parser')


def test_plugins_sorted_by_priority_with_stable_ties():
    registry = PluginRegistry()
    registry.register(StubPlugin("low", priority=0))
    registry.register(StubPlugin("first", priority=10))
    registry.register(StubPlugin("second", priority=10))

    assert [p['name'] for p in registry.list_plugins()] == ["first", "second", "low"]


def test_register_same_name_replaces():
    registry = PluginRegistry()
    registry.register(StubPlugin("dup", priority=1))
    replacement = StubPlugin("dup", priority=5)
    registry.register(replacement)

    assert len(registry.list_plugins()) == 1
    assert registry.get_plugin("dup") is replacement


def test_first_success_wins():
    registry = PluginRegistry()
    second = _succeeding("second", priority=1)
    registry.register(_succeeding("first", priority=10))
    registry.register(second)

    outcome = registry.extract(URL, _soup())

    assert outcome.strategy_name == "first"
    assert second.calls == 0


def test_falls_back_when_higher_priority_plugin_fails():
    registry = PluginRegistry()
    registry.register(StubPlugin("site", priority=10))
    registry.register(_succeeding("generic", priority=0))

    outcome = registry.extract(URL, _soup())

    assert outcome.success
    assert outcome.strategy_name == "generic"


def test_plugins_that_decline_are_not_called():
    registry = PluginRegistry()
    declining = _succeeding("site", priority=10)
    declining.handles = False
    registry.register(declining)
    registry.register(_succeeding("generic", priority=0))

    assert registry.extract(URL, _soup()).strategy_name == "generic"
    assert declining.calls == 0


def test_plugin_fault_is_contained():
    registry = PluginRegistry()
    registry.register(StubPlugin("broken", priority=10, error=RuntimeError("boom")))
    registry.register(_succeeding("generic", priority=0))

    outcome = registry.extract(URL, _soup())

    assert outcome.success
    assert outcome.strategy_name == "generic"


def test_terminal_failure_collects_errors():
    registry = PluginRegistry()
    registry.register(StubPlugin("broken", priority=10, error=RuntimeError("boom")))
    registry.register(StubPlugin("picky", priority=5, handle_error=ValueError("bad url")))
    registry.register(StubPlugin("empty", priority=0))

    outcome = registry.extract(URL, _soup())

    assert not outcome.success
    assert outcome.record is None
    assert outcome.confidence == 0.0
    assert outcome.strategy_name == "none"
    assert outcome.errors == ["broken: boom", "picky: bad url", "No job data extracted"]


def test_unusable_success_is_refused():
    registry = PluginRegistry()
    sloppy = ExtractionOutcome(True, _offer(description=None), 0.6, "sloppy")
    registry.register(StubPlugin("sloppy", priority=10, outcome=sloppy))

    outcome = registry.extract(URL, _soup())

    assert not outcome.success
    assert outcome.strategy_name == "none"


def test_empty_registry():
    outcome = PluginRegistry().extract(URL, _soup())
    assert outcome.strategy_name == "none"
    assert outcome.errors == ["No job data extracted"]


def test_builtin_plugins():
    registry = get_plugin_registry()
    assert registry is get_plugin_registry()
    assert [p['name'] for p in registry.list_plugins()] == [
        "linkedin", "indeed", "welcometothejungle", "generic"
    ]


def test_linkedin_page_without_linkedin_markup_falls_back_to_generic():
    html = """
    <html><head>
    <script type="application/ld+json">
    {"@type": "JobPosting", "title": "Site Reliability Engineer",
     "description": "<p>Keep our platform up.</p>",
     "hiringOrganization": {"name": "Acme"}}
    </script>
    </head><body><h1>Site Reliability Engineer</h1></body></html>
    """
    soup = BeautifulSoup(html, 'html.parser')
    outcome = get_plugin_registry().extract("https://www.linkedin.com/jobs/view/1234/", soup)

    assert outcome.success
    assert outcome.strategy_name == "generic"
    assert outcome.record.company == "Acme"
    assert 0.0 <= outcome.confidence <= 1.0


def test_plugin_returning_no_outcome_is_contained():
    registry = PluginRegistry()
    silent = StubPlugin("silent", priority=10)
    silent.extract = lambda url, soup: None
    registry.register(silent)
    registry.register(_succeeding("generic", priority=0))

    outcome = registry.extract(URL, _soup())

    assert outcome.success
    assert outcome.strategy_name == "generic"


def test_plugin_returning_no_outcome_is_reported():
    registry = PluginRegistry()
    silent = StubPlugin("silent", priority=10)
    silent.extract = lambda url, soup: None
    registry.register(silent)

    outcome = registry.extract(URL, _soup())

    assert not outcome.success
    assert outcome.errors == [
        "silent: returned NoneType instead of an outcome",
        "No job data extracted",
    ]


def test_zero_confidence_success_is_refused():
    registry = PluginRegistry()
    registry.register(_succeeding("unsure", priority=10, confidence=0.0))

    outcome = registry.extract(URL, _soup())

    assert not outcome.success
    assert outcome.strategy_name == "none"


def test_zero_confidence_success_falls_back():
    registry = PluginRegistry()
    registry.register(_succeeding("unsure", priority=10, confidence=0.0))
    registry.register(_succeeding("generic", priority=0, confidence=0.4))

    outcome = registry.extract(URL, _soup())

    assert outcome.strategy_name == "generic"
    assert outcome.confidence == 0.4
