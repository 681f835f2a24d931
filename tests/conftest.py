"""Pytest configuration and fixtures."""

import importlib.util
import os
from collections.abc import Iterator

import pytest
from _pytest.config import Config
from _pytest.nodes import Item

# Select the testing profile before any settings are resolved.
os.environ.setdefault("BLAKE3_SESSION_ENV", "testing")

try:  # pragma: no cover - optional dependency
    import hypothesis as _hyp
except ImportError:  # pragma: no cover - if Hypothesis isn't installed
    _hyp = None

if _hyp is not None:
    # Deterministic Hypothesis profile shared by all tests. Set
    # ``HYPOTHESIS_PROFILE=thorough`` locally for a longer search.
    from hypothesis import settings as _settings

    _settings.register_profile("default", max_examples=50, deadline=None, derandomize=True)
    _settings.register_profile("thorough", max_examples=500, deadline=None)
    _settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))

from blake3_session.settings import reset_settings_cache


def _has(module: str) -> bool:
    """Return ``True`` if *module* can be imported."""
    return importlib.util.find_spec(module) is not None


def pytest_configure(config: Config) -> None:
    """Register custom markers used in the test suite."""
    for name, desc in [
        ("property", "property-based tests"),
        ("slow", "slow tests"),
        ("smoke", "quick smoke tests"),
        ("needs_hypothesis", "requires the hypothesis package"),
    ]:
        config.addinivalue_line("markers", f"{name}: {desc}")


def pytest_collection_modifyitems(config: Config, items: list[Item]) -> None:
    """Auto-mark tests and skip those missing optional dependencies."""
    for item in items:
        nodeid = item.nodeid.lower()
        if "hypothesis" in nodeid or "property" in nodeid:
            item.add_marker("property")
        if item.get_closest_marker("needs_hypothesis") and not _has("hypothesis"):
            item.add_marker(pytest.mark.skip(reason="hypothesis is not installed"))

        categories = {"property", "slow", "smoke"}
        if not any(marker in item.keywords for marker in categories):
            item.add_marker("smoke")


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop cached settings and stray overrides around every test."""
    for name in list(os.environ):
        if name.startswith("BLAKE3_SESSION_") and name != "BLAKE3_SESSION_ENV":
            monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def key() -> bytes:
    """A fixed 32-byte key."""
    return bytes(range(32))


@pytest.fixture
def one_shot(monkeypatch: pytest.MonkeyPatch) -> None:
    """Switch the default finalize policy to ``one_shot``."""
    monkeypatch.setenv("BLAKE3_SESSION_SESSION__FINALIZE_POLICY", "one_shot")
    reset_settings_cache()
