"""Shared test fixtures for the masterdesk test suite."""

import asyncio
from collections.abc import Callable, Generator, Sequence
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from masterdesk.cache.models import Option, QueryKey
from masterdesk.cache.revalidating import RevalidatingCache
from masterdesk.client.models import Brand, Product
from masterdesk.notifications.center import NotificationCenter


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear cached settings before and after each test."""
    from masterdesk.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults so a test's setup_logging (bound to a
    captured, later-closed stream) does not leak into other tests."""
    yield
    import structlog

    structlog.reset_defaults()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def brands() -> list[Brand]:
    return [
        Brand(id="1", name="Acme"),
        Brand(id="2", name="Acorn"),
        Brand(id="3", name="Bolt"),
    ]


@pytest.fixture
def product() -> Product:
    return Product(
        id="p-1",
        name="Anvil",
        brand_id="42",
        brand_name="Acme",
        description="Heavy",
        price=2500,
        quantity=3,
    )


class GatedFetcher:
    """Fetcher whose calls block until released per filter text.

    Records every key it was called with.
    """

    def __init__(self, results: dict[str, Sequence[Option]] | None = None) -> None:
        self.results = results or {}
        self.calls: list[QueryKey] = []
        self.gates: dict[str, asyncio.Event] = {}
        self.failures: dict[str, Exception] = {}

    def gate(self, filter_text: str) -> asyncio.Event:
        event = self.gates.setdefault(filter_text, asyncio.Event())
        return event

    async def __call__(self, key: QueryKey) -> Any:
        self.calls.append(key)
        gate = self.gates.get(key.filter_text)
        if gate is not None:
            await gate.wait()
        if key.filter_text in self.failures:
            raise self.failures[key.filter_text]
        return tuple(self.results.get(key.filter_text, ()))


@pytest.fixture
def fetcher() -> GatedFetcher:
    return GatedFetcher(
        {
            "": (Option(label="Acme", value="1"), Option(label="Bolt", value="3")),
            "a": (Option(label="Acme", value="1"), Option(label="Acorn", value="2")),
            "ab": (),
            "ac": (Option(label="Acme", value="1"), Option(label="Acorn", value="2")),
        }
    )


@pytest.fixture
def cache(fetcher: GatedFetcher, clock: FakeClock) -> RevalidatingCache:
    cache = RevalidatingCache(stale_after_seconds=2.0, clock=clock)
    cache.register("brands", fetcher)
    return cache


@pytest.fixture
def notifications() -> NotificationCenter:
    return NotificationCenter()


@pytest.fixture
def resource() -> AsyncMock:
    """Resource client double with async create/update."""
    mock = AsyncMock()
    mock.name = "products"
    return mock
