"""
Shared test fixtures and configuration for entire test suite.

Provides: SQLite-backed session factories, job store, fake analysis engine,
mock dispatcher/store, and settings for app-level tests.
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from typing import Sequence
from unittest.mock import AsyncMock

import pytest

from backend.core.analysis.cooccurrence import CooccurrenceMatrix, Recipe, build_cooccurrence


class FakeAnalysisEngine:
    """In-memory analysis engine recording its calls."""

    def __init__(
        self,
        recipes: Sequence[Recipe] = (),
        fail_on: str | None = None,
    ) -> None:
        self.recipes = list(recipes)
        self.fail_on = fail_on
        self.calls: list[tuple] = []

    async def pull_recipes(self, tag: str | None) -> list[Recipe]:
        self.calls.append(("pull_recipes", tag))
        if self.fail_on == "pull_recipes":
            raise RuntimeError("recipe source offline")
        return [r for r in self.recipes if tag is None or tag in r.tags]

    async def make_coolist(
        self,
        recipes: Sequence[Recipe],
        ingredients: Sequence[str],
    ) -> CooccurrenceMatrix:
        self.calls.append(("make_coolist", tuple(ingredients)))
        if self.fail_on == "make_coolist":
            raise ValueError("matrix construction failed")
        return build_cooccurrence(recipes, ingredients)


@pytest.fixture
def sample_recipes() -> list[Recipe]:
    """Provide a small recipe corpus."""
    return [
        Recipe(1, "Shortbread", ("Sugar", "Flour", "Butter"), ("dessert",)),
        Recipe(2, "Pancakes", ("flour", "milk", "egg", "sugar"), ("breakfast", "dessert")),
        Recipe(3, "Omelette", ("egg", "butter", "salt"), ("breakfast",)),
    ]


@pytest.fixture
def fake_engine(sample_recipes) -> FakeAnalysisEngine:
    """Provide a working fake analysis engine."""
    return FakeAnalysisEngine(sample_recipes)


@pytest.fixture
def database_url(tmp_path) -> str:
    """SQLite database file unique to the test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'recipe_api.db'}"


@pytest.fixture
async def session_factory(database_url):
    """
    Create a SQLite async database with all tables for testing.

    Yields:
        async_sessionmaker: Session factory bound to the test database
    """
    from backend.boundary.db.connection import get_async_engine, get_async_session_factory
    from backend.boundary.db.create_tables import create_all_tables
    from backend.configs.database import DatabaseSettings

    engine = get_async_engine(DatabaseSettings(database_url=database_url))
    await create_all_tables(engine)

    yield get_async_session_factory(engine)

    await engine.dispose()


@pytest.fixture
def job_store(session_factory):
    """Provide a JobStore over the test database."""
    from backend.core.job_store import JobStore

    return JobStore(session_factory)


@pytest.fixture
def mock_job_store():
    """
    Create mock JobStore for testing.

    Returns:
        AsyncMock: Mocked JobStore with async methods
    """
    store = AsyncMock()
    store.create_job = AsyncMock(return_value=1)
    store.set_status = AsyncMock()
    store.get_status = AsyncMock()
    store.ping = AsyncMock()
    return store


@pytest.fixture
def mock_dispatcher():
    """
    Create mock JobDispatcher for testing.

    Returns:
        AsyncMock: Mocked JobDispatcher
    """
    dispatcher = AsyncMock()
    dispatcher.submit = AsyncMock(return_value=1)
    return dispatcher


@pytest.fixture
def test_settings(database_url):
    """Settings pointing the application at the test database."""
    from backend.configs import Settings
    from backend.configs.database import DatabaseSettings
    from backend.configs.dispatcher import DispatcherSettings

    return Settings(
        database=DatabaseSettings(database_url=database_url),
        dispatcher=DispatcherSettings(worker_count=2, queue_size=10),
    )
