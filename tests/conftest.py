"""Test configuration and fixtures for the Library Catalogue.

Every test gets:
1. A clean environment - no LIBRARY_CATALOGUE_* variables, fresh config
2. A store whose clock is fixed and can be moved forward
3. A service bound to that store
"""

import os
from collections.abc import Generator
from datetime import date, timedelta

import pytest

from library_catalogue.config import CatalogueConfig, reset_config
from library_catalogue.database import CatalogueStore
from library_catalogue.service import CatalogueService

FIXED_TODAY = date(2024, 3, 1)


class FakeClock:
    """A clock that stays put until told to move."""

    def __init__(self, today: date = FIXED_TODAY):
        self.today = today

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int) -> None:
        self.today += timedelta(days=days)


# === Environment Fixtures ===


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, None, None]:
    """Run every test without LIBRARY_CATALOGUE_* variables and with a fresh config."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("LIBRARY_CATALOGUE_"):
            del os.environ[key]
    reset_config()

    yield

    reset_config()
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def test_config() -> CatalogueConfig:
    """Provide a test-specific configuration."""
    return CatalogueConfig(
        server_name="test-library-catalogue",
        server_version="0.0.1-test",
        debug=True,
        log_level="DEBUG",
    )


# === Store Fixtures ===


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> CatalogueStore:
    """An empty store on the fake clock."""
    return CatalogueStore(clock)


@pytest.fixture
def service(store: CatalogueStore) -> CatalogueService:
    """A service with the default 14-day loan period."""
    return CatalogueService(store=store, loan_period_days=14)


@pytest.fixture
def stocked_service(service: CatalogueService) -> CatalogueService:
    """
    A service with a small catalogue and three members.

    Books:
    - 9780134685991 Effective Java (2 copies)
    - 9780132350884 Clean Code (1 copy)
    - 9780201633610 Design Patterns (0 copies)

    Members: 1 Alice, 2 Bob, 3 Carol
    """
    service.add_book("9780134685991", "Effective Java", "Joshua Bloch", 2)
    service.add_book("9780132350884", "Clean Code", "Robert C. Martin", 1)
    service.add_book("9780201633610", "Design Patterns", "Erich Gamma", 0)
    service.register_member("Alice", "alice@example.com")
    service.register_member("Bob")
    service.register_member("Carol", "carol@example.com")
    return service
