"""Fixtures for the MCP tool tests.

Tool handlers work on the process-wide store, so each test installs a
fresh one on a fixed clock and drops it afterwards.
"""

from collections.abc import Generator

import pytest

from library_catalogue.database import CatalogueStore, get_store, reset_store


@pytest.fixture(autouse=True)
def global_store(clock) -> Generator[CatalogueStore, None, None]:
    reset_store()
    yield get_store(clock)
    reset_store()
