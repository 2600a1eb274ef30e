"""Shared fixtures for the fox gallery tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from gallery.fetcher import HTTPFetcher
from gallery.loader import FoxBatchLoader
from tests.helpers import PROVIDER_URL


@pytest.fixture
def fetcher() -> MagicMock:
    mock = MagicMock(spec=HTTPFetcher)
    mock.fetch = AsyncMock()
    return mock


@pytest.fixture
def loader(fetcher: MagicMock) -> FoxBatchLoader:
    return FoxBatchLoader(fetcher=fetcher, provider_url=PROVIDER_URL)
