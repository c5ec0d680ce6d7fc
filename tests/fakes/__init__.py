"""Fake providers and fixtures for resolver and cache tests (no live network)."""

from .providers import (
    FakeCurrentProvider,
    FakeCurrentProviderAlwaysFail,
    FakeCurrentProviderFailNThenSucceed,
    FakeHistoricalProvider,
    FakeHistoricalProviderAlwaysFail,
    make_points,
)

__all__ = [
    "FakeCurrentProvider",
    "FakeCurrentProviderAlwaysFail",
    "FakeCurrentProviderFailNThenSucceed",
    "FakeHistoricalProvider",
    "FakeHistoricalProviderAlwaysFail",
    "make_points",
]
