"""Fixtures for the client controller tests."""

import pytest
from fakes import FakeApi, FakeClock


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
