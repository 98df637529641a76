import pytest

from markers.models import GeoPoint
from routing.policy import RoutingPolicy

from helpers import TEST_BASE_URL, FakeResolver


@pytest.fixture
def london():
    return GeoPoint(51.5074, -0.1278)


@pytest.fixture
def paris():
    return GeoPoint(48.8566, 2.3522)


@pytest.fixture
def brussels():
    return GeoPoint(50.8503, 4.3517)


@pytest.fixture
def amsterdam():
    return GeoPoint(52.3676, 4.9041)


@pytest.fixture
def policy():
    return RoutingPolicy(base_url=TEST_BASE_URL)


@pytest.fixture
def fake_resolver():
    return FakeResolver()
