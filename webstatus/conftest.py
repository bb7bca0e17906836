import pytest

from webstatus.features.query import RouterLocation
from webstatus.features.tests.factories import build_feature
from webstatus.webstatus_client.models import Feature


@pytest.fixture
def feature() -> Feature:
    return build_feature(feature_id="grid", name="Grid")


@pytest.fixture
def location() -> RouterLocation:
    return RouterLocation()
