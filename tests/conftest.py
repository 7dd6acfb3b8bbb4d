import pytest
from starlette.testclient import TestClient

from registrar.app import create_app
from registrar.config import Settings
from registrar.engine.registry import Registry


@pytest.fixture
def registry():
    return Registry()


@pytest.fixture
def client(registry):
    app = create_app(registry=registry, settings=Settings())
    with TestClient(app) as c:
        yield c
