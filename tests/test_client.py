"""Tests for RegistrarClient against the in-process app."""

import httpx
import pytest

from registrar import __version__
from registrar.client import RegistrarClient
from registrar.engine.registry import NodeEntry


@pytest.fixture
def registrar(client):
    with RegistrarClient(client=client) as rc:
        yield rc


def test_client_scenario(registrar):
    registrar.register("alice", "node1", "http://10.0.0.1:8080")
    registrar.register("alice", "node2", "http://10.0.0.2:8080")
    assert set(registrar.list("alice")) == {
        NodeEntry("node1", "http://10.0.0.1:8080"),
        NodeEntry("node2", "http://10.0.0.2:8080"),
    }

    registrar.unregister("alice", "node1")
    assert registrar.list("alice") == [NodeEntry("node2", "http://10.0.0.2:8080")]

    registrar.unregister("alice", "node2")
    assert registrar.list("alice") == []
    assert registrar.users() == []


def test_client_unknown_user(registrar):
    assert registrar.list("nobody") == []
    registrar.unregister("nobody", "node1")


def test_client_invalid_registration_raises(registrar):
    with pytest.raises(httpx.HTTPStatusError) as excinfo:
        registrar.register("alice", "node1", "not a url")
    assert excinfo.value.response.status_code == 422


def test_client_health(registrar):
    registrar.register("alice", "node1", "http://10.0.0.1:8080")
    health = registrar.health()
    assert health["version"] == __version__
    assert health["users"] == 1


def test_client_does_not_close_borrowed_client(client):
    rc = RegistrarClient(client=client)
    rc.close()
    assert client.get("/api/health").status_code == 200


def test_client_user_name_with_slash(registrar, registry):
    registrar.register("team/a", "node1", "http://10.0.0.1:8080")
    assert registrar.list("team/a") == [NodeEntry("node1", "http://10.0.0.1:8080")]

    registry.upsert("team/b", "node2", "http://10.0.0.2:8080")
    assert registrar.list("team/b") == [NodeEntry("node2", "http://10.0.0.2:8080")]
    assert sorted(registrar.users()) == ["team/a", "team/b"]

    registrar.unregister("team/a", "node1")
    assert registrar.list("team/a") == []
    assert "team/a" not in registry


def test_client_rejects_node_id_with_slash(registrar):
    with pytest.raises(ValueError):
        registrar.unregister("alice", "a/b")
