"""HTTP client for the Registrar API."""

from typing import Any
from urllib.parse import quote

import httpx

from registrar.engine.registry import NodeEntry


def _user_path(user_name: str) -> str:
    return f"/registrations/{quote(user_name, safe='/')}"


def _segment(value: str) -> str:
    return quote(value, safe="")


class RegistrarClient:
    """Thin client mirroring the registry operations over HTTP.

    Pass ``client`` to reuse an existing ``httpx.Client`` (for example a
    starlette ``TestClient``); its base URL is used and it is not closed
    by :meth:`close`.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 10,
        client: httpx.Client | None = None,
    ):
        self._owns_client = client is None
        self._http = client if client is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def __enter__(self) -> "RegistrarClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def users(self) -> list[str]:
        resp = self._http.get("/registrations")
        resp.raise_for_status()
        return resp.json()["users"]

    def list(self, user_name: str) -> list[NodeEntry]:
        """Return the user's nodes; an unknown user yields an empty list."""
        resp = self._http.get(_user_path(user_name))
        if resp.status_code == 404:
            return []
        resp.raise_for_status()
        return [NodeEntry(node_id=item["nodeId"], url=item["url"]) for item in resp.json()]

    def register(self, user_name: str, node_id: str, url: str) -> None:
        resp = self._http.post(
            _user_path(user_name),
            json={"nodeId": node_id, "url": url},
        )
        resp.raise_for_status()

    def unregister(self, user_name: str, node_id: str) -> None:
        if "/" in node_id:
            raise ValueError(f"node id must not contain '/': {node_id!r}")
        resp = self._http.delete(f"{_user_path(user_name)}/{_segment(node_id)}")
        resp.raise_for_status()

    def health(self) -> dict[str, Any]:
        resp = self._http.get("/api/health")
        resp.raise_for_status()
        return resp.json()
