"""Registry — in-memory store of node registrations per user."""

import logging
import threading
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeEntry:
    """One registered endpoint for a user."""

    node_id: str
    url: str


class Registry:
    """Thread-safe mapping of user key -> {node id -> url}.

    Every operation runs inside a single critical section, so callers
    always observe a state produced by some serial order of calls. A user
    key is present only while it owns at least one node; the last delete
    for a user removes the user itself.

    Per-user containers never leave the lock. Reads return fresh
    ``NodeEntry`` lists and key lists, not views of internal state.
    """

    def __init__(self):
        self._users: dict[str, dict[str, str]] = {}
        self._lock = threading.Lock()

    def users(self) -> list[str]:
        """Return the keys of users that currently own at least one node."""
        with self._lock:
            return list(self._users.keys())

    def list(self, user_key: str) -> list[NodeEntry]:
        """Return the user's nodes, or an empty list for an unknown user."""
        with self._lock:
            nodes = self._users.get(user_key)
            if nodes is None:
                return []
            return [NodeEntry(node_id, url) for node_id, url in nodes.items()]

    def upsert(self, user_key: str, node_id: str, url: str) -> None:
        """Register ``node_id`` under ``user_key``, replacing any previous url."""
        with self._lock:
            nodes = self._users.setdefault(user_key, {})
            previous = nodes.get(node_id)
            nodes[node_id] = url
        if previous is None:
            logger.info("Registered node %s for %s: %s", node_id, user_key, url)
        elif previous != url:
            logger.info("Updated node %s for %s: %s -> %s", node_id, user_key, previous, url)

    def delete(self, user_key: str, node_id: str) -> None:
        """Remove a node; unknown users or nodes are ignored."""
        with self._lock:
            nodes = self._users.get(user_key)
            if nodes is None:
                return
            removed = nodes.pop(node_id, None)
            if not nodes:
                del self._users[user_key]
        if removed is not None:
            logger.info("Unregistered node %s for %s", node_id, user_key)

    def clear(self) -> None:
        with self._lock:
            self._users.clear()

    def __contains__(self, user_key: object) -> bool:
        with self._lock:
            return user_key in self._users

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
