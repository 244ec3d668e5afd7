"""Shared fixtures: an in-memory control API behind httpx.MockTransport."""
import itertools
import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from remote_hosts_mcp.bridge import Bridge
from remote_hosts_mcp.config import AppConfig, BackendConfig, ResolverConfig
from remote_hosts_mcp.gateway import BackendGateway
from remote_hosts_mcp.resolver import SessionResolver
from remote_hosts_mcp.state import ActiveTerminalContext
from remote_hosts_mcp.tools import ToolContext


CREATED_AT = "2026-10-18T09:30:15.123456"


class FakeBackend:
    """Implements the subset of the control API the bridge consumes."""

    def __init__(self):
        self.hosts: Dict[str, Dict[str, Any]] = {}
        self.sessions: Dict[str, List[Dict[str, Any]]] = {}
        self.inputs: Dict[str, List[str]] = {}
        self.outputs: Dict[str, str] = {}
        self.calls: List[Tuple[str, str, Optional[Dict[str, Any]]]] = []
        self.fail_next: Optional[Exception] = None
        self._ids = itertools.count(1)

    # -- seeding helpers --------------------------------------------------

    def seed_host(self, name: str, address: str = "10.0.0.5", port: int = 22,
                  user: str = "ops", auth_method: str = "password",
                  last_connected: Optional[str] = None) -> str:
        host_id = f"h-{next(self._ids)}"
        self.hosts[name] = {
            "host_id": host_id,
            "name": name,
            "address": address,
            "port": port,
            "user": user,
            "auth_method": auth_method,
            "last_connected": last_connected,
        }
        self.sessions[host_id] = []
        return host_id

    def seed_session(self, host_name: str, session_name: str, output: str = "") -> str:
        host_id = self.hosts[host_name]["host_id"]
        session_id = f"s-{next(self._ids)}"
        self.sessions[host_id].append({
            "session_id": session_id,
            "session_name": session_name,
            "created_at": CREATED_AT,
        })
        self.outputs[session_id] = output
        return session_id

    def paths(self) -> List[str]:
        return [f"{method} {path}" for method, path, _ in self.calls]

    # -- transport --------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        path = request.url.path
        self.calls.append((request.method, path, body))

        if self.fail_next is not None:
            exc, self.fail_next = self.fail_next, None
            raise exc

        parts = path.strip("/").split("/")
        method = request.method

        if method == "POST" and parts == ["hosts", "add"]:
            if body["name"] in self.hosts:
                return httpx.Response(409, json={"detail": "Host already exists"})
            self.seed_host(body["name"], body["address"], body["port"], body["user"], body["auth_method"])
            return httpx.Response(200, json={"status": "validated" if body.get("validate") else "saved"})

        if method == "POST" and parts == ["hosts", "list"]:
            return httpx.Response(200, json=list(self.hosts.values()))

        if method == "GET" and parts[:2] == ["hosts", "by-name"] and len(parts) == 3:
            host = self.hosts.get(parts[2])
            if host is None:
                return httpx.Response(404, json={"detail": "Host not found"})
            return httpx.Response(200, json=host)

        if method == "POST" and parts[0] == "hosts" and parts[2:] == ["sessions", "list"]:
            if parts[1] not in self.sessions:
                return httpx.Response(404, json={"detail": "Host not found"})
            return httpx.Response(200, json=self.sessions[parts[1]])

        if method == "POST" and parts[0] == "hosts" and parts[2:] == ["sessions", "new"]:
            host_id = parts[1]
            session_id = f"s-{next(self._ids)}"
            name = (body or {}).get("session_name") or f"session-{session_id}"
            record = {"session_id": session_id, "session_name": name, "created_at": CREATED_AT}
            self.sessions[host_id].append(record)
            self.outputs[session_id] = ""
            return httpx.Response(200, json=record)

        if method == "POST" and parts[0] == "sessions" and parts[2:] == ["input"]:
            if parts[1] not in self.outputs:
                return httpx.Response(404, json={"detail": "Session not found"})
            self.inputs.setdefault(parts[1], []).append(body["input"])
            return httpx.Response(200, json={"status": "ok"})

        if method == "GET" and parts[0] == "sessions" and parts[2:] == ["output"]:
            if parts[1] not in self.outputs:
                return httpx.Response(404, json={"detail": "Session not found"})
            return httpx.Response(200, json={"output": self.outputs[parts[1]]})

        return httpx.Response(404, json={"detail": "Not Found"})


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def transport(backend):
    return httpx.MockTransport(backend.handle)


@pytest.fixture
def cfg():
    return AppConfig()


@pytest.fixture
def gateway(transport):
    return BackendGateway(BackendConfig(), transport=transport)


@pytest.fixture
def resolver(gateway):
    return SessionResolver(gateway, ResolverConfig())


@pytest.fixture
def tool_ctx(gateway, resolver):
    return ToolContext(gateway=gateway, resolver=resolver, terminal=ActiveTerminalContext())


@pytest.fixture
def bridge(cfg, transport):
    return Bridge(cfg, transport=transport)
