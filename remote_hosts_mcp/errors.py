"""Error taxonomy for the bridge.

Every failure raised while a tool handler runs derives from BridgeError and is
converted into an error envelope at the dispatcher boundary.
"""

from __future__ import annotations

import json
from typing import Any


class BridgeError(RuntimeError):
    pass


class UnknownTool(BridgeError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArguments(BridgeError):
    def __init__(self, tool: str, detail: str):
        super().__init__(f"Invalid arguments for '{tool}': {detail}")
        self.tool = tool
        self.detail = detail


class HostNotFound(BridgeError):
    def __init__(self, host_name: str):
        super().__init__(f"Host '{host_name}' not found")
        self.host_name = host_name


class SessionNotFound(BridgeError):
    def __init__(self, host_name: str, session_name: str):
        super().__init__(f"Session '{session_name}' not found on host '{host_name}'")
        self.host_name = host_name
        self.session_name = session_name


class AmbiguousSession(BridgeError):
    def __init__(self, host_name: str, session_name: str, count: int):
        super().__init__(
            f"Session name '{session_name}' matches {count} sessions on host '{host_name}'"
        )
        self.host_name = host_name
        self.session_name = session_name
        self.count = count


class NoActiveTerminal(BridgeError):
    def __init__(self):
        super().__init__("No active terminal set. Use 'set_active_terminal' first.")


class ApiError(BridgeError):
    """The backend answered with an error status."""

    def __init__(self, status: int, body: Any):
        super().__init__(f"API Error {status}: {_render_body(body)}")
        self.status = status
        self.body = body


class RequestFailed(BridgeError):
    """No response was received from the backend (connection error, timeout)."""

    def __init__(self, cause: str):
        super().__init__(f"Request failed: {cause}")
        self.cause = cause


def _render_body(body: Any) -> str:
    if isinstance(body, str):
        return json.dumps(body, ensure_ascii=False)
    try:
        return json.dumps(body, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return repr(body)
