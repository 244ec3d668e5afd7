"""Text rendering of backend data for the invoking client.

All functions are pure: backend records in, display text out.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence

from .models import HostRecord, SessionRecord


CONNECTED = "✅"
UNCONNECTED = "❓"
SESSION_ACTIVE = "🟢 Active"
ERROR_PREFIX = "❌ Error: "


def _table(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> List[str]:
    lines = [
        "| " + " | ".join(header) + " |",
        "|" + "|".join("-" * (len(h) + 2) for h in header) + "|",
    ]
    for row in rows:
        lines.append("| " + " | ".join(str(c) for c in row) + " |")
    return lines


def _confirmation(title: str, fields: Sequence[tuple]) -> str:
    lines = [f"✅ {title}", ""]
    lines.extend(f"{label}: {value}" for label, value in fields)
    return "\n".join(lines)


def truncate_timestamp(value: Optional[str]) -> str:
    """Trim an ISO timestamp to whole seconds (YYYY-MM-DDTHH:MM:SS)."""
    return (value or "")[:19]


def format_hosts(hosts: Sequence[HostRecord]) -> str:
    if not hosts:
        return "No hosts configured yet."
    lines = [f"# Configured Hosts ({len(hosts)})", ""]
    lines.extend(_table(
        ["Name", "Address", "User", "Auth", "Status"],
        (
            [h.name, h.endpoint, h.user, h.auth_method, CONNECTED if h.last_connected else UNCONNECTED]
            for h in hosts
        ),
    ))
    return "\n".join(lines)


def format_sessions(host_name: str, sessions: Sequence[SessionRecord]) -> str:
    if not sessions:
        return f"No terminal sessions on host '{host_name}'."
    lines = [f"# Terminal Sessions ({len(sessions)})", ""]
    lines.extend(_table(
        ["Host", "Session", "Created", "Status"],
        (
            [host_name, s.session_name, truncate_timestamp(s.created_at), SESSION_ACTIVE]
            for s in sessions
        ),
    ))
    return "\n".join(lines)


def format_host_added(
    name: str, address: str, port: int, user: str, auth_method: str, status: Any
) -> str:
    return _confirmation("Host Added Successfully", [
        ("Name", name),
        ("Address", f"{address}:{port}"),
        ("User", user),
        ("Auth", auth_method),
        ("Status", status),
    ])


def format_session_created(host_name: str, session: SessionRecord) -> str:
    return _confirmation("Session Created", [
        ("Host", host_name),
        ("Session", session.session_name),
        ("Created", truncate_timestamp(session.created_at)),
    ])


def format_input_sent(host_name: str, session_name: str, input_string: str) -> str:
    return _confirmation("Input Sent", [
        ("Host", host_name),
        ("Session", session_name),
        ("Input", input_string),
    ])


def format_active_set(host_name: str, session_name: str) -> str:
    return _confirmation("Active Terminal Set", [
        ("Host", host_name),
        ("Session", session_name),
    ])


def format_output(output: Optional[str]) -> str:
    return output or ""


def format_error(message: str) -> str:
    return f"{ERROR_PREFIX}{message}"
