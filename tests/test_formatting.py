"""Tests for the pure text renderers."""
from remote_hosts_mcp.formatting import (
    format_active_set,
    format_error,
    format_host_added,
    format_hosts,
    format_input_sent,
    format_output,
    format_session_created,
    format_sessions,
    truncate_timestamp,
)
from remote_hosts_mcp.models import HostRecord, SessionRecord


class TestFormatHosts:
    def test_empty(self):
        assert format_hosts([]) == "No hosts configured yet."

    def test_table(self):
        hosts = [
            HostRecord(name="db1", address="10.0.0.5", port=22, user="ops", auth_method="password"),
            HostRecord(
                name="web-01", address="web.example.com", port=2222, user="deploy",
                auth_method="key", last_connected="2026-10-01T08:00:00",
            ),
        ]
        assert format_hosts(hosts) == "\n".join([
            "# Configured Hosts (2)",
            "",
            "| Name | Address | User | Auth | Status |",
            "|------|---------|------|------|--------|",
            "| db1 | 10.0.0.5:22 | ops | password | ❓ |",
            "| web-01 | web.example.com:2222 | deploy | key | ✅ |",
        ])


class TestFormatSessions:
    def test_empty(self):
        assert format_sessions("db1", []) == "No terminal sessions on host 'db1'."

    def test_table_truncates_created_at(self):
        sessions = [SessionRecord(session_name="main", created_at="2026-10-18T09:30:15.123456+00:00")]
        assert format_sessions("db1", sessions) == "\n".join([
            "# Terminal Sessions (1)",
            "",
            "| Host | Session | Created | Status |",
            "|------|---------|---------|--------|",
            "| db1 | main | 2026-10-18T09:30:15 | 🟢 Active |",
        ])


class TestConfirmations:
    def test_host_added(self):
        text = format_host_added("db1", "10.0.0.5", 22, "ops", "password", "validated")
        assert text == (
            "✅ Host Added Successfully\n\n"
            "Name: db1\n"
            "Address: 10.0.0.5:22\n"
            "User: ops\n"
            "Auth: password\n"
            "Status: validated"
        )

    def test_session_created(self):
        session = SessionRecord(session_name="build", created_at="2026-10-18T09:30:15.9")
        assert format_session_created("db1", session) == (
            "✅ Session Created\n\nHost: db1\nSession: build\nCreated: 2026-10-18T09:30:15"
        )

    def test_input_sent_echoes_input_verbatim(self):
        text = format_input_sent("db1", "main", "echo hi{{enter}}")
        assert text == "✅ Input Sent\n\nHost: db1\nSession: main\nInput: echo hi{{enter}}"

    def test_active_set(self):
        assert format_active_set("db1", "main") == "✅ Active Terminal Set\n\nHost: db1\nSession: main"


class TestMisc:
    def test_output_none_is_empty(self):
        assert format_output(None) == ""
        assert format_output("line\n") == "line\n"

    def test_error_prefix(self):
        assert format_error("Unknown tool: x") == "❌ Error: Unknown tool: x"

    def test_truncate_timestamp_short_values(self):
        assert truncate_timestamp("") == ""
        assert truncate_timestamp(None) == ""
        assert truncate_timestamp("2026-10-18") == "2026-10-18"
