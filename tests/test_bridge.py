"""Tests for the dispatcher boundary: every outcome becomes an envelope."""
import asyncio

import httpx
import pytest

from remote_hosts_mcp.api_models import ToolCallResult


DB1 = {
    "name": "db1",
    "address": "10.0.0.5",
    "port": 22,
    "user": "ops",
    "auth_method": "password",
    "secret": "x",
}


class TestEnvelope:
    @pytest.mark.asyncio
    async def test_success_envelope(self, bridge):
        result = await bridge.call_tool("hosts", {})
        assert result.to_mcp() == {"content": [{"type": "text", "text": "No hosts configured yet."}]}

    @pytest.mark.asyncio
    async def test_unknown_tool_is_error_envelope(self, bridge):
        result = await bridge.call_tool("format_disk", {})
        assert result.to_mcp() == {
            "content": [{"type": "text", "text": "❌ Error: Unknown tool: format_disk"}],
            "isError": True,
        }

    @pytest.mark.asyncio
    async def test_invalid_arguments_is_error_envelope(self, bridge):
        result = await bridge.call_tool("terminal_sessions", {})
        assert result.is_error
        assert result.text.startswith("❌ Error: Invalid arguments for 'terminal_sessions'")

    @pytest.mark.asyncio
    async def test_none_arguments_accepted(self, bridge):
        result = await bridge.call_tool("hosts", None)
        assert not result.is_error

    @pytest.mark.asyncio
    async def test_api_error_is_error_envelope(self, bridge, backend):
        await bridge.call_tool("add_host", DB1)
        result = await bridge.call_tool("add_host", DB1)
        assert result.is_error
        assert result.text == '❌ Error: API Error 409: {"detail":"Host already exists"}'

    @pytest.mark.asyncio
    async def test_request_failed_is_error_envelope(self, bridge, backend):
        backend.fail_next = httpx.ConnectError("All connection attempts failed")
        result = await bridge.call_tool("hosts", {})
        assert result.is_error
        assert result.text == "❌ Error: Request failed: All connection attempts failed"

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_error_envelope(self, bridge, backend):
        backend.fail_next = ZeroDivisionError("division by zero")
        result = await bridge.call_tool("hosts", {})
        assert result.is_error
        assert result.text == "❌ Error: division by zero"

    @pytest.mark.asyncio
    async def test_no_active_terminal_envelope(self, bridge):
        for name, args in (("send", {"input_string": "ls"}), ("read", {})):
            result = await bridge.call_tool(name, args)
            assert result == ToolCallResult.error(
                "❌ Error: No active terminal set. Use 'set_active_terminal' first."
            )


class TestBehaviour:
    @pytest.mark.asyncio
    async def test_added_host_listed_exactly_once(self, bridge):
        added = await bridge.call_tool("add_host", DB1)
        assert not added.is_error
        listing = (await bridge.call_tool("hosts", {})).text
        rows = [line for line in listing.splitlines() if line.startswith("| db1 |")]
        assert rows == ["| db1 | 10.0.0.5:22 | ops | password | ❓ |"]
        assert listing.startswith("# Configured Hosts (1)")

    @pytest.mark.asyncio
    async def test_connected_host_status(self, bridge, backend):
        backend.seed_host("db1", last_connected="2026-10-18T09:00:00")
        listing = (await bridge.call_tool("hosts", {})).text
        assert "| db1 | 10.0.0.5:22 | ops | password | ✅ |" in listing

    @pytest.mark.asyncio
    async def test_incomplete_host_record_still_listed(self, bridge, backend):
        backend.seed_host("db1", port=None)
        backend.seed_host("web-01", user=None, auth_method=None)
        result = await bridge.call_tool("hosts", {})
        assert not result.is_error
        assert "| db1 | 10.0.0.5 | ops | password | ❓ |" in result.text
        assert "| web-01 | 10.0.0.5:22 |  |  | ❓ |" in result.text

    @pytest.mark.asyncio
    async def test_unnamed_session_does_not_break_lookup(self, bridge, backend):
        host_id = backend.seed_host("db1")
        backend.seed_session("db1", "main", output="ok")
        backend.sessions[host_id].insert(0, {"session_id": "s-x", "session_name": None, "created_at": None})
        result = await bridge.call_tool("terminal_read", {"host_name": "db1", "session_name": "main"})
        assert result.text == "ok"

    @pytest.mark.asyncio
    async def test_shorthand_workflow(self, bridge, backend):
        await bridge.call_tool("add_host", DB1)
        created = await bridge.call_tool("new_terminal", {"host_name": "db1", "session_name": "main"})
        assert "Session: main" in created.text

        before = await bridge.call_tool("send", {"input_string": "ls{{enter}}"})
        assert before.is_error

        assert not (await bridge.call_tool(
            "set_active_terminal", {"host_name": "db1", "session_name": "main"}
        )).is_error
        sent = await bridge.call_tool("send", {"input_string": "ls{{enter}}"})
        assert not sent.is_error

        session_id = backend.sessions[backend.hosts["db1"]["host_id"]][0]["session_id"]
        assert backend.inputs[session_id] == ["ls{{enter}}"]
        assert bridge.terminal.get().session_name == "main"

    @pytest.mark.asyncio
    async def test_concurrent_calls(self, bridge, backend):
        backend.seed_host("db1")
        for i in range(5):
            backend.seed_session("db1", f"s{i}", output=f"out{i}")
        results = await asyncio.gather(*(
            bridge.call_tool("terminal_read", {"host_name": "db1", "session_name": f"s{i}"})
            for i in range(5)
        ))
        assert [r.text for r in results] == [f"out{i}" for i in range(5)]

    @pytest.mark.asyncio
    async def test_aclose(self, bridge):
        await bridge.aclose()
        result = await bridge.call_tool("hosts", {})
        assert result.is_error
