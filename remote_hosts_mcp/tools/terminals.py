"""Terminal session tools addressed by explicit host and session names.

Tools: terminal_sessions, new_terminal, terminal_send, terminal_read
"""

from typing import Any, Dict, Optional

from pydantic import Field

from .base import ToolArgs, ToolContext, ToolName, parse_args, tool_info
from ..formatting import format_input_sent, format_output, format_session_created, format_sessions


# =============================================================================
# MODELS
# =============================================================================

class ArgsTerminalSessions(ToolArgs):
    host_name: str = Field(
        description="Name of the host to list sessions for (use 'hosts' tool to see available hosts)"
    )


class ArgsNewTerminal(ToolArgs):
    host_name: str = Field(
        description="Name of the host to create session on (use 'hosts' tool to see available hosts)"
    )
    session_name: Optional[str] = Field(
        default=None,
        description="Optional custom identifier for the session. If omitted, a unique name will be auto-generated",
    )


class ArgsTerminalSend(ToolArgs):
    host_name: str = Field(description="Name of the host")
    session_name: str = Field(description="Name of the session")
    input_string: str = Field(
        description="Text or commands to send. Use {{enter}} to execute, {{ctrl+c}} to interrupt, etc."
    )


class ArgsTerminalRead(ToolArgs):
    host_name: str = Field(description="Name of the host")
    session_name: str = Field(description="Name of the session")


# =============================================================================
# SHARED OPERATIONS
# =============================================================================

async def send_to_session(ctx: ToolContext, host_name: str, session_name: str, input_string: str) -> str:
    """Resolve the session and forward the input untouched.

    Special key markers such as {{enter}} are interpreted by the backend.
    """
    resolved = await ctx.resolver.resolve_session(host_name, session_name)
    await ctx.gateway.send_input(resolved.session.session_id, input_string)
    return format_input_sent(host_name, session_name, input_string)


async def read_from_session(ctx: ToolContext, host_name: str, session_name: str) -> str:
    resolved = await ctx.resolver.resolve_session(host_name, session_name)
    result = await ctx.gateway.read_output(resolved.session.session_id)
    return format_output(result.output)


# =============================================================================
# HANDLERS
# =============================================================================

async def handle_terminal_sessions(ctx: ToolContext, args: Dict[str, Any]) -> str:
    parsed = parse_args(ToolName.TERMINAL_SESSIONS, ArgsTerminalSessions, args)
    sessions = await ctx.resolver.list_sessions(parsed.host_name)
    return format_sessions(parsed.host_name, sessions)


async def handle_new_terminal(ctx: ToolContext, args: Dict[str, Any]) -> str:
    parsed = parse_args(ToolName.NEW_TERMINAL, ArgsNewTerminal, args)
    host = await ctx.resolver.resolve_host(parsed.host_name)
    session = await ctx.gateway.new_session(host.host_id, parsed.session_name)
    return format_session_created(parsed.host_name, session)


async def handle_terminal_send(ctx: ToolContext, args: Dict[str, Any]) -> str:
    parsed = parse_args(ToolName.TERMINAL_SEND, ArgsTerminalSend, args)
    return await send_to_session(ctx, parsed.host_name, parsed.session_name, parsed.input_string)


async def handle_terminal_read(ctx: ToolContext, args: Dict[str, Any]) -> str:
    parsed = parse_args(ToolName.TERMINAL_READ, ArgsTerminalRead, args)
    return await read_from_session(ctx, parsed.host_name, parsed.session_name)


# =============================================================================
# TOOL INFO
# =============================================================================

TOOLS_INFO = [
    tool_info(
        ToolName.TERMINAL_SESSIONS,
        "List active terminal sessions on a specific host. "
        "Shows all running terminal sessions with their status and creation time.",
        ArgsTerminalSessions,
    ),
    tool_info(
        ToolName.NEW_TERMINAL,
        "Create a new terminal session on a remote host. "
        "Establishes an SSH connection and starts a new terminal session using tmux.",
        ArgsNewTerminal,
    ),
    tool_info(
        ToolName.TERMINAL_SEND,
        "Send input to a specific terminal session. "
        "Supports special key syntax like {{enter}}, {{ctrl+c}}, {{tab}}, etc.",
        ArgsTerminalSend,
    ),
    tool_info(
        ToolName.TERMINAL_READ,
        "Read the current output from a terminal session. "
        "Captures and returns all visible output from the terminal screen.",
        ArgsTerminalRead,
    ),
]
