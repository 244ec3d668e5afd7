"""Active terminal tools.

Tools: set_active_terminal, send, read

send and read address whatever session set_active_terminal last stored in the
ActiveTerminalContext carried by the ToolContext.
"""

import logging
from typing import Any, Dict

from pydantic import Field

from .base import ToolArgs, ToolContext, ToolName, parse_args, tool_info
from .terminals import read_from_session, send_to_session
from ..formatting import format_active_set


logger = logging.getLogger("remote_hosts_mcp.tools.active")


# =============================================================================
# MODELS
# =============================================================================

class ArgsSetActiveTerminal(ToolArgs):
    host_name: str = Field(description="Name of the host")
    session_name: str = Field(description="Name of the session")


class ArgsSend(ToolArgs):
    input_string: str = Field(
        description="Text or commands to send. Use {{enter}} to execute, {{ctrl+c}} to interrupt, etc."
    )


class ArgsRead(ToolArgs):
    pass


# =============================================================================
# HANDLERS
# =============================================================================

async def handle_set_active_terminal(ctx: ToolContext, args: Dict[str, Any]) -> str:
    parsed = parse_args(ToolName.SET_ACTIVE_TERMINAL, ArgsSetActiveTerminal, args)
    # Resolution failures propagate before the pointer is touched.
    await ctx.resolver.resolve_session(parsed.host_name, parsed.session_name)
    ctx.terminal.set(parsed.host_name, parsed.session_name)
    logger.info("active terminal set to %s/%s", parsed.host_name, parsed.session_name)
    return format_active_set(parsed.host_name, parsed.session_name)


async def handle_send(ctx: ToolContext, args: Dict[str, Any]) -> str:
    active = ctx.terminal.require()
    parsed = parse_args(ToolName.SEND, ArgsSend, args)
    return await send_to_session(ctx, active.host_name, active.session_name, parsed.input_string)


async def handle_read(ctx: ToolContext, args: Dict[str, Any]) -> str:
    active = ctx.terminal.require()
    parse_args(ToolName.READ, ArgsRead, args)
    return await read_from_session(ctx, active.host_name, active.session_name)


# =============================================================================
# TOOL INFO
# =============================================================================

TOOLS_INFO = [
    tool_info(
        ToolName.SET_ACTIVE_TERMINAL,
        "Set the active terminal session for shorthand commands. "
        "Allows using 'send' and 'read' tools without specifying host/session.",
        ArgsSetActiveTerminal,
    ),
    tool_info(
        ToolName.SEND,
        "Send input to the active terminal session (shorthand). "
        "Must call 'set_active_terminal' first.",
        ArgsSend,
    ),
    tool_info(
        ToolName.READ,
        "Read output from the active terminal session (shorthand). "
        "Must call 'set_active_terminal' first.",
        ArgsRead,
    ),
]
