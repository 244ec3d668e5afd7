"""Remote hosts MCP tools package.

Each tool fulfils one invocation by resolving names against the control API
and issuing the backend calls it needs.

Categories:
- hosts: host registry (add_host, hosts)
- terminals: explicit host/session addressing (terminal_sessions, new_terminal,
  terminal_send, terminal_read)
- active: active terminal shorthand (set_active_terminal, send, read)
"""

from typing import Any, Dict, List, Optional

from ..api_models import ToolInfo
from ..errors import UnknownTool
from .base import Handler, ToolContext, ToolName
from .hosts import handle_add_host, handle_hosts, TOOLS_INFO as HOSTS_TOOLS_INFO
from .terminals import (
    handle_new_terminal,
    handle_terminal_read,
    handle_terminal_send,
    handle_terminal_sessions,
    TOOLS_INFO as TERMINAL_TOOLS_INFO,
)
from .active import (
    handle_read,
    handle_send,
    handle_set_active_terminal,
    TOOLS_INFO as ACTIVE_TOOLS_INFO,
)


# =============================================================================
# TOOL REGISTRY
# =============================================================================

TOOL_HANDLERS: Dict[ToolName, Handler] = {
    # Hosts
    ToolName.ADD_HOST: handle_add_host,
    ToolName.HOSTS: handle_hosts,
    # Terminals
    ToolName.TERMINAL_SESSIONS: handle_terminal_sessions,
    ToolName.NEW_TERMINAL: handle_new_terminal,
    ToolName.TERMINAL_SEND: handle_terminal_send,
    ToolName.TERMINAL_READ: handle_terminal_read,
    # Active terminal
    ToolName.SET_ACTIVE_TERMINAL: handle_set_active_terminal,
    ToolName.SEND: handle_send,
    ToolName.READ: handle_read,
}

ALL_TOOLS_INFO = HOSTS_TOOLS_INFO + TERMINAL_TOOLS_INFO + ACTIVE_TOOLS_INFO


def _check_registry() -> None:
    names = set(ToolName)
    missing = names - set(TOOL_HANDLERS)
    if missing:
        raise RuntimeError(f"Tools without handler: {sorted(t.value for t in missing)}")
    described = [info["name"] for info in ALL_TOOLS_INFO]
    if sorted(described) != sorted(t.value for t in names):
        raise RuntimeError(f"Tool catalog does not match ToolName: {described}")


_check_registry()


# =============================================================================
# PUBLIC API
# =============================================================================

def lookup_tool(name: Optional[str]) -> ToolName:
    """Map a tool name to its ToolName.

    Raises:
        UnknownTool: If the name is not in the catalog
    """
    try:
        return ToolName(name)
    except ValueError:
        raise UnknownTool(str(name)) from None


async def call_tool(ctx: ToolContext, tool: Optional[str], args: Optional[Dict[str, Any]]) -> str:
    """Execute a tool by name.

    Args:
        ctx: Gateway, resolver and active terminal context
        tool: Tool name (e.g., 'terminal_send')
        args: Tool arguments, validated by the tool's argument model

    Returns:
        Formatted text for the caller

    Raises:
        UnknownTool: If tool not found
        InvalidArguments: If arguments don't match the tool's model
        BridgeError: Any resolution or backend failure
    """
    name = lookup_tool(tool)
    handler = TOOL_HANDLERS[name]
    return await handler(ctx, args or {})


def tool_infos() -> List[ToolInfo]:
    """Get the catalog of all tools, in declaration order."""
    return [
        ToolInfo(
            name=info["name"],
            description=info["description"],
            input_schema=info["input_schema"],
        )
        for info in ALL_TOOLS_INFO
    ]


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "ALL_TOOLS_INFO",
    "TOOL_HANDLERS",
    "ToolContext",
    "ToolName",
    "call_tool",
    "lookup_tool",
    "tool_infos",
]
