"""Host registry tools.

Tools: add_host, hosts
"""

from typing import Any, Dict, Optional

from pydantic import ConfigDict, Field, field_validator

from .base import ToolArgs, ToolContext, ToolName, parse_args, tool_info
from ..formatting import format_host_added, format_hosts
from ..models import AuthMethod


# =============================================================================
# MODELS
# =============================================================================

class ArgsAddHost(ToolArgs):
    """Arguments for registering a remote SSH host."""
    # port is advertised as required; omitting it still falls back to 22.
    model_config = ConfigDict(
        json_schema_extra={"required": ["name", "address", "port", "user", "auth_method", "secret"]},
    )

    name: str = Field(description="Unique identifier for the host (e.g., 'production-server', 'web-01')")
    address: str = Field(description="Hostname or IP address (e.g., '192.168.1.100' or 'server.example.com')")
    port: int = Field(default=22, description="SSH port number (typically 22)")
    user: str = Field(description="SSH username to authenticate as")
    auth_method: AuthMethod = Field(description="Authentication type - must be 'password' or 'key'")
    secret: str = Field(description="SSH password (for password auth) or complete private key content")
    validate_connection: Optional[bool] = Field(
        default=True,
        alias="validate",
        description="Test SSH connection before saving (recommended)",
    )

    @field_validator("validate_connection", mode="after")
    @classmethod
    def _null_means_validate(cls, v: Optional[bool]) -> bool:
        return v is not False


class ArgsHosts(ToolArgs):
    """The hosts listing takes no arguments."""


# =============================================================================
# HANDLERS
# =============================================================================

async def handle_add_host(ctx: ToolContext, args: Dict[str, Any]) -> str:
    parsed = parse_args(ToolName.ADD_HOST, ArgsAddHost, args)
    result = await ctx.gateway.add_host({
        "name": parsed.name,
        "address": parsed.address,
        "port": parsed.port,
        "user": parsed.user,
        "auth_method": parsed.auth_method,
        "secret": parsed.secret,
        "validate": parsed.validate_connection,
    })
    return format_host_added(
        parsed.name, parsed.address, parsed.port, parsed.user, parsed.auth_method, result.status
    )


async def handle_hosts(ctx: ToolContext, args: Dict[str, Any]) -> str:
    parse_args(ToolName.HOSTS, ArgsHosts, args)
    return format_hosts(await ctx.gateway.list_hosts())


# =============================================================================
# TOOL INFO
# =============================================================================

TOOLS_INFO = [
    tool_info(
        ToolName.ADD_HOST,
        "Add a new remote SSH host to the system. "
        "Registers a remote server for terminal session management.",
        ArgsAddHost,
    ),
    tool_info(
        ToolName.HOSTS,
        "List all configured remote hosts with their connection status. "
        "Shows all registered SSH hosts in a formatted table.",
        ArgsHosts,
    ),
]
