from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .api_models import ToolCallResult, ToolInfo
from .config import AppConfig
from .errors import BridgeError
from .formatting import format_error
from .gateway import BackendGateway
from .resolver import SessionResolver
from .state import ActiveTerminalContext
from .tools import ToolContext, call_tool, tool_infos


logger = logging.getLogger("remote_hosts_mcp.bridge")


class Bridge:
    """Process-wide coordinator shared by every transport.

    Owns the backend gateway, the session resolver and the active terminal
    pointer, and turns tool invocations into result envelopes. Handler failures
    never escape call_tool; they come back as an error envelope.
    """

    def __init__(
        self,
        cfg: AppConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cfg = cfg
        self.gateway = BackendGateway(cfg.backend, transport=transport)
        self.resolver = SessionResolver(self.gateway, cfg.resolver)
        self.terminal = ActiveTerminalContext()
        self._ctx = ToolContext(gateway=self.gateway, resolver=self.resolver, terminal=self.terminal)
        self._tools = tool_infos()

    def tool_infos(self) -> List[ToolInfo]:
        return list(self._tools)

    async def call_tool(self, name: Optional[str], arguments: Optional[Dict[str, Any]] = None) -> ToolCallResult:
        logger.info("tool_call_start tool=%s", name)
        try:
            text = await call_tool(self._ctx, name, arguments)
        except BridgeError as e:
            logger.warning("tool_call_failed tool=%s error=%s", name, e)
            return ToolCallResult.error(format_error(str(e)))
        except Exception as e:
            logger.exception("tool_call_crashed tool=%s", name)
            return ToolCallResult.error(format_error(str(e) or type(e).__name__))
        logger.info("tool_call_ok tool=%s", name)
        return ToolCallResult.ok(text)

    async def aclose(self) -> None:
        await self.gateway.aclose()
