"""MCP JSON-RPC method handling, shared by the stdio and SSE transports."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from .bridge import Bridge


logger = logging.getLogger("remote_hosts_mcp.mcp")

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def error_response(req_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": req_id, "error": {"code": code, "message": message}}


def result_response(req_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": req_id, "result": result}


class MCPHandler:
    """Handler for the MCP methods this server implements."""

    def __init__(self, bridge: Bridge):
        self.bridge = bridge

    async def handle_initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle MCP initialize request.

        Always answers with the single protocol version this server is built
        against, whatever the client asked for.
        """
        logger.info("received initialize request: %s", json.dumps(params, ensure_ascii=False))
        server = self.bridge.cfg.server
        result = {
            "protocolVersion": server.protocol_version,
            "capabilities": {
                "tools": {},
                "logging": {},
            },
            "serverInfo": {
                "name": server.name,
                "version": server.version,
            },
        }
        logger.info("sending initialize result: %s", json.dumps(result))
        return result

    async def handle_tools_list(self) -> Dict[str, Any]:
        """Handle MCP tools/list request."""
        return {"tools": [tool.to_mcp() for tool in self.bridge.tool_infos()]}

    async def handle_tools_call(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle MCP tools/call request."""
        result = await self.bridge.call_tool(params.get("name"), params.get("arguments") or {})
        return result.to_mcp()

    async def handle(self, request: Any) -> Optional[Dict[str, Any]]:
        """Dispatch one decoded JSON-RPC message.

        Returns the response object, or None for notifications.
        """
        if not isinstance(request, dict):
            return error_response(None, INVALID_REQUEST, "Invalid request")

        req_id = request.get("id")
        method = request.get("method")
        params = request.get("params") or {}
        is_notification = "id" not in request

        if is_notification:
            logger.debug("notification %s", method)
            return None
        if not isinstance(params, dict):
            return error_response(req_id, INVALID_PARAMS, "params must be an object")

        try:
            if method == "initialize":
                result = await self.handle_initialize(params)
            elif method == "tools/list":
                result = await self.handle_tools_list()
            elif method == "tools/call":
                result = await self.handle_tools_call(params)
            elif method == "ping":
                result = {}
            else:
                return error_response(req_id, METHOD_NOT_FOUND, f"Method not found: {method}")
        except Exception as e:
            logger.exception("error handling method %s", method)
            return error_response(req_id, INTERNAL_ERROR, str(e))

        return result_response(req_id, result)
