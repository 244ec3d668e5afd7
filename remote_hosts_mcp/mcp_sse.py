"""MCP SSE (Server-Sent Events) endpoint.

Lets HTTP-based MCP clients reach the same tools as the stdio transport: one
JSON-RPC request per POST, answered with a single SSE `data:` event.
"""

from __future__ import annotations

import json
import logging
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.responses import StreamingResponse

from .mcp_protocol import INTERNAL_ERROR, MCPHandler, PARSE_ERROR, error_response


logger = logging.getLogger("remote_hosts_mcp.mcp_sse")


def _sse_event(payload: Dict[str, Any]) -> str:
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


async def stream_response(
    handler: MCPHandler, request_data: Any
) -> AsyncGenerator[str, None]:
    """Stream the JSON-RPC response for one request."""
    try:
        response = await handler.handle(request_data)
    except Exception as e:
        logger.exception("SSE stream error")
        req_id = request_data.get("id") if isinstance(request_data, dict) else None
        response = error_response(req_id, INTERNAL_ERROR, str(e))

    # Notifications have no response; close the stream with an empty event.
    if response is None:
        yield ": accepted\n\n"
        return
    yield _sse_event(response)


async def mcp_sse_endpoint(
    request: Request,
    handler: MCPHandler,
    api_key: Optional[str] = None,
) -> StreamingResponse:
    """MCP SSE endpoint handler.

    Security:
    - Bearer token authentication via Authorization header, when api_key is set
    """
    if api_key:
        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer ") or auth_header[7:] != api_key:
            logger.warning("Invalid or missing Bearer token")
            raise HTTPException(status_code=401, detail="Invalid or missing Bearer token")

    headers = {
        "Cache-Control": "no-cache",
        "Connection": "keep-alive",
        "X-Accel-Buffering": "no",  # Disable nginx buffering
    }

    try:
        body = await request.json()
    except ValueError as e:
        logger.warning("Failed to parse MCP SSE request: %s", e)
        parse_error_message = f"Parse error: {e}"

        async def error_stream():
            yield _sse_event(error_response(None, PARSE_ERROR, parse_error_message))

        return StreamingResponse(error_stream(), media_type="text/event-stream", headers=headers)

    return StreamingResponse(
        stream_response(handler, body),
        media_type="text/event-stream",
        headers=headers,
    )
