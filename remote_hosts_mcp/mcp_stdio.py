"""Line-delimited JSON-RPC over stdin/stdout.

Each request runs as its own task so a tool call waiting on the backend does
not hold up the next line. stdout carries protocol frames only; all logging
goes to stderr.
"""

from __future__ import annotations

import asyncio
import io
import json
import logging
import sys
from typing import Any, Dict, Optional, Set, TextIO

from .mcp_protocol import INTERNAL_ERROR, MCPHandler, PARSE_ERROR, error_response


logger = logging.getLogger("remote_hosts_mcp.stdio")


class StdioServer:
    def __init__(
        self,
        handler: MCPHandler,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.handler = handler
        self._stdin = stdin or io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors="replace")
        self._stdout = stdout or io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", line_buffering=True)
        self._write_lock = asyncio.Lock()
        self._tasks: Set[asyncio.Task] = set()

    async def _write(self, response: Dict[str, Any]) -> None:
        line = json.dumps(response, ensure_ascii=False) + "\n"
        async with self._write_lock:
            self._stdout.write(line)
            self._stdout.flush()

    async def _process(self, line: str) -> None:
        try:
            request = json.loads(line)
        except json.JSONDecodeError as e:
            logger.error("invalid json: %s", e)
            await self._write(error_response(None, PARSE_ERROR, f"Parse error: {e}"))
            return

        try:
            response = await self.handler.handle(request)
        except Exception as e:
            logger.exception("unexpected error")
            req_id = request.get("id") if isinstance(request, dict) else None
            response = error_response(req_id, INTERNAL_ERROR, f"Internal error: {e}")
        if response is not None:
            await self._write(response)

    def _spawn(self, line: str) -> None:
        task = asyncio.get_running_loop().create_task(self._process(line))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def serve(self) -> None:
        """Read requests until EOF, then wait for in-flight calls to finish."""
        loop = asyncio.get_running_loop()
        while True:
            line = await loop.run_in_executor(None, self._stdin.readline)
            if not line:
                break
            line = line.strip()
            if not line:
                continue
            self._spawn(line)

        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        logger.info("stdin closed, shutting down")


def install_loop_exception_handler(loop: asyncio.AbstractEventLoop) -> None:
    """Log faults raised outside any request instead of letting them pass silently."""

    def _handler(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        exc = context.get("exception")
        message = context.get("message", "unhandled exception in event loop")
        if exc is not None:
            logger.error("%s", message, exc_info=exc)
        else:
            logger.error("%s", message)

    loop.set_exception_handler(_handler)
