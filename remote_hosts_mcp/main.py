from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse

from .api_models import MCPMetadata, ToolCallError, ToolCallRequest, ToolCallResponse, ToolsListResponse
from .bridge import Bridge
from .config import AppConfig, EnvSettings, resolve_config
from .mcp_protocol import MCPHandler
from .mcp_sse import mcp_sse_endpoint


logger = logging.getLogger("remote_hosts_mcp")


def setup_logging(level: str = "INFO") -> None:
    # stdout belongs to the stdio transport; logs always go to stderr.
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


@dataclass
class AppState:
    env: EnvSettings
    cfg: AppConfig
    bridge: Bridge
    mcp: MCPHandler


def create_app(
    env: Optional[EnvSettings] = None,
    cfg: Optional[AppConfig] = None,
    bridge: Optional[Bridge] = None,
) -> FastAPI:
    env = env or EnvSettings()
    setup_logging(env.log_level)
    if cfg is None:
        cfg = bridge.cfg if bridge is not None else resolve_config(env)
    bridge = bridge or Bridge(cfg)

    state = AppState(env=env, cfg=cfg, bridge=bridge, mcp=MCPHandler(bridge))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Remote Hosts MCP HTTP surface running (API: %s)", cfg.backend.api_base)
        yield
        await state.bridge.aclose()

    app = FastAPI(title="Remote Hosts MCP Bridge", version=cfg.server.version, lifespan=lifespan)

    def get_state() -> AppState:
        return state

    def internal_api_key() -> Optional[str]:
        return env.internal_api_key.get_secret_value() if env.internal_api_key else None

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    @app.get("/mcp/metadata")
    async def mcp_metadata(st: AppState = Depends(get_state)):
        """MCP platform metadata endpoint for capability discovery."""
        return MCPMetadata(
            protocol_version=st.cfg.server.protocol_version,
            server_name=st.cfg.server.name,
            server_version=st.cfg.server.version,
            api_base=st.cfg.backend.api_base,
        ).model_dump()

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        # Avoid leaking internal details to callers by default.
        logger.exception("unhandled_exception", extra={"path": str(request.url.path)})
        return JSONResponse(
            status_code=500,
            content=ToolCallResponse(
                status="error",
                error=ToolCallError(code="internal_error", message="Internal server error"),
            ).model_dump(),
        )

    def require_internal_api_key(
        x_internal_api_key: Optional[str] = Header(default=None, alias="X-Internal-Api-Key"),
    ):
        expected = internal_api_key()
        if expected is None:
            return
        if not x_internal_api_key or x_internal_api_key != expected:
            raise HTTPException(status_code=401, detail="Missing or invalid X-Internal-Api-Key")

    @app.post("/v1/tools/list", dependencies=[Depends(require_internal_api_key)])
    async def tools_list(st: AppState = Depends(get_state)):
        return ToolsListResponse(tools=st.bridge.tool_infos()).model_dump()

    @app.post("/v1/tools/call", dependencies=[Depends(require_internal_api_key)])
    async def tools_call(req: ToolCallRequest, st: AppState = Depends(get_state)):
        result = await st.bridge.call_tool(req.tool, req.args)
        if result.is_error:
            return ToolCallResponse(
                status="error",
                content=result.content,
                error=ToolCallError(code="tool_error", message=result.text),
                meta={"tool": req.tool},
            ).model_dump()
        return ToolCallResponse(
            status="ok",
            content=result.content,
            meta={"tool": req.tool},
        ).model_dump()

    @app.post("/mcp")
    async def mcp(request: Request, st: AppState = Depends(get_state)):
        return await mcp_sse_endpoint(request, st.mcp, api_key=internal_api_key())

    return app
