from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .bridge import Bridge
from .config import AppConfig, DEFAULT_API_BASE, EnvSettings, resolve_config
from .main import create_app, setup_logging
from .mcp_protocol import MCPHandler
from .mcp_stdio import StdioServer, install_loop_exception_handler


logger = logging.getLogger("remote_hosts_mcp.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="remote-hosts-mcp",
        description="MCP bridge to the Remote Hosts terminal control API",
    )
    parser.add_argument(
        "--api-base", "-a",
        help=f"Base URL of the Remote Hosts API (default: {DEFAULT_API_BASE}, env RH_API_BASE)",
    )
    parser.add_argument("--config", help="YAML config file (env RH_CONFIG_FILE)")
    parser.add_argument(
        "--transport", choices=["stdio", "http"], default="stdio",
        help="stdio (default) for MCP clients that spawn the process, http for the FastAPI surface",
    )
    parser.add_argument("--listen-host", default="127.0.0.1", help="Bind address for --transport http")
    parser.add_argument("--listen-port", type=int, default=8080, help="Bind port for --transport http")
    return parser


async def run_stdio(cfg: AppConfig) -> None:
    install_loop_exception_handler(asyncio.get_running_loop())
    bridge = Bridge(cfg)
    logger.info("Remote Hosts MCP Client running (API: %s)", cfg.backend.api_base)
    try:
        await StdioServer(MCPHandler(bridge)).serve()
    finally:
        await bridge.aclose()


def run_http(env: EnvSettings, cfg: AppConfig, host: str, port: int) -> None:
    import uvicorn

    uvicorn.run(create_app(env=env, cfg=cfg), host=host, port=port, log_config=None)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    env = EnvSettings()
    setup_logging(env.log_level)

    try:
        cfg = resolve_config(env, config_file=args.config, api_base=args.api_base)
    except Exception:
        logger.exception("Server error: failed to load configuration")
        return 1

    try:
        if args.transport == "http":
            run_http(env, cfg, args.listen_host, args.listen_port)
        else:
            asyncio.run(run_stdio(cfg))
    except KeyboardInterrupt:
        logger.info("interrupted")
    except Exception:
        logger.exception("Server error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
