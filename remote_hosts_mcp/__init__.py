"""MCP bridge to the Remote Hosts terminal control API."""

__version__ = "1.0.0"
