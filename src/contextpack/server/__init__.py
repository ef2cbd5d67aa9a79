"""MCP server exposing document context to AI clients."""

from contextpack.server.mcp_server import create_mcp_server

__all__ = ["create_mcp_server"]
