#!/usr/bin/env python3
"""Sybase MCP server - run from the command line.

Usage:
    python run_server.py                                  # stdio (default)
    MCP_TRANSPORT=streamable-http python run_server.py    # HTTP

Required environment (or .env):
    SYBASE_HOST, SYBASE_PORT, SYBASE_DATABASE, SYBASE_USERNAME, SYBASE_PASSWORD
"""

from __future__ import annotations

from sybase_mcp.mcp_servers.sybase_server import main

if __name__ == "__main__":
    main()
