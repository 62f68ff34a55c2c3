"""MCP side of the bridge: lifecycle, catalog, request models and handlers."""
