"""MCP adapter — the lookup service exposed as MCP tools."""
