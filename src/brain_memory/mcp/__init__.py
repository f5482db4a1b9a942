"""MCP transport: the tool catalogue and the stdio server."""
