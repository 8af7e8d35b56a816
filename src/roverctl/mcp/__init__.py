"""MCP adapter — exposes rover operations as tools to a long-lived client."""
