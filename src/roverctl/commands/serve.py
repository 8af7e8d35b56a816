"""serve — start the MCP server (requires roverctl[mcp] extra)."""

from __future__ import annotations

import click

from roverctl.commands._base import RoverCommand


@click.command(
    cls=RoverCommand,
    examples="""\
  # Start the MCP server (stdio transport, default)
  roverctl serve

  # Streamable HTTP on custom host/port
  roverctl serve --transport streamable-http --host 0.0.0.0 --port 9000

  # 20x20 grid with two obstacles
  roverctl --width 20 --height 20 --obstacle 5,5 --obstacle 6,5 serve""",
)
@click.option(
    "--transport",
    default=None,
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="MCP transport protocol (default from [mcp] config, else stdio).",
)
@click.option("--host", default=None, help="Bind address (HTTP transports only).")
@click.option("--port", default=None, type=int, help="Listen port (HTTP transports only).")
@click.pass_obj
def serve(app: object, transport: str | None, host: str | None, port: int | None) -> None:
    """Start the MCP server; rovers live for the lifetime of the server."""
    from roverctl.mcp.server import create_server, mcp_available

    if not mcp_available:
        click.echo("MCP not installed. Install with: pip install roverctl[mcp]", err=True)
        raise SystemExit(1)

    from roverctl.commands._context import AppContext

    assert isinstance(app, AppContext)
    cfg = app.settings.mcp
    server = create_server(
        store=app.store,
        host=host or cfg.host,
        port=port if port is not None else cfg.port,
    )
    server.run(transport=transport or cfg.transport)
