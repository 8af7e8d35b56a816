"""FastMCP server setup.

Optional extra: the ``mcp`` package is only needed to serve, not to
import this module. Transport: stdio by default, SSE and streamable
HTTP optional. One server holds one MissionStore, so rovers live as
long as the server process.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from roverctl.infrastructure.store import MissionStore

mcp_available = False
_FastMCP: Any = None

try:
    from mcp.server.fastmcp import FastMCP as _FastMCP  # type: ignore[no-redef,import-not-found]

    mcp_available = True
except ImportError:
    pass

__all__ = ["create_server", "mcp_available"]


def create_server(
    *,
    store: MissionStore | None = None,
    root: Path | None = None,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> Any:
    """Create and configure the MCP server.

    Uses *store* when given, otherwise builds one from the settings
    discovered under *root* (or CWD). Registers all tools and returns
    the FastMCP instance.

    Raises RuntimeError if the mcp extra is not installed.
    """
    if not mcp_available or _FastMCP is None:
        msg = "MCP extra not installed. Install with: pip install roverctl[mcp]"
        raise RuntimeError(msg)

    from roverctl.mcp.tools import register_tools

    if store is None:
        from roverctl.config.settings import RoverSettings
        from roverctl.infrastructure.store import MissionStore

        store = MissionStore.from_settings(RoverSettings.from_cli(root=root))

    server = _FastMCP("roverctl", host=host, port=port)
    register_tools(server, store)
    return server
