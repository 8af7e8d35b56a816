"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, roverctl.toml only holds
overrides. With no config file the grid is 10x10 with no obstacles.
"""

from __future__ import annotations

import json
from typing import Annotated

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import NoDecode

from roverctl.domain.grid import DEFAULT_HEIGHT, DEFAULT_WIDTH


class GridConfig(BaseModel):
    """[grid] section."""

    model_config = {"frozen": True}

    width: int = Field(default=DEFAULT_WIDTH, gt=0)
    height: int = Field(default=DEFAULT_HEIGHT, gt=0)
    # NoDecode: env values reach the validator as raw text, not JSON.
    obstacles: Annotated[list[tuple[int, int]], NoDecode] = Field(default_factory=list)

    @field_validator("obstacles", mode="before")
    @classmethod
    def _parse_obstacles(cls, value: object) -> object:
        """Accept ``"x,y"`` strings as well as ``[x, y]`` pairs.

        A single string holds ``;``-separated cells, or a JSON array of pairs.
        """
        if isinstance(value, str) and value.lstrip().startswith("["):
            value = json.loads(value)
        elif isinstance(value, str):
            value = [part for part in value.split(";") if part.strip()]
        if isinstance(value, (list, tuple)):
            return [parse_cell(v) if isinstance(v, str) else v for v in value]
        return value


class McpConfig(BaseModel):
    """[mcp] section."""

    model_config = {"frozen": True}

    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000


def parse_cell(text: str) -> tuple[int, int]:
    """Parse ``"x,y"`` into an integer pair.

    Raises ValueError when the text is not two comma-separated integers.

    Examples:
        >>> parse_cell("5,5")
        (5, 5)
        >>> parse_cell(" 3 , 4 ")
        (3, 4)
    """
    parts = text.split(",")
    if len(parts) != 2:
        msg = f"Expected X,Y but got {text!r}"
        raise ValueError(msg)
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        msg = f"Expected integer X,Y but got {text!r}"
        raise ValueError(msg) from None
