"""Domain layer — value objects, grid rules, and the rover entity.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
