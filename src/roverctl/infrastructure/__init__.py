"""Infrastructure layer — in-memory state for the grid and rovers.

This layer holds state only; it never decides whether a command is legal.
It must never import from services, commands, or output.
"""
