"""Infrastructure layer — backend transport, command dispatch, wallet handle.

This layer depends on stdlib, pydantic, structlog and the domain layer.
It must never import from services, commands, or output.
"""
