"""Domain layer — monetary values, node variants, command names, envelopes.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
