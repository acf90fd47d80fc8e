"""Domain layer — constraint grammar, cart aggregation, request/result models.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, plugins, commands, or config.
"""
