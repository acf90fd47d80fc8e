"""Infrastructure layer — collaborator stores, SQLite tables, route building.

This layer depends on stdlib, third-party libs (SQLAlchemy) and the
domain record types it stores.  It must never import from services,
plugins, commands, or output.
"""
