"""SQLAlchemy Core table definitions for the rule's local store.

Three tables mirror the host platform records the rule touches:
settings, discount requirements, and localized string resources.
"""

from __future__ import annotations

from sqlalchemy import Column, Index, Integer, MetaData, Table, Text, UniqueConstraint

metadata = MetaData()

settings = Table(
    "settings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("value", Text, nullable=False),
    Column("store_id", Integer, nullable=False, default=0, server_default="0"),
    UniqueConstraint("name", "store_id"),
)

discount_requirements = Table(
    "discount_requirements",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("discount_id", Integer, nullable=False),
    Column("rule_system_name", Text, nullable=False),
)

locale_string_resources = Table(
    "locale_string_resources",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("language_id", Integer, nullable=False, default=1, server_default="1"),
    Column("resource_name", Text, nullable=False),
    Column("resource_value", Text, nullable=False),
    UniqueConstraint("language_id", "resource_name"),
)

Index("ix_discount_requirements_rule", discount_requirements.c.rule_system_name)
Index("ix_discount_requirements_discount", discount_requirements.c.discount_id)
