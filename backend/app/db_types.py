"""Identifier column type shared by tenants, events and their income rows."""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.dialects import postgresql
from sqlalchemy.types import CHAR, TypeDecorator


def canonical_uuid(value: Any) -> uuid.UUID:
    """Parse ``value`` into a UUID, raising ``ValueError`` for malformed text."""

    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


class GUID(TypeDecorator):
    """UUID stored natively on PostgreSQL and as 36-character text elsewhere.

    Bound values are normalised to the canonical hyphenated form so lookups by
    an upper-case or brace-wrapped identifier still match. Loaded values are
    always strings.
    """

    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.UUID(as_uuid=True))
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return None
        parsed = canonical_uuid(value)
        return parsed if dialect.name == "postgresql" else str(parsed)

    def process_result_value(self, value: Any, dialect):  # type: ignore[override]
        return None if value is None else str(value)
