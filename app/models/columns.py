"""
Shared column types and row helpers for the ConnectHire models.

Array and document columns use native PostgreSQL types in production and
fall back to JSON on SQLite, which the test suite runs against.
"""

import enum
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from sqlalchemy import JSON, Column, Enum, String
from sqlalchemy.dialects.postgresql import ARRAY, JSONB


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo on round-trip; stored timestamps are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


StringList = ARRAY(String).with_variant(JSON(), "sqlite")
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def value_enum(enum_cls: type, name: str) -> Enum:
    """Enum column type storing member values ("pending") rather than names."""
    return Enum(enum_cls, name=name, values_callable=lambda members: [m.value for m in members])

# Keys that a free-form payload may never overwrite
RESERVED_FIELDS = frozenset({"id", "user_id", "employer_id", "role", "created_at", "updated_at", "extra_fields"})


class SerializableMixin:
    """Adds ``to_dict`` producing the row as a plain JSON-ready mapping."""

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for column in self.__table__.columns:
            if column.key == "extra_fields":
                continue
            value = getattr(self, column.key)
            if isinstance(value, enum.Enum):
                value = value.value
            data[column.key] = value
        return data


class FlexibleFieldsMixin(SerializableMixin):
    """
    Rows that accept arbitrary client-supplied fields.

    Keys matching a column are written to that column; everything else lands
    in the ``extra_fields`` document and is merged back by ``to_dict``.
    """

    extra_fields = Column(JSONDocument, nullable=False, default=dict)

    def apply_fields(self, fields: Dict[str, Any]) -> None:
        columns = set(self.__table__.columns.keys())
        extras = dict(self.extra_fields or {})

        for key, value in fields.items():
            if key in RESERVED_FIELDS:
                continue
            if key in columns:
                setattr(self, key, value)
            else:
                extras[key] = value

        # Reassign so the JSON column is flagged dirty
        self.extra_fields = extras

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra_fields or {})
        data.update(super().to_dict())
        return data


def project(row: Any, fields: Iterable[str]) -> Optional[Dict[str, Any]]:
    """Reduce a row to a fixed subset of its fields."""
    if row is None:
        return None
    data = row.to_dict()
    return {field: data.get(field) for field in fields}
