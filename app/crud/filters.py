"""
Query filter helpers shared by the listing endpoints.
"""

from typing import List, Optional
from sqlalchemy import func, select
from sqlalchemy.orm import Session


def parse_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated query parameter, dropping blanks."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def contains_text(column, text: str):
    """Case-insensitive substring match."""
    return column.ilike(f"%{text}%")


def overlaps(db: Session, column, values: List[str]):
    """
    True when the array column shares at least one element with ``values``.

    Compiles to the native ``&&`` operator on PostgreSQL. On SQLite the
    column holds a JSON array, so membership is tested through json_each.
    """
    if db.get_bind().dialect.name == "postgresql":
        return column.overlap(values)

    elements = func.json_each(column).table_valued("value")
    return select(elements.c.value).where(elements.c.value.in_(values)).exists()
