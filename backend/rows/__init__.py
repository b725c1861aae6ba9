"""In-memory row storage."""

from rows.store import DEFAULT_ROW_COUNT, RowStore

__all__ = ["DEFAULT_ROW_COUNT", "RowStore"]
