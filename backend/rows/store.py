"""Row storage in memory.

The store is the single owner of the ordered row sequence. Every mutation
replaces the backing list in one step, so readers never observe a
half-applied change between suspension points.
"""

import logging

from models import ClassificationResult, Row

logger = logging.getLogger(__name__)

DEFAULT_ROW_COUNT = 4


class RowStore:
    """Ordered, in-memory collection of rows.

    Rows are never deleted individually; ``reset_all`` empties every row
    while keeping the count.
    """

    def __init__(self, initial_rows: int = DEFAULT_ROW_COUNT):
        if initial_rows < 0:
            raise ValueError("initial_rows must not be negative")
        self._rows: list[Row] = [Row() for _ in range(initial_rows)]

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def rows(self) -> list[Row]:
        """Return a copy of the current rows in display order."""
        return list(self._rows)

    def index_of(self, row_id: str) -> int | None:
        """Resolve a row ID to its current position.

        Args:
            row_id: The row ID.

        Returns:
            The row's index, or None if no row has that ID.
        """
        for index, row in enumerate(self._rows):
            if row.id == row_id:
                return index
        return None

    def get(self, row_id: str) -> Row | None:
        """Get a row by ID, or None if not found."""
        index = self.index_of(row_id)
        if index is None:
            return None
        return self._rows[index]

    def append(self) -> Row:
        """Add one unclassified row at the end.

        Returns:
            The new row.
        """
        row = Row()
        self._rows = [*self._rows, row]
        logger.info("Appended row %s (total: %d)", row.id, len(self._rows))
        return row

    def replace_at(self, index: int, row: Row) -> None:
        """Replace the row at a position.

        Args:
            index: Position of the row to replace.
            row: The new row.

        Raises:
            IndexError: If the index is out of range.
        """
        if not 0 <= index < len(self._rows):
            raise IndexError(f"Row index out of range: {index}")
        self._rows = [row if i == index else current for i, current in enumerate(self._rows)]

    def reset_all(self) -> None:
        """Return every row to the unclassified state, keeping the row count.

        Rows get fresh IDs so results still in flight for the old rows are
        discarded when they arrive.
        """
        self._rows = [Row() for _ in self._rows]
        logger.info("Reset all rows (total: %d)", len(self._rows))

    def edit_message(self, row_id: str, message: str) -> Row:
        """Set a row's message and clear its classification.

        Args:
            row_id: The row ID.
            message: The new message text.

        Returns:
            The edited row, with its revision incremented.

        Raises:
            KeyError: If no row has that ID.
        """
        index = self.index_of(row_id)
        if index is None:
            raise KeyError(row_id)

        current = self._rows[index]
        row = current.unclassified(message=message).model_copy(
            update={"revision": current.revision + 1}
        )
        self.replace_at(index, row)
        logger.debug("Edited row %s (revision %d)", row_id, row.revision)
        return row

    def apply_result(
        self,
        row_id: str,
        revision: int,
        result: ClassificationResult,
    ) -> Row | None:
        """Write a classification result back to the row it was computed for.

        The row is looked up by ID at write-back time. The result is dropped
        if the row no longer exists (it was reset) or its message was edited
        again after the classification started.

        Args:
            row_id: ID of the row the classification was started for.
            revision: The row's revision when the classification started.
            result: The classification result.

        Returns:
            The updated row, or None if the result was stale.
        """
        index = self.index_of(row_id)
        if index is None:
            logger.info("Discarding result for row %s: row no longer exists", row_id)
            return None

        current = self._rows[index]
        if current.revision != revision:
            logger.info(
                "Discarding result for row %s: revision %d superseded by %d",
                row_id,
                revision,
                current.revision,
            )
            return None

        row = current.with_result(result)
        self.replace_at(index, row)
        return row
