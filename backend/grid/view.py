"""Grid view: projects rows for display and classifies edited messages."""

import logging
from dataclasses import dataclass

from pydantic import BaseModel, Field

from classify.pipeline import ClassificationPipeline
from models import ClassificationResult, Row
from notify import Notifier
from rows.store import RowStore

logger = logging.getLogger(__name__)

EDITABLE_FIELD = "message"

# Column definitions in the shape the grid widget expects
COLUMNS: list[dict] = [
    {"headerName": "Message", "field": "message", "editable": True, "flex": 2},
    {"headerName": "Category", "field": "category", "flex": 1},
    {"headerName": "Confidence", "field": "confidence", "flex": 1},
    {"headerName": "Response", "field": "response", "flex": 3, "copyable": True},
    {"headerName": "Action", "field": "action", "flex": 1},
    {"headerName": "Status", "field": "status", "flex": 1},
]


def format_confidence(confidence: float | None) -> str:
    """Format a confidence score as a percentage ("92%"), or "" if unset."""
    if confidence is None:
        return ""
    return f"{confidence:g}%"


class GridRow(BaseModel):
    """Display projection of a row."""

    id: str
    message: str
    category: str
    confidence: str
    response: str
    action: str
    status: str

    @classmethod
    def from_row(cls, row: Row) -> "GridRow":
        return cls(
            id=row.id,
            message=row.message,
            category=row.category,
            confidence=format_confidence(row.confidence) if row.is_classified else "",
            response=row.response,
            action=row.action,
            status=row.status or "",
        )


class GridSnapshot(BaseModel):
    """Rows as currently rendered.

    ``mount_key`` changes whenever the grid must be remounted, dropping any
    in-progress cell edit on the client.
    """

    mount_key: int
    rows: list[GridRow] = Field(default_factory=list)


@dataclass(frozen=True)
class CellEditOutcome:
    """Result of a cell edit.

    ``row`` is None when the result was discarded because the row was reset
    or edited again. ``degraded`` is True when any classification stage fell
    back to its default value.
    """

    row: Row | None
    degraded: bool = False


class GridView:
    """Connects grid edits to the classification pipeline and the row store.

    The store stays the source of truth; the view only reads from it and
    writes back through its mutation methods.
    """

    def __init__(self, store: RowStore, pipeline: ClassificationPipeline, notifier: Notifier):
        self.store = store
        self.pipeline = pipeline
        self.notifier = notifier
        self.mount_key = 0

    def snapshot(self) -> GridSnapshot:
        return GridSnapshot(
            mount_key=self.mount_key,
            rows=[GridRow.from_row(row) for row in self.store.rows],
        )

    def add_row(self) -> Row:
        row = self.store.append()
        self.notifier.success("Row added")
        return row

    def clear_all(self) -> None:
        self.store.reset_all()
        self.mount_key += 1
        self.notifier.success("All rows cleared")

    async def on_cell_value_changed(self, row_id: str, field: str, value: str) -> CellEditOutcome:
        """Handle an edit to a grid cell.

        Only message edits are acted on; edits to derived columns are ignored
        and the stored row is returned unchanged. A cleared message resets the
        row without calling the LLM. Otherwise the message is classified and
        the result written back to the same row by ID.

        Args:
            row_id: ID of the edited row.
            field: Name of the edited column.
            value: New cell value.

        Returns:
            The row as stored after the edit (None if the row was reset or
            edited again while the classification was running) and whether
            any stage fell back.

        Raises:
            KeyError: If no row has that ID.
        """
        if field != EDITABLE_FIELD:
            row = self.store.get(row_id)
            if row is None:
                raise KeyError(row_id)
            logger.debug("Ignoring edit to read-only column %s of row %s", field, row_id)
            return CellEditOutcome(row)

        row = self.store.edit_message(row_id, value)
        message = row.message

        if not message.strip():
            return CellEditOutcome(
                self.store.apply_result(row_id, row.revision, ClassificationResult.empty())
            )

        logger.info("Classifying row %s: %s", row_id, message[:50])
        async with self.notifier.loading("Classifying message..."):
            run = await self.pipeline.execute(message)

        if run.fallbacks:
            self.notifier.error("Classification failed, row needs review")
        else:
            self.notifier.success("Message classified")

        return CellEditOutcome(
            self.store.apply_result(row_id, row.revision, run.result()),
            degraded=bool(run.fallbacks),
        )
