"""FastAPI application for the message triage grid."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv(Path(__file__).parent / ".env")

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from classify import ClassificationPipeline, MessageClassifier, classify_message  # noqa: E402
from config import Settings  # noqa: E402
from grid import COLUMNS, GridRow, GridSnapshot, GridView, render_grid_page_html  # noqa: E402
from llm import BaseLLM, get_llm  # noqa: E402
from models import ClassificationResult  # noqa: E402
from notify import LogNotifier, Notifier  # noqa: E402
from observability import init_weave  # noqa: E402
from rows import RowStore  # noqa: E402


def build_view(
    settings: Settings,
    llm: BaseLLM | None = None,
    notifier: Notifier | None = None,
) -> GridView:
    """Wire the LLM, classifier, pipeline, store and view together.

    Args:
        settings: Application settings.
        llm: LLM provider to use. Built from settings if not provided.
        notifier: Notification sink. Defaults to logging.

    Returns:
        A ready-to-use GridView.
    """
    if llm is None:
        llm = get_llm(
            settings.llm_provider,
            model=settings.llm_model,
            api_key=settings.openai_api_key,
            temperature=settings.llm_temperature,
            timeout=settings.llm_timeout,
        )
    classifier = MessageClassifier(llm, stage_timeout=settings.stage_timeout)
    pipeline = ClassificationPipeline(classifier, variant=settings.pipeline_variant)
    store = RowStore(initial_rows=settings.initial_rows)
    return GridView(store, pipeline, notifier or LogNotifier())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan for startup/shutdown."""
    logger.info("Starting up...")

    # Initialize Weave for observability (before any @weave.op decorated calls)
    if init_weave():
        logger.info("Weave observability enabled")

    settings = Settings.from_env()
    app.state.view = build_view(settings)
    logger.info(
        "Grid ready with %d rows (pipeline: %s, model: %s)",
        settings.initial_rows,
        settings.pipeline_variant,
        settings.llm_model,
    )

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title="Message Triage API",
    description="Classify customer messages and suggest responses with an LLM",
    version="0.1.0",
    lifespan=lifespan,
)


class CellEdit(BaseModel):
    """A single cell edit coming from the grid."""

    field: str = Field(description="Column that was edited")
    value: str = Field(default="", description="New cell value")


class CellEditResponse(BaseModel):
    """Result of a cell edit."""

    stale: bool = Field(
        description="True if the row was reset or edited again before the result arrived"
    )
    degraded: bool = Field(
        default=False, description="True if any classification stage fell back to its default"
    )
    row: GridRow | None = None


class ClassifyRequest(BaseModel):
    """Request body for one-off classification."""

    message: str = Field(default="", description="Message text to classify")


def _view(request: Request) -> GridView:
    return request.app.state.view


# Page


@app.get("/", response_class=HTMLResponse)
async def index() -> str:
    """Serve the grid page."""
    return render_grid_page_html()


@app.get("/health")
async def health_check(request: Request) -> dict:
    """Health check endpoint."""
    view = _view(request)
    return {
        "status": "ok",
        "model": view.pipeline.classifier.llm.model_name,
        "variant": view.pipeline.variant,
        "rows": len(view.store),
    }


# Grid endpoints


@app.get("/columns")
async def get_columns() -> list[dict]:
    """Return the grid column definitions."""
    return COLUMNS


@app.get("/rows", response_model=GridSnapshot)
async def get_rows(request: Request) -> GridSnapshot:
    """Return all rows as rendered in the grid."""
    return _view(request).snapshot()


@app.post("/rows", response_model=GridRow, status_code=201)
async def add_row(request: Request) -> GridRow:
    """Append one blank row."""
    row = _view(request).add_row()
    return GridRow.from_row(row)


@app.post("/rows/clear", response_model=GridSnapshot)
async def clear_rows(request: Request) -> GridSnapshot:
    """Reset every row, keeping the row count."""
    view = _view(request)
    view.clear_all()
    return view.snapshot()


@app.patch("/rows/{row_id}", response_model=CellEditResponse)
async def edit_cell(row_id: str, edit: CellEdit, request: Request) -> CellEditResponse:
    """Apply a cell edit, classifying the row if its message changed.

    Args:
        row_id: The row ID.
        edit: Edited column and new value.

    Returns:
        The updated row, or a stale marker if the result was discarded.
    """
    try:
        outcome = await _view(request).on_cell_value_changed(row_id, edit.field, edit.value)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=f"Row not found: {row_id}") from e

    if outcome.row is None:
        return CellEditResponse(stale=True, degraded=outcome.degraded)
    return CellEditResponse(
        stale=False,
        degraded=outcome.degraded,
        row=GridRow.from_row(outcome.row),
    )


@app.post("/classify", response_model=ClassificationResult)
async def classify(body: ClassifyRequest, request: Request) -> ClassificationResult:
    """Classify a single message without touching the grid."""
    return await classify_message(_view(request).pipeline, body.message)
