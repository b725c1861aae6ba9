"""Editable grid view over the row store."""

from grid.page import render_grid_page_html
from grid.view import COLUMNS, CellEditOutcome, GridRow, GridSnapshot, GridView

__all__ = ["COLUMNS", "CellEditOutcome", "GridRow", "GridSnapshot", "GridView", "render_grid_page_html"]
