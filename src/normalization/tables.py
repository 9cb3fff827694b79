"""Table reshaping: raw cells to a dense grid plus header-marked rows."""

from __future__ import annotations

import logging
from collections import defaultdict

from normalization.confidence import ELEMENT_DEFAULT_CONFIDENCE, mean_percent, to_percent
from normalization.geometry import region_polygon
from schemas.internal.documents import Table, TableCell, TableRow
from schemas.internal.raw import RawTable, RawTableCell

logger = logging.getLogger(__name__)

HEADER_ROW_INDEX = 0
# Upper bound on filled grid size; larger declared or sparse grids are shrunk.
MAX_TABLE_CELLS = 10_000
MAX_TABLE_DIMENSION = 100


def normalize_table(raw: RawTable, index: int) -> Table:
    """Build a :class:`Table` whose cells tile ``row_count x column_count``.

    Row 0 is treated as the header row. This is positional: the cell ``kind``
    field is carried through but not consulted.
    """
    table_id = str(index)
    confidence = to_percent(raw.confidence, ELEMENT_DEFAULT_CONFIDENCE)
    page_number, polygon = region_polygon(raw.bounding_regions)

    by_position = _bounded(_dedupe_cells(raw.cells, table_id), table_id)
    if not by_position:
        return Table(
            id=table_id,
            row_count=max(raw.row_count or 0, 0),
            column_count=max(raw.column_count or 0, 0),
            confidence=confidence,
            page_number=page_number,
            polygon=polygon,
        )

    row_count, column_count = _grid_shape(raw, by_position, table_id)

    grouped: dict[int, dict[int, RawTableCell]] = defaultdict(dict)
    for (row_index, column_index), cell in by_position.items():
        grouped[row_index][column_index] = cell

    cells: list[TableCell] = []
    rows: list[TableRow] = []
    for row_index in range(row_count):
        present = grouped.get(row_index, {})
        row_cells: list[TableCell] = []
        for column_index in range(column_count):
            raw_cell = present.get(column_index)
            if raw_cell is None:
                row_cells.append(
                    TableCell(
                        row_index=row_index,
                        column_index=column_index,
                        content="",
                        confidence=confidence,
                    )
                )
                continue
            row_cells.append(
                TableCell(
                    row_index=row_index,
                    column_index=column_index,
                    content=raw_cell.content,
                    confidence=to_percent(raw_cell.confidence, ELEMENT_DEFAULT_CONFIDENCE),
                    kind=raw_cell.kind,
                    row_span=raw_cell.row_span,
                    column_span=raw_cell.column_span,
                )
            )
        cells.extend(row_cells)
        rows.append(
            TableRow(
                index=row_index,
                cells=[cell.content for cell in row_cells],
                is_header=row_index == HEADER_ROW_INDEX,
                confidence=mean_percent(
                    (
                        cell.confidence
                        for cell in row_cells
                        if cell.column_index in present
                    ),
                    confidence,
                ),
            )
        )

    return Table(
        id=table_id,
        row_count=row_count,
        column_count=column_count,
        confidence=confidence,
        page_number=page_number,
        polygon=polygon,
        cells=cells,
        rows=rows,
    )


def _bounded(
    by_position: dict[tuple[int, int], RawTableCell], table_id: str
) -> dict[tuple[int, int], RawTableCell]:
    """Drop far-off cells when their indices alone would exceed the cell budget."""
    if not by_position:
        return by_position
    rows = 1 + max(r for r, _ in by_position)
    columns = 1 + max(c for _, c in by_position)
    if rows * columns <= MAX_TABLE_CELLS:
        return by_position
    kept = {
        key: cell
        for key, cell in by_position.items()
        if key[0] < MAX_TABLE_DIMENSION and key[1] < MAX_TABLE_DIMENSION
    }
    logger.warning(
        "Table %s: %d cell(s) beyond %dx%d dropped",
        table_id,
        len(by_position) - len(kept),
        MAX_TABLE_DIMENSION,
        MAX_TABLE_DIMENSION,
    )
    return kept


def _grid_shape(
    raw: RawTable, by_position: dict[tuple[int, int], RawTableCell], table_id: str
) -> tuple[int, int]:
    """Declared counts, grown to fit the cells, unless that busts the cell budget."""
    observed_rows = 1 + max(r for r, _ in by_position)
    observed_columns = 1 + max(c for _, c in by_position)
    row_count = max(raw.row_count or 0, observed_rows)
    column_count = max(raw.column_count or 0, observed_columns)
    if row_count * column_count > MAX_TABLE_CELLS:
        logger.warning(
            "Table %s: declared %sx%s grid ignored, using %dx%d from its cells",
            table_id,
            raw.row_count,
            raw.column_count,
            observed_rows,
            observed_columns,
        )
        return observed_rows, observed_columns
    return row_count, column_count


def _dedupe_cells(cells: list[RawTableCell], table_id: str) -> dict[tuple[int, int], RawTableCell]:
    by_position: dict[tuple[int, int], RawTableCell] = {}
    for cell in cells:
        key = (max(cell.row_index, 0), max(cell.column_index, 0))
        if key in by_position:
            logger.debug("Table %s: duplicate cell at %s ignored", table_id, key)
            continue
        by_position[key] = cell
    return by_position


__all__ = ["HEADER_ROW_INDEX", "MAX_TABLE_CELLS", "MAX_TABLE_DIMENSION", "normalize_table"]
