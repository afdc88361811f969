from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from ..dimensions import DimensionType
from ..utils.dates import parse_service_date

logger = logging.getLogger(__name__)

EMPTY_MAX_VALUE = 1


@dataclass(frozen=True)
class PivotMention:
    value: Optional[str]
    dos_date: Any


@dataclass
class PivotMatrix:
    dimension_type: DimensionType
    rows: List[str] = field(default_factory=list)
    columns: List[str] = field(default_factory=list)
    cells: Dict[str, Dict[str, int]] = field(default_factory=dict)
    row_totals: Dict[str, int] = field(default_factory=dict)
    max_value: int = EMPTY_MAX_VALUE
    dropped_mentions: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def cell(self, row: str, column: str) -> int:
        return self.cells.get(row, {}).get(column, 0)

    @property
    def total(self) -> int:
        return sum(self.row_totals.values())


def _max_cell(cells: Dict[str, Dict[str, int]]) -> int:
    values = [count for by_column in cells.values() for count in by_column.values()]
    return max(values) if values else EMPTY_MAX_VALUE


def build_pivot(mentions: Iterable[PivotMention], dimension_type: DimensionType) -> PivotMatrix:
    """Cross-tabulate mentions into dimension value x date-of-service counts.

    Mentions without a value or without a parsable date are left out of every
    row, column and count. Rows keep first-appearance order; columns are ISO
    dates in ascending order.
    """
    counts: Dict[str, Dict[date, int]] = {}
    dates: set[date] = set()
    dropped = 0

    for mention in mentions:
        value = mention.value.strip() if isinstance(mention.value, str) else None
        dos = parse_service_date(mention.dos_date)
        if not value or dos is None:
            dropped += 1
            continue
        by_date = counts.setdefault(value, {})
        by_date[dos] = by_date.get(dos, 0) + 1
        dates.add(dos)

    if dropped:
        logger.debug("Dropped %d %s mentions without a value or parsable date", dropped, dimension_type.value)

    ordered_dates = sorted(dates)
    columns = [d.isoformat() for d in ordered_dates]
    rows = list(counts.keys())

    cells: Dict[str, Dict[str, int]] = {}
    row_totals: Dict[str, int] = {}
    for row in rows:
        by_date = counts[row]
        cells[row] = {d.isoformat(): by_date.get(d, 0) for d in ordered_dates}
        row_totals[row] = sum(by_date.values())

    return PivotMatrix(
        dimension_type=dimension_type,
        rows=rows,
        columns=columns,
        cells=cells,
        row_totals=row_totals,
        max_value=_max_cell(cells),
        dropped_mentions=dropped,
    )


def rank_rows(matrix: PivotMatrix) -> List[str]:
    """Rows by descending total, ties broken by value."""
    return sorted(matrix.rows, key=lambda row: (-matrix.row_totals.get(row, 0), row))


def top_rows(matrix: PivotMatrix, limit: int) -> PivotMatrix:
    """Return a new matrix holding the ``limit`` busiest non-empty rows.

    Columns are kept as-is so the date axis matches the full matrix.
    """
    kept = [row for row in rank_rows(matrix) if matrix.row_totals.get(row, 0) > 0][:limit]
    cells = {row: dict(matrix.cells[row]) for row in kept}
    return PivotMatrix(
        dimension_type=matrix.dimension_type,
        rows=kept,
        columns=list(matrix.columns),
        cells=cells,
        row_totals={row: matrix.row_totals[row] for row in kept},
        max_value=_max_cell(cells),
        dropped_mentions=matrix.dropped_mentions,
    )
