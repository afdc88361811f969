from typing import Any, Dict

from .pivot import PivotMatrix


def serialize_pivot(matrix: PivotMatrix) -> Dict[str, Any]:
    """Shape a PivotMatrix into the ``{rows, columns, data, maxValue}`` contract.

    Every row carries every column and all counts are plain ints; chart
    components read cells as numbers without coercion.
    """
    data: Dict[str, Dict[str, int]] = {}
    for row in matrix.rows:
        data[row] = {column: int(matrix.cell(row, column)) for column in matrix.columns}

    return {
        "rows": list(matrix.rows),
        "columns": list(matrix.columns),
        "data": data,
        "maxValue": int(matrix.max_value),
    }
