"""Ordering, visibility and captions of the document table columns.

Every operation returns a new list; the set of column ids never changes.
"""

from __future__ import annotations

from typing import List, Literal, Sequence

from facturago.domain.models import DocumentColumn

Direction = Literal["up", "down"]


def toggle_visibility(columns: Sequence[DocumentColumn], column_id: str) -> List[DocumentColumn]:
    return [
        column.model_copy(update={"visible": not column.visible})
        if column.id == column_id
        else column
        for column in columns
    ]


def relabel(columns: Sequence[DocumentColumn], column_id: str, text: str) -> List[DocumentColumn]:
    """Set the caption of a column, hidden or not."""
    return [
        column.model_copy(update={"label": text}) if column.id == column_id else column
        for column in columns
    ]


def move(columns: Sequence[DocumentColumn], index: int, direction: Direction) -> List[DocumentColumn]:
    """
    Swap the column at ``index`` with its neighbour.

    ``up`` moves toward index 0. Moves past either end are ignored and leave
    orders untouched; otherwise every column gets ``order = position + 1``.
    """
    if direction not in ("up", "down"):
        raise ValueError(f"Unknown direction: {direction!r}")
    if not 0 <= index < len(columns):
        raise IndexError(f"Column index out of range: {index}")

    if (direction == "up" and index == 0) or (direction == "down" and index == len(columns) - 1):
        return list(columns)

    reordered = list(columns)
    target = index - 1 if direction == "up" else index + 1
    reordered[index], reordered[target] = reordered[target], reordered[index]

    return [column.model_copy(update={"order": position + 1}) for position, column in enumerate(reordered)]


def visible_columns(columns: Sequence[DocumentColumn]) -> List[DocumentColumn]:
    """Columns printed on documents, in display order."""
    return sorted((column for column in columns if column.visible), key=lambda column: column.order)
