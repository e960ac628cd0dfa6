"""
Tabular output for batches of records.

Projects each record's flattened mapping into a row in a shared column order
and materializes the rows as a Polars DataFrame.

Notes
- Columns default to the tag vocabulary of the first record; pass `columns`
  for a caller-specified order or subset.
- A column missing from a record's mapping yields a null cell.
- Rows are built with omit-empty off and flattening on, as for ``values``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import polars as pl

from tagmap.core.constants import DEFAULT_TAG_KEY
from tagmap.core.projection import project_values, sorted_keys
from tagmap.core.typing import Record
from tagmap.core.walker import to_map

__all__ = [
    "rows",
    "to_frame",
]


def rows(
    records: Iterable[Record],
    columns: Sequence[str] | None = None,
    tag_key: str = DEFAULT_TAG_KEY,
) -> tuple[list[str], list[list[Any]]]:
    """
    Project records into rows sharing one column order.

    Args:
        records (Iterable[Record]): Records to project.
        columns (Sequence[str] | None): Column order; defaults to the sorted tags
            of the first record.
        tag_key (str): Metadata key holding field annotations.

    Returns:
        tuple[list[str], list[list[Any]]]: Column names and one row per record.

    Raises:
        tagmap.core.errors.ProjectionFault: If a row cannot be projected.
    """
    cols: list[str] | None = list(columns) if columns is not None else None
    out: list[list[Any]] = []
    for record in records:
        mp = to_map(record, tag_key, False, True)
        if cols is None:
            cols = sorted_keys(mp)
        row: list[Any] = []
        project_values(row, mp, cols)
        out.append(row)
    return (cols or [], out)


def to_frame(
    records: Iterable[Record],
    columns: Sequence[str] | None = None,
    tag_key: str = DEFAULT_TAG_KEY,
) -> pl.DataFrame:
    """
    Build a DataFrame with one row per record.

    Args:
        records (Iterable[Record]): Records to tabulate.
        columns (Sequence[str] | None): Column order; defaults to the sorted tags
            of the first record.
        tag_key (str): Metadata key holding field annotations.

    Returns:
        pl.DataFrame: Frame with the projected columns, in order.

    Examples:
        >>> from dataclasses import dataclass
        >>> from tagmap.core.fields import tagged
        >>> @dataclass
        ... class Row:
        ...     b: int = tagged(default=0, json="b")
        ...     a: str = tagged(default="", json="a")
        >>> to_frame([Row(1, "x"), Row(2, "y")]).columns
        ['a', 'b']
    """
    cols, data = rows(records, columns, tag_key)
    if not data:
        return pl.DataFrame(schema=cols)
    return pl.DataFrame(data, schema=cols, orient="row", infer_schema_length=None)
