"""Pydantic models for in-memory markdown tables.

A Table is built fresh for each rendered help fragment and discarded once
rendered.  Columns are immutable; rows are appended with Table.add_row, which
returns a new Table rather than mutating the existing one.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

from helpmd.errors import ShapeMismatch


class Alignment(str, Enum):
    """Column alignment, expressed only through the delimiter-row markers."""

    LEFT = "left"
    CENTRE = "centre"
    RIGHT = "right"


class Column(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    alignment: Alignment = Alignment.LEFT


class Table(BaseModel):
    """Named, aligned columns and ordered rows of string cells.

    The model_validator guarantees at least one column and exactly
    len(columns) cells in every row.  Row and column order are preserved as
    given; nothing is sorted or deduplicated.
    """

    model_config = ConfigDict(frozen=True)

    columns: tuple[Column, ...]
    rows: tuple[tuple[str, ...], ...] = ()

    @model_validator(mode="after")
    def validate_row_widths(self) -> "Table":
        """Ensure the table has columns and every row has one cell per column."""
        if not self.columns:
            raise ShapeMismatch("A table needs at least one column")
        n_cols = len(self.columns)
        for i, row in enumerate(self.rows):
            if len(row) != n_cols:
                raise ShapeMismatch(f"Row {i} has {len(row)} cells, expected {n_cols} (matching columns)")
        return self

    @classmethod
    def build(cls, columns: list[Column]) -> "Table":
        """Create an empty table with the given columns."""
        return cls(columns=tuple(columns))

    def add_row(self, cells: list[str]) -> "Table":
        """Return a copy of this table with ``cells`` appended as the last row."""
        if len(cells) != len(self.columns):
            raise ShapeMismatch(f"Row has {len(cells)} cells, expected {len(self.columns)} (matching columns)")
        return self.model_copy(update={"rows": self.rows + (tuple(cells),)})
