"""Polars date source implementation."""

from pathlib import Path

import polars as pl

from datecal.backends.base import LINE_SEPARATOR
from datecal.validation import InvalidArgumentError


class PolarsSource:
    """Date source backed by ``polars.read_csv``."""

    def read_values(self, path: Path, delimiter: str = ",") -> list[str]:
        """Read every non-empty cell of a headerless delimited file.

        Each line is read whole into a single string column and split on
        the delimiter afterwards, so rows may differ in width.

        Raises:
            InvalidArgumentError: If polars cannot read the file.
        """
        try:
            df = pl.read_csv(
                path,
                has_header=False,
                new_columns=["line"],
                separator=LINE_SEPARATOR,
                quote_char=None,
                infer_schema=False,
            )
        except pl.exceptions.NoDataError:
            return []
        except pl.exceptions.ComputeError as e:
            raise InvalidArgumentError(f"Cannot read date file {path}: {e}") from e

        cells = (
            df.select(pl.col("line").str.split(delimiter))
            .explode("line")
            .select(pl.col("line").str.strip_chars())
            .filter(pl.col("line").is_not_null() & (pl.col("line") != ""))
        )
        return cells["line"].to_list()
