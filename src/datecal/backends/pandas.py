"""Pandas date source implementation."""

import csv
from pathlib import Path

import pandas as pd

from datecal.backends.base import LINE_SEPARATOR
from datecal.validation import InvalidArgumentError


class PandasSource:
    """Date source backed by ``pandas.read_csv``."""

    def read_values(self, path: Path, delimiter: str = ",") -> list[str]:
        """Read every non-empty cell of a headerless delimited file.

        Each line is read whole, as a string, and split on the delimiter
        afterwards, so rows may differ in width. The configured date
        pattern, not pandas' own date inference, decides how cells parse.

        Raises:
            InvalidArgumentError: If pandas cannot read the file.
        """
        try:
            lines = pd.read_csv(
                path,
                header=None,
                names=["line"],
                sep=LINE_SEPARATOR,
                quoting=csv.QUOTE_NONE,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )["line"]
        except pd.errors.EmptyDataError:
            return []
        except pd.errors.ParserError as e:
            raise InvalidArgumentError(f"Cannot read date file {path}: {e}") from e

        cells = lines.str.split(delimiter, regex=False).explode().str.strip()
        return [cell for cell in cells if isinstance(cell, str) and cell]
