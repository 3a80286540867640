"""Abstract date source protocol."""

from pathlib import Path
from typing import Protocol

# Column separator for whole-line reads; never present in date files.
LINE_SEPARATOR = "\x1f"


class DateSource(Protocol):
    """Protocol for readers that pull raw date strings out of a delimited file."""

    def read_values(self, path: Path, delimiter: str = ",") -> list[str]:
        """Read every non-empty cell of a headerless delimited file.

        Cells are returned trimmed, in row-major order. Parsing the strings
        into dates is left to the caller.
        """
        ...
