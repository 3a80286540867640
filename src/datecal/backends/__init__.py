"""Date source backends for reading delimited date files."""

from datecal.backends.base import DateSource
from datecal.backends.pandas import PandasSource
from datecal.backends.polars import PolarsSource

__all__ = ["DateSource", "PandasSource", "PolarsSource"]
