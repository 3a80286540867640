"""Tests for date source backends."""

import pytest

from datecal import PandasSource, PolarsSource


@pytest.fixture
def single_column(tmp_path):
    path = tmp_path / "holidays.csv"
    path.write_text("2018-01-01\n2018-12-25\n2018-12-26\n")
    return path


@pytest.fixture
def grid(tmp_path):
    """Two rows of three dates."""
    path = tmp_path / "grid.csv"
    path.write_text(
        "2018-01-01,2018-01-02,2018-01-03\n"
        "2018-02-01, 2018-02-02 ,2018-02-03\n"
    )
    return path


@pytest.fixture(params=[PandasSource, PolarsSource], ids=["pandas", "polars"])
def source(request):
    return request.param()


class TestDateSource:
    """Behaviour shared by every backend."""

    def test_single_column(self, source, single_column):
        assert source.read_values(single_column) == [
            "2018-01-01",
            "2018-12-25",
            "2018-12-26",
        ]

    def test_row_major_order(self, source, grid):
        """Cells come back row by row, trimmed."""
        assert source.read_values(grid) == [
            "2018-01-01",
            "2018-01-02",
            "2018-01-03",
            "2018-02-01",
            "2018-02-02",
            "2018-02-03",
        ]

    def test_values_stay_strings(self, source, tmp_path):
        """Numeric-looking cells are not converted."""
        path = tmp_path / "compact.csv"
        path.write_text("20180101\n20180102\n")

        assert source.read_values(path) == ["20180101", "20180102"]

    def test_custom_delimiter(self, source, tmp_path):
        path = tmp_path / "semicolon.csv"
        path.write_text("2018-01-01;2018-01-02\n2018-01-03;2018-01-04\n")

        values = source.read_values(path, delimiter=";")

        assert values == ["2018-01-01", "2018-01-02", "2018-01-03", "2018-01-04"]

    def test_later_row_wider_than_first(self, source, tmp_path):
        """No date is lost when a row is wider than the first one."""
        path = tmp_path / "ragged.csv"
        path.write_text("2018-01-01\n2018-01-02,2018-01-03,2018-01-04\n")

        assert source.read_values(path) == [
            "2018-01-01",
            "2018-01-02",
            "2018-01-03",
            "2018-01-04",
        ]

    def test_later_row_narrower_than_first(self, source, tmp_path):
        path = tmp_path / "ragged.csv"
        path.write_text("2018-01-01,2018-01-02\n2018-01-03\n")

        assert source.read_values(path) == [
            "2018-01-01",
            "2018-01-02",
            "2018-01-03",
        ]

    def test_empty_cells_skipped(self, source, tmp_path):
        path = tmp_path / "gaps.csv"
        path.write_text("2018-01-01,,2018-01-02,\n , 2018-01-03\n")

        assert source.read_values(path) == ["2018-01-01", "2018-01-02", "2018-01-03"]

    def test_blank_lines_skipped(self, source, tmp_path):
        path = tmp_path / "gaps.csv"
        path.write_text("2018-01-01\n\n2018-01-02\n")

        assert source.read_values(path) == ["2018-01-01", "2018-01-02"]

    def test_empty_file(self, source, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("")

        assert source.read_values(path) == []

    def test_quotes_kept_verbatim(self, source, tmp_path):
        """Quotes are not special, so the pattern sees them."""
        path = tmp_path / "quoted.csv"
        path.write_text('"2018-01-01",2018-01-02\n')

        assert source.read_values(path) == ['"2018-01-01"', "2018-01-02"]
