import pytest

from conftest import make_table
from xlens_core.columns import classify_columns, require_numeric
from xlens_core.data import load_sheet
from xlens_core.errors import NoNumericColumnsError


def test_partition_covers_all_columns(sales_xlsx):
    result = classify_columns(load_sheet(sales_xlsx))
    assert result.numeric == ("Revenue", "Units")
    assert result.non_numeric == ("Month", "Region")
    assert not set(result.numeric) & set(result.non_numeric)
    assert set(result.numeric) | set(result.non_numeric) == set(result.columns)


def test_only_first_row_decides():
    table = make_table({"A": [None, 2, 3], "B": [1, "x", "y"]})
    result = classify_columns(table)
    assert result.non_numeric == ("A",)
    assert result.numeric == ("B",)


def test_booleans_and_numeric_text():
    table = make_table({"flag": [True, False], "text_num": ["12.5", "3"], "word": ["a", "b"]})
    result = classify_columns(table)
    assert result.numeric == ("text_num",)
    assert result.is_numeric("text_num")
    assert not result.is_numeric("flag")


def test_require_numeric():
    table = make_table({"A": ["x"], "B": ["y"]})
    with pytest.raises(NoNumericColumnsError):
        require_numeric(classify_columns(table))


def test_to_dict(abc_table):
    assert classify_columns(abc_table).to_dict() == {
        "columns": ["A", "B", "C"],
        "numeric": ["A", "B", "C"],
        "nonNumeric": [],
    }
