import pytest

from athena_pager.parser import AthenaQueryResultParser


def _page(column_names, rows):
    return {
        "ResultSetMetadata": {"ColumnInfo": [{"Name": name, "Type": "varchar"} for name in column_names]},
        "Rows": [{"Data": [{"VarCharValue": value} for value in row]} for row in rows],
    }


def test_parse_result_set_skips_header_once():
    parser = AthenaQueryResultParser()

    first = parser.parse_result_set(_page(["id", "name"], [["id", "name"], ["1", "Alice"]]))
    second = parser.parse_result_set(_page(["id", "name"], [["2", "Bob"]]))

    assert first == [{"id": "1", "name": "Alice"}]
    assert second == [{"id": "2", "name": "Bob"}]
    assert parser.header_consumed is True


def test_parse_result_set_keeps_data_row_equal_to_header_on_later_page():
    parser = AthenaQueryResultParser()
    parser.parse_result_set(_page(["col1"], [["col1"], ["value1"]]))

    rows = parser.parse_result_set(_page(["col1"], [["col1"]]))

    assert rows == [{"col1": "col1"}]


def test_parse_result_set_without_header_row_keeps_first_row():
    """SHOW/DDL results carry no header row."""
    parser = AthenaQueryResultParser()

    rows = parser.parse_result_set(_page(["tab_name"], [["orders"], ["customers"]]))

    assert rows == [{"tab_name": "orders"}, {"tab_name": "customers"}]
    assert parser.header_consumed is True


def test_empty_page_does_not_consume_header():
    parser = AthenaQueryResultParser()

    assert parser.parse_result_set({"ResultSetMetadata": {"ColumnInfo": []}, "Rows": []}) == []
    assert parser.header_consumed is False

    rows = parser.parse_result_set(_page(["id"], [["id"], ["1"]]))
    assert rows == [{"id": "1"}]


def test_missing_var_char_value_is_none():
    parser = AthenaQueryResultParser()
    result_set = {
        "ResultSetMetadata": {"ColumnInfo": [{"Name": "id"}, {"Name": "note"}]},
        "Rows": [
            {"Data": [{"VarCharValue": "id"}, {"VarCharValue": "note"}]},
            {"Data": [{"VarCharValue": "1"}, {}]},
        ],
    }

    assert parser.parse_result_set(result_set) == [{"id": "1", "note": None}]


def test_parse_result_set_with_applies_row_parser_in_order():
    parser = AthenaQueryResultParser()
    seen = []

    def _to_int(row):
        seen.append(row["n"])
        return int(row["n"])

    values = parser.parse_result_set_with(_page(["n"], [["n"], ["3"], ["1"], ["2"]]), _to_int)

    assert values == [3, 1, 2]
    assert seen == ["3", "1", "2"]


def test_rows_without_column_metadata_raise():
    parser = AthenaQueryResultParser()
    result_set = {
        "ResultSetMetadata": {"ColumnInfo": []},
        "Rows": [{"Data": [{"VarCharValue": "1"}]}],
    }

    with pytest.raises(ValueError, match="no column metadata"):
        parser.parse_result_set(result_set)


def test_malformed_result_set_raises_key_error():
    parser = AthenaQueryResultParser()

    with pytest.raises(KeyError):
        parser.parse_result_set({"Rows": []})


def test_columns_reflect_latest_metadata():
    parser = AthenaQueryResultParser()
    result_set = {
        "ResultSetMetadata": {
            "ColumnInfo": [
                {"Name": "id", "Type": "bigint", "Nullable": "NOT_NULL"},
                {"Name": "amount", "Type": "decimal", "Precision": 10, "Scale": 2},
            ]
        },
        "Rows": [],
    }

    parser.parse_result_set(result_set)

    assert [(col["name"], col["type"]) for col in parser.columns] == [
        ("id", "integer"),
        ("amount", "numeric"),
    ]
    assert parser.columns[0]["nullable"] is False
    assert parser.columns[1]["precision"] == 10
