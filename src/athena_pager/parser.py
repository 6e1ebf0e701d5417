"""Conversion of Athena ``ResultSet`` payloads into row dictionaries.

For ``SELECT`` queries Athena returns the column names as the first row of
the first page. The parser drops that row once per instance and remembers
it did, so later pages of the same query are read as data only. Create a
fresh parser (or call ``AthenaQueryResultPager.reset``) before reading a
different query.
"""

from typing import Any, Callable, Dict, List, Optional, TypeVar

from athena_pager.columns import ColumnMeta, columns_from_athena_metadata

T = TypeVar("T")

RawRow = Dict[str, Optional[str]]
RowParser = Callable[[RawRow], T]


class AthenaQueryResultParser:
    """Stateful ResultSet parser scoped to a single query."""

    def __init__(self) -> None:
        """Start with no header consumed and no known columns."""
        self._header_consumed = False
        self._column_names: Optional[List[str]] = None
        self._columns: List[ColumnMeta] = []

    @property
    def header_consumed(self) -> bool:
        """Return True once the first non-empty page has been parsed."""
        return self._header_consumed

    @property
    def columns(self) -> List[ColumnMeta]:
        """Return column metadata for the current query."""
        return list(self._columns)

    def parse_result_set(self, result_set: Dict[str, Any]) -> List[RawRow]:
        """Parse one page into ``{column name: value}`` dictionaries."""
        return list(self._iter_rows(result_set))

    def parse_result_set_with(self, result_set: Dict[str, Any], row_parser: RowParser[T]) -> List[T]:
        """Parse one page and convert each row with ``row_parser``."""
        return [row_parser(row) for row in self._iter_rows(result_set)]

    def _iter_rows(self, result_set: Dict[str, Any]):
        self._update_columns(result_set["ResultSetMetadata"]["ColumnInfo"])
        page_rows = result_set["Rows"]
        if not page_rows:
            return
        if self._column_names is None:
            raise ValueError("Athena result set contains rows but no column metadata.")

        start_index = 0
        if not self._header_consumed:
            self._header_consumed = True
            if _row_values(page_rows[0]) == self._column_names:
                start_index = 1

        for row in page_rows[start_index:]:
            yield dict(zip(self._column_names, _row_values(row)))

    def _update_columns(self, column_info: Optional[List[dict]]) -> None:
        if not column_info:
            return
        self._column_names = [col["Name"] for col in column_info]
        self._columns = columns_from_athena_metadata(column_info)


def _row_values(row: Dict[str, Any]) -> List[Optional[str]]:
    return [datum.get("VarCharValue") for datum in row["Data"]]
