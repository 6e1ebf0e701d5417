from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from athena_pager.columns import ColumnMeta

T = TypeVar("T")


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of Athena query results."""

    rows: List[T]
    next_token: Optional[str] = None
    columns: Optional[List[ColumnMeta]] = None

    @property
    def row_count(self) -> int:
        """Number of rows in this page."""
        return len(self.rows)
