"""Paged access to Amazon Athena query results."""

from .config import DEFAULT_MAX_RESULTS, PagerConfig, QueryResultType
from .page import PageResult
from .pager import AthenaQueryResultPager
from .parser import AthenaQueryResultParser, RawRow, RowParser

__all__ = [
    "AthenaQueryResultPager",
    "AthenaQueryResultParser",
    "DEFAULT_MAX_RESULTS",
    "PageResult",
    "PagerConfig",
    "QueryResultType",
    "RawRow",
    "RowParser",
]
