import asyncio
import logging
from typing import Any, AsyncIterator, Dict, Optional, TypeVar

from athena_pager.config import PagerConfig
from athena_pager.env import get_env_str
from athena_pager.metrics import record_page
from athena_pager.page import PageResult
from athena_pager.parser import AthenaQueryResultParser, RawRow, RowParser
from athena_pager.tracing import trace_page_fetch

T = TypeVar("T")

logger = logging.getLogger(__name__)


class AthenaQueryResultPager:
    """Fetches results of a completed Athena query execution page by page.

    The pager owns one ``AthenaQueryResultParser`` per query. Pages fetched
    for the same query execution id share it, so the header row is dropped
    only once. Fetching a different execution id starts a new parser; call
    ``reset()`` to start over explicitly for the same id.

    Instances are not safe for interleaved use across queries. Use one pager
    per in-flight query. Going back to an earlier execution id after another
    one starts a fresh parser, so the first row of the resumed page is
    dropped if its values equal the column names.
    """

    def __init__(self, client: Any, config: Optional[PagerConfig] = None) -> None:
        """Wrap a boto3 Athena client (owned by the caller)."""
        self._client = client
        self._config = config or PagerConfig()
        self._parser = AthenaQueryResultParser()
        self._query_execution_id: Optional[str] = None

    @classmethod
    def from_env(cls, region: Optional[str] = None) -> "AthenaQueryResultPager":
        """Build a pager with a boto3 Athena client and env-driven options."""
        region = region or get_env_str("AWS_REGION")
        if not region:
            raise ValueError("Athena pager missing required config: AWS_REGION.")

        import boto3

        return cls(boto3.client("athena", region_name=region), PagerConfig.from_env())

    @property
    def config(self) -> PagerConfig:
        """Return the immutable pager options."""
        return self._config

    @staticmethod
    def has_next_page(page_result: PageResult) -> bool:
        """Return whether the service reported more pages after ``page_result``."""
        return bool(page_result.next_token)

    async def fetch_page(
        self, query_execution_id: str, next_token: Optional[str] = None
    ) -> PageResult[RawRow]:
        """Fetch one page as raw ``{column: value}`` rows."""
        return await self._fetch(query_execution_id, next_token)

    async def fetch_page_with(
        self,
        query_execution_id: str,
        row_parser: RowParser[T],
        next_token: Optional[str] = None,
    ) -> PageResult[T]:
        """Fetch one page and convert each row with ``row_parser``."""
        return await self._fetch(query_execution_id, next_token, row_parser)

    async def iterate_pages(self, query_execution_id: str) -> AsyncIterator[PageResult[RawRow]]:
        """Yield raw pages until the service stops returning a NextToken."""
        next_token = None
        while True:
            page = await self.fetch_page(query_execution_id, next_token)
            yield page
            if not self.has_next_page(page):
                return
            next_token = page.next_token

    async def iterate_pages_with(
        self, query_execution_id: str, row_parser: RowParser[T]
    ) -> AsyncIterator[PageResult[T]]:
        """Yield pages converted with ``row_parser``."""
        next_token = None
        while True:
            page = await self.fetch_page_with(query_execution_id, row_parser, next_token)
            yield page
            if not self.has_next_page(page):
                return
            next_token = page.next_token

    async def iterate_rows(
        self, query_execution_id: str, row_parser: RowParser[T]
    ) -> AsyncIterator[T]:
        """Yield converted rows one at a time, holding at most one page in memory."""
        async for page in self.iterate_pages_with(query_execution_id, row_parser):
            for row in page.rows:
                yield row

    def reset(self) -> None:
        """Discard parser state. Call before reading a new query."""
        self._parser = AthenaQueryResultParser()
        self._query_execution_id = None

    async def _fetch(
        self,
        query_execution_id: str,
        next_token: Optional[str],
        row_parser: Optional[RowParser[T]] = None,
    ) -> PageResult:
        self._enter_query(query_execution_id)
        response = await trace_page_fetch(
            query_execution_id,
            next_token,
            asyncio.to_thread(
                _get_query_results,
                self._client,
                query_execution_id,
                next_token,
                self._config.max_results,
            ),
        )

        result_set = response["ResultSet"]
        if row_parser is None:
            rows = self._parser.parse_result_set(result_set)
        else:
            rows = self._parser.parse_result_set_with(result_set, row_parser)

        page = PageResult(
            rows=rows,
            next_token=response.get("NextToken"),
            columns=self._parser.columns,
        )
        logger.debug(
            "Fetched Athena results page for %s (token=%s): %d rows, more=%s",
            query_execution_id,
            next_token is not None,
            page.row_count,
            self.has_next_page(page),
        )
        record_page(page.row_count, self.has_next_page(page))
        return page

    def _enter_query(self, query_execution_id: str) -> None:
        current = self._query_execution_id
        if current is not None and current != query_execution_id:
            logger.info(
                "Query execution changed from %s to %s; resetting result parser",
                current,
                query_execution_id,
            )
            self._parser = AthenaQueryResultParser()
        self._query_execution_id = query_execution_id


def _get_query_results(
    client, query_execution_id: str, next_token: Optional[str], max_results: int
) -> Dict[str, Any]:
    kwargs = {"QueryExecutionId": query_execution_id, "MaxResults": max_results}
    if next_token is not None:
        kwargs["NextToken"] = next_token
    return client.get_query_results(**kwargs)
