from dataclasses import dataclass
from enum import Enum

from athena_pager.env import get_env_int, get_env_str

DEFAULT_MAX_RESULTS = 1000


class QueryResultType(str, Enum):
    """Result shapes accepted by GetQueryResults."""

    DATA_ROWS = "DATA_ROWS"


DEFAULT_QUERY_RESULT_TYPE = QueryResultType.DATA_ROWS


@dataclass(frozen=True)
class PagerConfig:
    """Per-pager options for GetQueryResults paging."""

    max_results: int = DEFAULT_MAX_RESULTS
    query_result_type: QueryResultType = DEFAULT_QUERY_RESULT_TYPE

    def __post_init__(self) -> None:
        """Validate options and normalize the result type."""
        if (
            isinstance(self.max_results, bool)
            or not isinstance(self.max_results, int)
            or self.max_results < 1
        ):
            raise ValueError(f"max_results must be a positive integer, got {self.max_results!r}.")
        try:
            result_type = QueryResultType(self.query_result_type)
        except ValueError:
            allowed = ", ".join(member.value for member in QueryResultType)
            raise ValueError(
                f"Unsupported query_result_type: {self.query_result_type!r}. "
                f"Allowed values: {allowed}"
            ) from None
        object.__setattr__(self, "query_result_type", result_type)

    @classmethod
    def from_env(cls) -> "PagerConfig":
        """Load pager options from environment variables, falling back to defaults."""
        max_results = get_env_int("ATHENA_PAGER_MAX_RESULTS", DEFAULT_MAX_RESULTS)
        query_result_type = get_env_str(
            "ATHENA_PAGER_QUERY_RESULT_TYPE", DEFAULT_QUERY_RESULT_TYPE.value
        )
        return cls(max_results=max_results, query_result_type=query_result_type.upper())
