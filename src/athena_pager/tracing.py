from typing import Awaitable, Optional

from athena_pager.metrics import telemetry_enabled


def trace_enabled() -> bool:
    """Return True when page-fetch tracing is enabled or OTEL exporter defaults apply."""
    return telemetry_enabled("ATHENA_PAGER_TRACE_FETCHES")


async def trace_page_fetch(
    query_execution_id: str,
    next_token: Optional[str],
    operation: Awaitable,
):
    """Trace one GetQueryResults round trip with OTEL when enabled."""
    if not trace_enabled():
        return await operation

    from opentelemetry import trace

    tracer = trace.get_tracer("athena_pager")
    with tracer.start_as_current_span("athena_pager.page.fetch") as span:
        span.set_attribute("db.provider", "athena")
        span.set_attribute("db.execution_model", "async")
        span.set_attribute("db.query_execution_id", query_execution_id)
        span.set_attribute("db.has_next_token", next_token is not None)
        try:
            result = await operation
            span.set_attribute("db.status", "ok")
            return result
        except Exception:
            span.set_attribute("db.status", "error")
            raise
