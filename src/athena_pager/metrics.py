"""Optional OTEL counters for fetched result pages and rows."""

import logging
import os
from typing import Any, Optional

from opentelemetry import metrics

from athena_pager.env import get_env_bool

logger = logging.getLogger(__name__)

PAGES_FETCHED = "athena_pager.pages.fetched"
ROWS_FETCHED = "athena_pager.rows.fetched"
METRICS_ENABLED_ENV = "ATHENA_PAGER_METRICS_ENABLED"


def telemetry_enabled(env_var: str) -> bool:
    """Return the explicit ``env_var`` override, else whether an OTLP exporter is set up.

    An unparseable override disables telemetry rather than failing a fetch.
    """
    try:
        explicit = get_env_bool(env_var)
    except ValueError:
        logger.warning("Invalid %s value '%s'; telemetry disabled.", env_var, os.getenv(env_var))
        return False
    if explicit is not None:
        return explicit

    if get_env_bool("OTEL_DISABLE_EXPORTER", False):
        return False
    if (os.getenv("OTEL_METRICS_EXPORTER") or "").strip().lower() == "none":
        return False
    return bool(
        (os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or "").strip()
        or (os.getenv("OTEL_EXPORTER_OTLP_METRICS_ENDPOINT") or "").strip()
    )


class PageMetrics:
    """Page and row counters, created on first use."""

    def __init__(self, meter: Optional[Any] = None) -> None:
        """Use ``meter`` when given, otherwise the global ``athena-pager`` meter."""
        self._meter = meter
        self._pages = None
        self._rows = None

    def _counters(self):
        if self._pages is None:
            meter = self._meter or metrics.get_meter("athena-pager")
            self._pages = meter.create_counter(
                name=PAGES_FETCHED, unit="1", description="Result pages fetched from Athena"
            )
            self._rows = meter.create_counter(
                name=ROWS_FETCHED, unit="1", description="Data rows parsed from Athena pages"
            )
        return self._pages, self._rows

    def record_page(self, row_count: int, has_next_token: bool) -> None:
        """Count one page and its rows, tagged by whether another page follows."""
        if not telemetry_enabled(METRICS_ENABLED_ENV):
            return
        attributes = {"has_next_token": "true" if has_next_token else "false"}
        try:
            pages, rows = self._counters()
            pages.add(1, attributes)
            rows.add(row_count, attributes)
        except Exception as exc:
            logger.debug("Page metric emission failed: %s", exc)


page_metrics = PageMetrics()


def record_page(row_count: int, has_next_token: bool) -> None:
    """Record one fetched page on the module-level counters."""
    page_metrics.record_page(row_count, has_next_token)
