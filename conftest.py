import sys
from pathlib import Path

import pytest

# Put 'src' on sys.path before collection so 'athena_pager' imports without an install.

if sys.version_info < (3, 10):
    print(
        f"ERROR: This project requires Python 3.10+ (found {sys.version.split()[0]}).",
        file=sys.stderr,
    )
    sys.exit(1)


ROOT_DIR = Path(__file__).parent.absolute()
src_dir = ROOT_DIR / "src"

if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def _isolate_observability_env(monkeypatch):
    """Keep tracing and metrics off unless a test opts in."""
    for name in (
        "OTEL_EXPORTER_OTLP_ENDPOINT",
        "OTEL_EXPORTER_OTLP_METRICS_ENDPOINT",
        "ATHENA_PAGER_TRACE_FETCHES",
        "ATHENA_PAGER_METRICS_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
