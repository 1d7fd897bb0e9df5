"""Prometheus metrics for report volume, forecast outcomes and SBNL matching"""

from prometheus_client import Counter, Histogram

# Report metrics
report_counter = Counter(
    "ledger_reports_total",
    "Total reports built",
    ["report"],  # period | forecast | untracked | payments
)

report_duration_histogram = Histogram(
    "ledger_report_duration_seconds",
    "Time spent building a report",
    ["report"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

# Forecast metrics
forecast_status_counter = Counter(
    "ledger_forecast_status_total",
    "Forecast comparisons by outcome",
    ["status"],  # on-track | over | under
)

# SBNL metrics
sbnl_match_counter = Counter(
    "ledger_sbnl_match_total",
    "How credit card payments were identified",
    ["method"],  # linked | description | none
)

# Ingestion metrics
ingest_rejection_counter = Counter(
    "ledger_ingest_rejections_total",
    "Raw records rejected at the ingestion boundary",
    ["record"],
)


def record_report(report: str, duration_seconds: float) -> None:
    """Record a completed report and how long it took"""
    report_counter.labels(report=report).inc()
    report_duration_histogram.labels(report=report).observe(duration_seconds)
