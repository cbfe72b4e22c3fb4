"""
Prometheus metrics for the football insights API.

Metrics exposed:
- Upstream (API-Football, The Odds API) success/failure counters
- Odds API quota gauges, refreshed from response headers
- Sync job outcomes and processed-record counts
- Odds snapshots written
"""
from prometheus_client import Counter, Gauge, Histogram

# Upstream API Metrics
upstream_requests_total = Counter(
    "upstream_requests_total",
    "Total upstream API requests",
    ["provider", "outcome"]
)

upstream_request_duration_seconds = Histogram(
    "upstream_request_duration_seconds",
    "Upstream API latency in seconds",
    ["provider"]
)

# Odds API quota
odds_api_quota_remaining = Gauge(
    "odds_api_quota_remaining",
    "Remaining Odds API requests for current billing period"
)

odds_api_quota_used = Gauge(
    "odds_api_quota_used",
    "Used Odds API requests in current billing period"
)

# Sync Metrics
sync_runs_total = Counter(
    "sync_runs_total",
    "Reference data sync runs",
    ["data_type", "status"]
)

sync_records_processed_total = Counter(
    "sync_records_processed_total",
    "Records upserted by reference data syncs",
    ["data_type"]
)

# Odds snapshot Metrics
odds_snapshots_created_total = Counter(
    "odds_snapshots_created_total",
    "Odds snapshot rows written",
    ["market"]
)

odds_events_unmatched_total = Counter(
    "odds_events_unmatched_total",
    "Odds events with no matching fixture"
)

odds_closing_marked_total = Counter(
    "odds_closing_marked_total",
    "Odds snapshots flagged as closing lines"
)


def record_upstream_call(provider: str, success: bool, duration: float) -> None:
    """Count one upstream call and observe its latency."""
    upstream_requests_total.labels(provider=provider, outcome="success" if success else "failure").inc()
    upstream_request_duration_seconds.labels(provider=provider).observe(duration)


def update_odds_quota(remaining: int | None, used: int | None) -> None:
    if remaining is not None:
        odds_api_quota_remaining.set(remaining)
    if used is not None:
        odds_api_quota_used.set(used)
