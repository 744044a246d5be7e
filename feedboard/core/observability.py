from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "feedboard_api_requests_total",
    "Total API requests",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "feedboard_api_request_latency_seconds",
    "API request latency",
    ["method", "path"],
)

FEED_FETCH_COUNT = Counter(
    "feedboard_feed_fetch_total",
    "Feed fetch attempts by outcome",
    ["feed", "status"],
)

FEED_FETCH_LATENCY = Histogram(
    "feedboard_feed_fetch_latency_seconds",
    "Latency of one feed retrieval and parse",
    ["strategy"],
)

AGGREGATION_LATENCY = Histogram(
    "feedboard_aggregation_latency_seconds",
    "Latency of one full aggregation run",
)

ARTICLES_AGGREGATED = Histogram(
    "feedboard_articles_per_run",
    "Number of articles produced by one aggregation run",
    buckets=(0, 10, 50, 100, 250, 500, 1000, 2500),
)
