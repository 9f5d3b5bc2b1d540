"""
Prometheus Metrics for Catalog Service.

Defines all metrics for monitoring Catalog Service traffic, mutations and
event publication.
"""

from prometheus_client import Counter, Histogram

# API
HTTP_REQUESTS_TOTAL = Counter(
    'catalog_http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

HTTP_REQUEST_DURATION = Histogram(
    'catalog_http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Items
ITEM_MUTATIONS = Counter(
    'catalog_item_mutations_total',
    'Successful item mutations',
    ['operation']  # create, update_fields, update_price, activate, deactivate
)

# Events
EVENTS_PUBLISHED = Counter(
    'catalog_events_published_total',
    'Item events handed to the notifier',
    ['event_type', 'status']  # status: success, error
)

# Store
DB_QUERY_DURATION = Histogram(
    'catalog_db_query_duration_seconds',
    'Database query duration',
    ['operation'],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0]
)
