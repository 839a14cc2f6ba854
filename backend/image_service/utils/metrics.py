"""
Prometheus metrics definitions for the image service.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# HTTP request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type']
)

# Upload metrics
image_uploads_total = Counter(
    'image_uploads_total',
    'Total image uploads by outcome',
    ['result']  # success, rejected, failed
)

# GitHub contents API metrics
github_requests_total = Counter(
    'github_requests_total',
    'Total GitHub contents API requests',
    ['method', 'status']
)

github_request_duration_seconds = Histogram(
    'github_request_duration_seconds',
    'GitHub contents API latency in seconds',
    ['method'],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0]
)
