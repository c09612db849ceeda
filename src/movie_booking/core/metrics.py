"""
Prometheus metrics for monitoring
"""
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST  # noqa: F401
import logging

logger = logging.getLogger(__name__)

# ==================== HTTP Metrics ====================

http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

# ==================== Booking Metrics ====================

bookings_created_total = Counter(
    'bookings_created_total',
    'Total bookings created'
)

bookings_updated_total = Counter(
    'bookings_updated_total',
    'Total bookings edited'
)

bookings_deleted_total = Counter(
    'bookings_deleted_total',
    'Total bookings deleted'
)

booking_conflicts_total = Counter(
    'booking_conflicts_total',
    'Booking attempts rejected because the seat was taken'
)

# ==================== Auth Metrics ====================

signups_total = Counter(
    'signups_total',
    'Total users registered'
)

logins_total = Counter(
    'logins_total',
    'Login attempts by outcome',
    ['result']  # success, unknown_email, bad_password
)

# ==================== Helper Functions ====================

def record_http_request(method: str, endpoint: str, status: int, duration_seconds: float):
    """Record one served request"""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration_seconds)


def get_metrics():
    """Get current metrics in Prometheus format"""
    return generate_latest()
