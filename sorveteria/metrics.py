"""Business metrics for the sorveteria application."""

from opentelemetry import metrics

from .logging_config import get_logger

logger = get_logger(__name__)

meter = metrics.get_meter(__name__)

# HTTP Request Metrics
http_request_duration = meter.create_histogram(
    name="http_request_duration_seconds",
    description="Duration of HTTP requests in seconds",
    unit="s",
)

http_requests_total = meter.create_counter(
    name="http_requests_total",
    description="Total number of HTTP requests",
)

http_request_errors = meter.create_counter(
    name="http_request_errors_total",
    description="Total number of HTTP request errors",
)

# Business Metrics
photos_added_total = meter.create_counter(
    name="photos_added_total",
    description="Total number of environment photos added",
)

testimonials_submitted_total = meter.create_counter(
    name="testimonials_submitted_total",
    description="Total number of testimonials submitted",
)

testimonials_moderated_total = meter.create_counter(
    name="testimonials_moderated_total",
    description="Total number of testimonial moderation decisions",
)

promotions_created_total = meter.create_counter(
    name="promotions_created_total",
    description="Total number of promotions created",
)

promotions_expired_total = meter.create_counter(
    name="promotions_expired_total",
    description="Total number of promotions removed by the expiry sweep",
)


def record_http_request(method: str, endpoint: str, status_code: int, duration: float):
    """Record HTTP request metrics."""
    labels = {"method": method, "endpoint": endpoint, "status_code": str(status_code)}

    http_request_duration.record(duration, labels)
    http_requests_total.add(1, labels)

    if status_code >= 400:
        http_request_errors.add(1, labels)


def record_photo_added(category: str):
    photos_added_total.add(1, {"category": category})


def record_testimonial_submitted(rating: int):
    testimonials_submitted_total.add(1, {"rating": str(rating)})


def record_testimonial_moderated(status: str):
    testimonials_moderated_total.add(1, {"status": status})


def record_promotion_created(promotion_type: str, priority: int):
    promotions_created_total.add(1, {"type": promotion_type, "priority": str(priority)})


def record_promotions_expired(count: int):
    """Record promotions removed by a sweep (no-op for zero)."""
    if count > 0:
        promotions_expired_total.add(count)


logger.debug("Business metrics instruments created")
