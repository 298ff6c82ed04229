from prometheus_client import Counter, Histogram

from src.platform.exception.exceptions import CustomBaseError


class BookingMetrics:
    """
    Cinema booking core metrics collector

    Tracks booking and payment workflow outcomes plus notifier drops
    """

    def __init__(self):
        # ========== Booking Workflow Metrics ==========
        self.booking_attempts = Counter(
            'cinema_booking_attempts_total',
            'Total booking attempts',
            ['cinema_id', 'result'],  # result: success/conflict/invalid/not_found/error
        )

        self.booking_duration = Histogram(
            'cinema_booking_duration_seconds',
            'Booking workflow duration',
            ['result'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        # ========== Payment Workflow Metrics ==========
        self.payment_attempts = Counter(
            'cinema_payment_attempts_total',
            'Total payment attempts',
            ['payment_method', 'result'],
        )

        self.payment_duration = Histogram(
            'cinema_payment_duration_seconds',
            'Payment workflow duration',
            ['result'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        # ========== Notifier Metrics ==========
        self.notifications_dropped = Counter(
            'cinema_notifications_dropped_total',
            'Confirmation events dropped by the notifier',
            ['kind'],
        )

    # ========== Helper Methods ==========

    def record_booking(self, *, cinema_id: int, result: str, duration: float):
        self.booking_attempts.labels(cinema_id=cinema_id, result=result).inc()
        self.booking_duration.labels(result=result).observe(duration)

    def record_payment(self, *, payment_method: str, result: str, duration: float):
        self.payment_attempts.labels(payment_method=payment_method, result=result).inc()
        self.payment_duration.labels(result=result).observe(duration)

    def record_notification_dropped(self, *, kind: str):
        self.notifications_dropped.labels(kind=kind).inc()


def result_label(error: BaseException | None) -> str:
    """Metric label for a workflow outcome: success, or the error class's `result`"""
    if error is None:
        return 'success'
    if isinstance(error, CustomBaseError):
        return error.result
    return 'error'


# Global metrics instance
metrics = BookingMetrics()
