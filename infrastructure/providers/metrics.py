from domain.models.rates import UpstreamMetricsSnapshot


class UpstreamMetrics:
    """Process-wide upstream call counters polled by the health check.

    Counters only grow; snapshot() moves the since-last-check baseline.
    """

    def __init__(self):
        self.requests_total = 0
        self.errors_total = 0
        self._errors_at_last_check = 0

    def record_request(self) -> None:
        self.requests_total += 1

    def record_error(self) -> None:
        self.errors_total += 1

    def snapshot(self) -> UpstreamMetricsSnapshot:
        errors_total = self.errors_total
        since_last_check = errors_total - self._errors_at_last_check
        self._errors_at_last_check = errors_total
        return UpstreamMetricsSnapshot(
            upstream_errors_total=errors_total,
            upstream_errors_since_last_check=since_last_check,
            requests_total=self.requests_total,
        )
