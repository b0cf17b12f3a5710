"""
Metrics instrumentation wrapper around prometheus_client.
"""
import logging
import time
from functools import wraps

from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)


class MetricsRegistry:
    """
    Central metrics registry for NexusCare.

    Provides typed access to all application metrics.
    """

    def __init__(self):
        """Initialize metrics registry."""
        self._setup_metrics()

    def _create_counter(self, name, description, labels=None):
        """Create a counter metric."""
        return Counter(name, description, labels or [])

    def _create_histogram(self, name, description, labels=None, buckets=None):
        """Create a histogram metric."""
        if buckets:
            return Histogram(name, description, labels or [], buckets=buckets)
        return Histogram(name, description, labels or [])

    def _setup_metrics(self):
        """Setup all application metrics."""

        # ===================================================================
        # HTTP Metrics
        # ===================================================================
        self.exceptions_total = self._create_counter(
            'nexuscare_exceptions_total',
            'Total exceptions',
            ['exception_type', 'location']
        )

        # ===================================================================
        # Authorization Metrics
        # ===================================================================
        self.authz_decisions_total = self._create_counter(
            'nexuscare_authz_decisions_total',
            'Authorization guard decisions',
            ['operation', 'result']  # result: allow|deny
        )

        self.consultation_changes_total = self._create_counter(
            'nexuscare_consultation_changes_total',
            'Consultation link changes',
            ['action']  # start|end
        )

        # ===================================================================
        # Record Metrics
        # ===================================================================
        self.record_writes_total = self._create_counter(
            'nexuscare_record_writes_total',
            'Record entries written through the API',
            ['kind']
        )

        self.timeline_aggregations_total = self._create_counter(
            'nexuscare_timeline_aggregations_total',
            'Timeline aggregations',
            ['result']  # success|partial_data
        )

        self.timeline_aggregation_duration_seconds = self._create_histogram(
            'nexuscare_timeline_aggregation_duration_seconds',
            'Duration of timeline aggregation',
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
        )

        self.timeline_entries = self._create_histogram(
            'nexuscare_timeline_entries',
            'Number of entries in an aggregated timeline',
            buckets=[0, 1, 5, 10, 25, 50, 100, 250, 500, 1000]
        )

        # ===================================================================
        # Summary Metrics
        # ===================================================================
        self.summary_requests_total = self._create_counter(
            'nexuscare_summary_requests_total',
            'Summary requests by outcome',
            ['result']  # success or a SummaryUnavailable reason
        )

        self.summarizer_call_duration_seconds = self._create_histogram(
            'nexuscare_summarizer_call_duration_seconds',
            'Duration of the external summarizer call',
            buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
        )

    def track_duration(self, histogram_metric):
        """
        Decorator to track function duration.

        Usage:
            @metrics.track_duration(metrics.timeline_aggregation_duration_seconds)
            def aggregate(patient_id):
                ...
        """
        def decorator(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                start_time = time.time()
                try:
                    return func(*args, **kwargs)
                finally:
                    duration = time.time() - start_time
                    histogram_metric.observe(duration)
            return wrapper
        return decorator


# Global metrics instance
metrics = MetricsRegistry()
