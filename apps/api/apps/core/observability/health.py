"""
Health check endpoints.

/healthz answers as long as the process is up. /readyz checks the database,
which every patient endpoint needs, and reports whether the external
summarizer is configured. A missing summarizer only degrades the summary
endpoint, so it does not make the service unready.
"""
import logging
from django.conf import settings
from django.db import connection
from django.http import JsonResponse
from django.views import View

logger = logging.getLogger(__name__)

# Checks that must pass for the service to take traffic
REQUIRED_CHECKS = ('database',)


class HealthzView(View):
    """Liveness: no dependency checks."""

    def get(self, request):
        health_data = {
            'status': 'ok',
            'version': getattr(settings, 'VERSION', 'unknown'),
        }

        # Set by deployment
        commit_hash = getattr(settings, 'COMMIT_HASH', None)
        if commit_hash:
            health_data['commit'] = commit_hash

        return JsonResponse(health_data, status=200)


class ReadyzView(View):
    """
    Readiness.

    Response:
    {
        "status": "ready" | "degraded" | "not_ready",
        "checks": {"database": true, "summarizer": false}
    }

    200 for ready/degraded, 503 when a required check fails.
    """

    def get(self, request):
        checks = {
            'database': self._check_database(),
            'summarizer': self._check_summarizer(),
        }

        if not all(checks[name] for name in REQUIRED_CHECKS):
            status_label, status_code = 'not_ready', 503
        elif not all(checks.values()):
            status_label, status_code = 'degraded', 200
        else:
            status_label, status_code = 'ready', 200

        return JsonResponse({'status': status_label, 'checks': checks}, status=status_code)

    def _check_database(self):
        try:
            with connection.cursor() as cursor:
                cursor.execute('SELECT 1')
                return True
        except Exception as e:
            logger.error(
                'Database health check failed',
                extra={
                    'event': 'health_check_failed',
                    'check': 'database',
                    'error_type': e.__class__.__name__,
                }
            )
            return False

    def _check_summarizer(self):
        configured = bool(getattr(settings, 'MISTRAL_API_KEY', ''))
        if not configured:
            logger.warning(
                'Summarizer is not configured',
                extra={'event': 'health_check_degraded', 'check': 'summarizer'}
            )
        return configured
