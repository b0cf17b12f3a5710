"""
Summary service.

Renders a patient's timeline into the summary document, dispatches it to
the summarizer and normalizes every outcome into a SummaryResult. Callers
get either the first candidate's text or a reason; never partial text.
"""
import logging
import time
from dataclasses import dataclass
from typing import Optional

from django.db import models

from apps.core.observability import metrics
from apps.core.observability.events import log_summary_outcome
from apps.summaries.prompt import build_summary_request, render_document
from apps.summaries.summarizer import (
    Summarizer,
    SummarizerConfigError,
    SummarizerError,
    SummarizerResponseError,
    SummarizerTimeout,
    SummarizerTransportError,
    get_default_summarizer,
)

logger = logging.getLogger(__name__)


class SummaryUnavailableReason(models.TextChoices):
    NOT_CONFIGURED = 'not_configured', 'Summarizer not configured'
    TIMEOUT = 'timeout', 'Summarizer timed out'
    TRANSPORT_ERROR = 'transport_error', 'Summarizer request failed'
    MALFORMED_RESPONSE = 'malformed_response', 'Summarizer response was malformed'
    EMPTY_CANDIDATES = 'empty_candidates', 'Summarizer returned no summary'


@dataclass(frozen=True)
class SummaryResult:
    summary_text: Optional[str] = None
    reason: Optional[str] = None
    detail: str = ''

    @classmethod
    def success(cls, summary_text):
        return cls(summary_text=summary_text)

    @classmethod
    def unavailable(cls, reason, detail=''):
        return cls(reason=SummaryUnavailableReason(reason), detail=detail)

    @property
    def ok(self):
        return self.reason is None

    @property
    def is_config_error(self):
        return self.reason == SummaryUnavailableReason.NOT_CONFIGURED


@metrics.track_duration(metrics.summarizer_call_duration_seconds)
def _call_summarizer(summarizer: Summarizer, request):
    return summarizer.summarize(request)


def _dispatch(summarizer: Summarizer, request) -> SummaryResult:
    try:
        response = _call_summarizer(summarizer, request)
    except SummarizerTimeout as e:
        return SummaryResult.unavailable(SummaryUnavailableReason.TIMEOUT, str(e))
    except SummarizerTransportError as e:
        return SummaryResult.unavailable(SummaryUnavailableReason.TRANSPORT_ERROR, str(e))
    except SummarizerResponseError as e:
        return SummaryResult.unavailable(SummaryUnavailableReason.MALFORMED_RESPONSE, str(e))
    except SummarizerError as e:
        # Any other summarizer-side failure (e.g. a substitute raising the base class)
        return SummaryResult.unavailable(SummaryUnavailableReason.TRANSPORT_ERROR, str(e))

    if not response.candidates:
        return SummaryResult.unavailable(
            SummaryUnavailableReason.EMPTY_CANDIDATES,
            'Summarizer returned no candidates'
        )

    text = response.candidates[0]
    if not text or not text.strip():
        return SummaryResult.unavailable(
            SummaryUnavailableReason.EMPTY_CANDIDATES,
            'Summarizer returned an empty summary'
        )

    return SummaryResult.success(text.strip())


def build_and_dispatch_summary(patient, timeline, summarizer: Optional[Summarizer] = None) -> SummaryResult:
    """
    Summarize ``patient``'s ``timeline`` through the external summarizer.

    Args:
        patient: Patient user the timeline belongs to
        timeline: Aggregated Timeline (already authorized)
        summarizer: Summarizer to use (defaults to the configured one)

    Returns:
        SummaryResult with summary_text, or with a SummaryUnavailableReason
    """
    start_time = time.time()

    try:
        summarizer = summarizer or get_default_summarizer()
    except SummarizerConfigError as e:
        logger.error('Summarizer is not configured', extra={'event': 'summarizer_not_configured'})
        result = SummaryResult.unavailable(SummaryUnavailableReason.NOT_CONFIGURED, str(e))
    else:
        document = render_document(patient, timeline)
        result = _dispatch(summarizer, build_summary_request(document))

    metrics.summary_requests_total.labels(
        result='success' if result.ok else result.reason.value
    ).inc()
    log_summary_outcome(
        patient.id,
        result,
        entries_count=len(timeline),
        duration_ms=round((time.time() - start_time) * 1000, 2),
    )
    return result
