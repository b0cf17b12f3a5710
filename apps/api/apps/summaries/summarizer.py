"""
External summarizer capability.

The summary pipeline only depends on the narrow ``Summarizer`` interface:
one call taking a SummaryRequest and returning the candidate completions.
MistralSummarizer is the HTTP implementation used in production; tests
substitute their own.
"""
import logging
from dataclasses import dataclass, field
from typing import List

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


# ============================================================================
# Errors
# ============================================================================

class SummarizerConfigError(Exception):
    """The summarizer is not configured (e.g. missing API key)."""
    pass


class SummarizerError(Exception):
    """The summarizer could not produce a usable response."""
    pass


class SummarizerTimeout(SummarizerError):
    pass


class SummarizerTransportError(SummarizerError):
    """Network failure or non-2xx response from the summarizer."""

    def __init__(self, message, status_code=None):
        self.status_code = status_code
        super().__init__(message)


class SummarizerResponseError(SummarizerError):
    """The summarizer answered with a body that does not match its contract."""
    pass


# ============================================================================
# Request / Response
# ============================================================================

@dataclass(frozen=True)
class SummaryRequest:
    document: str
    max_length: int
    determinism: float


@dataclass(frozen=True)
class SummarizerResponse:
    candidates: List[str] = field(default_factory=list)


class Summarizer:
    """Capability interface: turn a rendered document into candidate summaries."""

    def summarize(self, request: SummaryRequest) -> SummarizerResponse:
        raise NotImplementedError


# ============================================================================
# Mistral chat-completions implementation
# ============================================================================

class MistralSummarizer(Summarizer):
    """
    Summarizer backed by the Mistral chat-completions API.

    The document is sent as a single user message; each returned choice's
    message content is one candidate.
    """

    def __init__(self, api_key, api_url=None, model=None, timeout=None):
        if not api_key:
            raise SummarizerConfigError('Mistral API Key not configured on server.')
        self.api_key = api_key
        self.api_url = api_url or settings.MISTRAL_API_URL
        self.model = model or settings.MISTRAL_MODEL
        self.timeout = timeout or settings.SUMMARIZER_TIMEOUT_SECONDS

    def summarize(self, request: SummaryRequest) -> SummarizerResponse:
        payload = {
            'model': self.model,
            'messages': [{'role': 'user', 'content': request.document}],
            'temperature': request.determinism,
            'max_tokens': request.max_length,
        }
        headers = {
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {self.api_key}',
        }

        try:
            response = requests.post(
                self.api_url,
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise SummarizerTimeout(f'Summarizer timed out after {self.timeout}s') from e
        except requests.RequestException as e:
            raise SummarizerTransportError(f'Summarizer request failed: {e.__class__.__name__}') from e

        if not response.ok:
            raise SummarizerTransportError(
                self._error_message(response),
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SummarizerResponseError('Summarizer returned a non-JSON body') from e

        return SummarizerResponse(candidates=self._parse_candidates(data))

    def _parse_candidates(self, data):
        if not isinstance(data, dict):
            raise SummarizerResponseError('Summarizer response is not an object')

        choices = data.get('choices')
        if choices is None:
            return []
        if not isinstance(choices, list):
            raise SummarizerResponseError('Summarizer "choices" is not a list')

        candidates = []
        for choice in choices:
            try:
                content = choice['message']['content']
            except (KeyError, TypeError) as e:
                raise SummarizerResponseError('Summarizer choice has no message content') from e
            if not isinstance(content, str):
                raise SummarizerResponseError('Summarizer message content is not text')
            candidates.append(content)
        return candidates

    def _error_message(self, response):
        """Best-effort extraction of the provider's error message."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error = body.get('error')
            if isinstance(error, dict) and error.get('message'):
                return str(error['message'])
            if isinstance(body.get('message'), str):
                return body['message']
        return f'Summarizer returned HTTP {response.status_code}'


def get_default_summarizer() -> Summarizer:
    """
    Build the configured summarizer.

    Raises:
        SummarizerConfigError: the API key is not configured
    """
    return MistralSummarizer(api_key=getattr(settings, 'MISTRAL_API_KEY', ''))
