"""
Error taxonomy for the SEO optimizer.

Every error knows the pipeline stage it belongs to, the HTTP status the
Cloud Function should answer with, and whether the failure is recoverable.

Recoverable errors (one channel failing to resolve or fetch) are caught by
the aggregator and recorded. Everything else propagates to the HTTP handler,
which returns a single error payload and no partial result.
"""

from typing import Dict, List, Optional


class OptimizerError(Exception):
    """Base class for all optimizer failures."""

    stage = 'processing'
    status_code = 500
    recoverable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict:
        return {
            'stage': self.stage,
            'message': self.message,
            'recoverable': self.recoverable,
        }


class InputValidationError(OptimizerError):
    """Request body is missing fields or has blank values."""

    stage = 'validation'
    status_code = 400


class ResolutionFailure(OptimizerError):
    """URL does not match any known channel or video pattern."""

    stage = 'resolution'
    status_code = 400
    recoverable = True

    def __init__(self, url: str, kind: str):
        super().__init__(f"Invalid {kind} URL: {url}")
        self.url = url
        self.kind = kind


class FetchFailure(OptimizerError):
    """Page could not be fetched (transport error or non-2xx status)."""

    stage = 'fetch'
    status_code = 502
    recoverable = True

    def __init__(self, url: str, reason: Optional[str] = None):
        super().__init__(f"Failed to fetch {url}: {reason or 'no data'}")
        self.url = url
        self.reason = reason


class AggregateExhaustion(OptimizerError):
    """Every reference channel failed."""

    stage = 'channel_analysis'
    status_code = 500

    def __init__(self, failures: Optional[List[Dict]] = None):
        super().__init__('Failed to analyze any reference channels')
        self.failures = failures or []


class GenerationServiceError(OptimizerError):
    """Missing credential or unusable answer from the generation service."""

    stage = 'generation'
    status_code = 502


class MalformedResponse(OptimizerError):
    """Model answered, but without a parseable, schema-complete payload."""

    stage = 'response_parsing'
    status_code = 500
