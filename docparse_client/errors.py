"""
Error Taxonomy
==============
Exceptions raised by the parse client. Nothing here is retried internally;
every error propagates to the caller.
"""

from __future__ import annotations

from typing import Optional


class ParseClientError(Exception):
    """Base class for all client errors."""


class ConfigError(ParseClientError):
    """Client configuration is invalid (e.g. missing API key)."""


class HTTPRequestError(ParseClientError):
    """A request to the parsing service did not succeed."""

    action = "Request failed"

    def __init__(
        self,
        reason: str,
        status_code: Optional[int] = None,
        job_id: Optional[str] = None,
    ):
        self.reason = reason
        self.status_code = status_code
        self.job_id = job_id
        super().__init__(f"{self.action}: {reason}")


class UploadError(HTTPRequestError):
    action = "Upload failed"


class StatusCheckError(HTTPRequestError):
    action = "Status check failed"


class ResultFetchError(HTTPRequestError):
    action = "Failed to get results"


class ParseFailedError(ParseClientError):
    """The service reported the job as FAILED."""

    def __init__(self, job_id: str, error: Optional[str] = None):
        self.job_id = job_id
        self.error = error
        super().__init__(f"Parsing failed: {error}")


class ParseTimeoutError(ParseClientError):
    """Polling gave up while the job was still pending."""

    def __init__(self, job_id: str, attempts: int, elapsed: float):
        self.job_id = job_id
        self.attempts = attempts
        self.elapsed = elapsed
        super().__init__(
            f"Job {job_id} still pending after {attempts} status checks "
            f"({elapsed:.1f}s)"
        )
