"""
DocParse Client
===============
Client library for a LlamaParse-compatible document parsing service.

Architecture:
    - ClientConfig: Immutable credentials, base URL and header overrides
    - ParseClient: Upload, status polling and markdown result retrieval
    - Storage: Writes fetched markdown and job metadata to disk
    - CLI: Shell front end over the client

Version: 1.0.0
"""

__version__ = "1.0.0"

from .client import ParseClient
from .config import ClientConfig, PollingConfig
from .errors import (
    ConfigError,
    HTTPRequestError,
    ParseClientError,
    ParseFailedError,
    ParseTimeoutError,
    ResultFetchError,
    StatusCheckError,
    UploadError,
)
from .models import JobMetadata, JobStatus, JobStatusResponse, ParseResult

__all__ = [
    "ClientConfig",
    "ConfigError",
    "HTTPRequestError",
    "JobMetadata",
    "JobStatus",
    "JobStatusResponse",
    "ParseClient",
    "ParseClientError",
    "ParseFailedError",
    "ParseResult",
    "ParseTimeoutError",
    "PollingConfig",
    "ResultFetchError",
    "StatusCheckError",
    "UploadError",
]
