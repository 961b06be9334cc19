"""
Parse Client
============
HTTP client for the document parsing service.

Usage:
    client = ParseClient(api_key="llx-...")
    result = client.parse_file("path/to/document.pdf")
    print(result.markdown)

Flow:
    upload → PENDING* (poll every interval) → SUCCESS → markdown result
                                             → FAILED  → ParseFailedError
"""

from __future__ import annotations

import io
import logging
import os
import time
from pathlib import Path
from typing import BinaryIO, Optional, Union

import requests
from pydantic import BaseModel, ValidationError

from .config import ClientConfig, PollingConfig
from .errors import (
    ConfigError,
    HTTPRequestError,
    ParseFailedError,
    ParseTimeoutError,
    ResultFetchError,
    StatusCheckError,
    UploadError,
)
from .models import JobStatus, JobStatusResponse, ParseResult, UploadResponse

logger = logging.getLogger(__name__)

FileInput = Union[str, os.PathLike, bytes, BinaryIO]

PDF_CONTENT_TYPE = "application/pdf"


class ParseClient:
    """
    Client for the upload / status / result endpoints.

    Holds only immutable configuration and a requests session, so one
    instance can serve any number of independent parse calls.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
        polling: Optional[PollingConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        if config is None:
            if not api_key:
                raise ConfigError("API key is required")
            config = ClientConfig(
                api_key=api_key,
                base_url=base_url or "",
                headers=headers or {},
            )
        elif api_key or base_url or headers:
            raise ConfigError(
                "Pass either a ClientConfig or api_key/base_url/headers, not both"
            )

        self.config = config
        self.polling = polling or PollingConfig()
        self.session = session or requests.Session()
        self.session.headers.update(config.request_headers())

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def headers(self) -> dict[str, str]:
        return self.config.request_headers()

    def close(self):
        self.session.close()

    def __enter__(self) -> "ParseClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    # ─── Composite ────────────────────────────────────────────────────────

    def parse_file(self, file: FileInput) -> ParseResult:
        """
        Upload a document, wait for the job to finish and fetch the markdown.

        Args:
            file: Path, raw bytes or binary file object of the document.

        Returns:
            ParseResult with the markdown text and job metadata.

        Raises:
            UploadError, StatusCheckError, ResultFetchError: HTTP failures.
            ParseFailedError: The service reported the job as FAILED.
            ParseTimeoutError: The polling policy gave up on a pending job.
        """
        job_id = self.upload(file)
        status = self.wait_for_job(job_id)

        if status.status is JobStatus.FAILED:
            logger.error(f"Job {job_id} failed: {status.error}")
            raise ParseFailedError(job_id, status.error)

        return self.get_result(job_id)

    def wait_for_job(self, job_id: str) -> JobStatusResponse:
        """Poll the job status until it reaches SUCCESS or FAILED."""
        polling = self.polling
        start_time = time.monotonic()
        attempts = 0

        while True:
            status = self.check_status(job_id)
            attempts += 1

            if status.status.is_terminal:
                elapsed = time.monotonic() - start_time
                logger.info(
                    f"Job {job_id} finished with {status.status.value} "
                    f"after {attempts} status checks ({elapsed:.1f}s)"
                )
                return status

            elapsed = time.monotonic() - start_time
            if polling.max_attempts is not None and attempts >= polling.max_attempts:
                raise ParseTimeoutError(job_id, attempts, elapsed)
            if polling.timeout is not None and elapsed >= polling.timeout:
                raise ParseTimeoutError(job_id, attempts, elapsed)

            logger.debug(
                f"Job {job_id} pending (check {attempts}), "
                f"next check in {polling.interval}s"
            )
            time.sleep(polling.interval)

    # ─── Endpoints ────────────────────────────────────────────────────────

    def upload(self, file: FileInput) -> str:
        """
        Upload a document to start a parse job.

        Returns:
            The job id assigned by the service.
        """
        filename, payload = _read_file(file)
        url = f"{self.base_url}/upload"
        logger.info(f"Uploading {filename} ({len(payload)} bytes)")

        data = self._request(
            "POST",
            url,
            UploadError,
            files={"file": (filename, payload, PDF_CONTENT_TYPE)},
        )
        upload = self._validate(UploadResponse, data, UploadError)

        logger.info(f"Upload accepted: job {upload.id} ({upload.status.value})")
        return upload.id

    def check_status(self, job_id: str) -> JobStatusResponse:
        """Fetch the current status (and error, if any) of a job."""
        _require_job_id(job_id)
        data = self._request(
            "GET",
            f"{self.base_url}/job/{job_id}",
            StatusCheckError,
            job_id=job_id,
        )
        return self._validate(JobStatusResponse, data, StatusCheckError, job_id)

    def get_result(self, job_id: str) -> ParseResult:
        """Fetch the markdown result of a job whose status is SUCCESS."""
        _require_job_id(job_id)
        data = self._request(
            "GET",
            f"{self.base_url}/job/{job_id}/result/markdown",
            ResultFetchError,
            job_id=job_id,
        )
        result = self._validate(ParseResult, data, ResultFetchError, job_id)

        logger.info(
            f"Fetched result for job {job_id}: "
            f"{result.job_metadata.job_pages} pages, "
            f"{len(result.markdown)} characters"
        )
        return result

    # ─── Transport ────────────────────────────────────────────────────────

    def _request(
        self,
        method: str,
        url: str,
        error_cls: type[HTTPRequestError],
        job_id: Optional[str] = None,
        **kwargs,
    ) -> dict:
        """Send a request and decode its JSON body, mapping every failure to error_cls."""
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.config.request_timeout,
                **kwargs,
            )
        except requests.exceptions.RequestException as e:
            raise error_cls(str(e), job_id=job_id) from e

        if not response.ok:
            reason = response.reason or f"HTTP {response.status_code}"
            logger.warning(f"{method} {url} returned {response.status_code} {reason}")
            raise error_cls(reason, status_code=response.status_code, job_id=job_id)

        try:
            return response.json()
        except ValueError as e:
            raise error_cls(
                f"Invalid JSON response: {e}",
                status_code=response.status_code,
                job_id=job_id,
            ) from e

    @staticmethod
    def _validate(
        model: type[BaseModel],
        data,
        error_cls: type[HTTPRequestError],
        job_id: Optional[str] = None,
    ):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise error_cls(
                f"Unexpected response body: {e.errors()[0]['msg']}",
                job_id=job_id,
            ) from e


# ─── Helpers ──────────────────────────────────────────────────────────────────


def _require_job_id(job_id: str):
    if not job_id:
        raise ValueError("job_id must be a non-empty string")


def _read_file(file: FileInput) -> tuple[str, bytes]:
    """Return (filename, content) for any supported file input."""
    if isinstance(file, (bytes, bytearray)):
        return "document.pdf", bytes(file)

    if isinstance(file, (str, os.PathLike)):
        path = Path(file)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return path.name, path.read_bytes()

    if isinstance(file, io.IOBase) or hasattr(file, "read"):
        content = file.read()
        if isinstance(content, str):
            raise TypeError("File object must be opened in binary mode")
        name = getattr(file, "name", None)
        if not isinstance(name, str) or not name:
            name = "document.pdf"
        return os.path.basename(name), content

    raise TypeError(f"Unsupported file input: {type(file).__name__}")
