"""
Data Models
===========
Pydantic models for the parsing service's JSON payloads.
Unknown keys sent by the service are ignored.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ─── Enums ────────────────────────────────────────────────────────────────────


class JobStatus(str, Enum):
    """Server-side lifecycle status of a parse job."""
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self is not JobStatus.PENDING


# ─── Job Models ───────────────────────────────────────────────────────────────


class UploadResponse(BaseModel):
    """Body returned by POST /upload."""
    id: str = Field(min_length=1, description="Opaque job identifier")
    status: JobStatus = JobStatus.PENDING


class JobStatusResponse(BaseModel):
    """Body returned by GET /job/{id}."""
    status: JobStatus
    error: Optional[str] = None


# ─── Result Models ────────────────────────────────────────────────────────────


class JobMetadata(BaseModel):
    """Credit and page usage reported alongside a finished job."""
    model_config = ConfigDict(frozen=True)

    credits_used: float = 0
    job_credits_usage: float = 0
    job_pages: int = Field(default=0, ge=0)
    job_auto_mode_triggered_pages: int = Field(default=0, ge=0)
    job_is_cache_hit: bool = False
    credits_max: float = 0


class ParseResult(BaseModel):
    """
    Markdown output of a successful job.
    Immutable once fetched.
    """
    model_config = ConfigDict(frozen=True)

    markdown: str
    job_metadata: JobMetadata = Field(default_factory=JobMetadata)
