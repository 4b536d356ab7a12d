"""Core data models for the job link classifier.

Every model is frozen: pipeline stages produce new records instead of
mutating their inputs.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Confidence = Literal["high", "medium", "low"]
JobSource = Literal["gmail", "manual", "linkedin", "indeed", "glassdoor", "other"]

CONFIDENCE_RANK: dict[str, int] = {"high": 3, "medium": 2, "low": 1}

DEFAULT_TITLE = "Job Opportunity"
DEFAULT_COMPANY = "Unknown Company"


class MessageContext(BaseModel):
    """Subject/sender/snippet of the message a link was harvested from."""

    model_config = ConfigDict(frozen=True)

    subject: str | None = None
    sender: str | None = None
    snippet: str | None = None


class CandidateLink(BaseModel):
    """A raw URL awaiting classification, plus optional message context."""

    model_config = ConfigDict(frozen=True)

    url: str
    context: MessageContext | None = None

    @field_validator("url")
    @classmethod
    def url_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "url must not be empty"
            raise ValueError(msg)
        return v.strip()


class RelatednessVerdict(BaseModel):
    """Whether a link points at a job posting, and why."""

    model_config = ConfigDict(frozen=True)

    url: str
    is_job_link: bool
    confidence: Confidence
    score: int = 0
    matched_source: str | None = None
    reasons: tuple[str, ...] = ()


class ExtractedMetadata(BaseModel):
    """Title/company/location/employment type inferred for a link.

    The title and company defaults are committed fallbacks, not "missing".
    """

    model_config = ConfigDict(frozen=True)

    title: str = DEFAULT_TITLE
    company: str = DEFAULT_COMPANY
    location: str | None = None
    job_type: str | None = None


class CategoryResult(BaseModel):
    """Source platform, employment type, location and tags for a link.

    ``confidence`` measures how much metadata was recovered; it is unrelated
    to RelatednessVerdict.confidence.
    """

    model_config = ConfigDict(frozen=True)

    source: JobSource = "other"
    job_type: str | None = None
    location: str | None = None
    tags: tuple[str, ...] = ()
    confidence: Confidence = "low"


class ClassifiedLink(BaseModel):
    """A candidate link paired with its relatedness verdict."""

    model_config = ConfigDict(frozen=True)

    link: CandidateLink
    verdict: RelatednessVerdict


class EnrichedRecord(BaseModel):
    """One accepted link, ready for the persistence layer."""

    model_config = ConfigDict(frozen=True)

    url: str
    normalized_url: str
    title: str
    company: str
    location: str | None = None
    job_type: str | None = None
    source: JobSource = "other"
    tags: tuple[str, ...] = ()
    confidence: Confidence = "low"
    extraction_confidence: Confidence = "low"
    email_subject: str | None = None
    email_sender: str | None = None
    email_snippet: str | None = None
    extracted_at: datetime = Field(default_factory=datetime.now)


class BatchResult(BaseModel):
    """Output of one batch pipeline run."""

    model_config = ConfigDict(frozen=True)

    accepted: tuple[EnrichedRecord, ...] = ()
    filtered_count: int = Field(default=0, ge=0)
    duplicate_count: int = Field(default=0, ge=0)
