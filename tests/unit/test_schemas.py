"""Tests for core data models."""

import pytest
from pydantic import ValidationError

from joblinks.core.schemas import (
    BatchResult,
    CandidateLink,
    EnrichedRecord,
    ExtractedMetadata,
    MessageContext,
    RelatednessVerdict,
)


class TestCandidateLink:
    def test_url_stripped(self) -> None:
        assert CandidateLink(url="  https://a.com/x \n").url == "https://a.com/x"

    def test_empty_url_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CandidateLink(url="   ")

    def test_context_optional(self) -> None:
        assert CandidateLink(url="https://a.com").context is None

    def test_frozen(self) -> None:
        link = CandidateLink(url="https://a.com")
        with pytest.raises(ValidationError):
            link.url = "https://b.com"  # type: ignore[misc]


class TestRelatednessVerdict:
    def test_invalid_confidence(self) -> None:
        with pytest.raises(ValidationError):
            RelatednessVerdict(url="u", is_job_link=True, confidence="certain")  # type: ignore[arg-type]

    def test_reasons_tuple(self) -> None:
        v = RelatednessVerdict(url="u", is_job_link=False, confidence="low", reasons=["a"])  # type: ignore[arg-type]
        assert v.reasons == ("a",)


class TestExtractedMetadata:
    def test_fallback_defaults(self) -> None:
        m = ExtractedMetadata()
        assert m.title == "Job Opportunity"
        assert m.company == "Unknown Company"


class TestEnrichedRecord:
    def test_minimal(self) -> None:
        r = EnrichedRecord(
            url="https://a.com/x",
            normalized_url="https://a.com/x",
            title="Job Opportunity",
            company="A",
        )
        assert r.source == "other"
        assert r.tags == ()
        assert r.extracted_at is not None

    def test_invalid_source(self) -> None:
        with pytest.raises(ValidationError):
            EnrichedRecord(
                url="u", normalized_url="u", title="t", company="c", source="monster",  # type: ignore[arg-type]
            )


class TestBatchResult:
    def test_negative_counts_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BatchResult(filtered_count=-1)

    def test_message_context_all_optional(self) -> None:
        ctx = MessageContext()
        assert (ctx.subject, ctx.sender, ctx.snippet) == (None, None, None)
