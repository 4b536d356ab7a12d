"""Tests for the batch enrichment pipeline."""

from datetime import datetime

from joblinks.core.config import TaggingConfig
from joblinks.core.schemas import CandidateLink, MessageContext
from joblinks.pipeline.batch import LinkPipeline, enrich_batch

B_URL = "https://boards.greenhouse.io/acme-robotics/jobs/998-senior-backend-engineer"


def _link(url: str, **context: str) -> CandidateLink:
    return CandidateLink(url=url, context=MessageContext(**context) if context else None)


# ---------------------------------------------------------------------------
# Filtering and dedup counts
# ---------------------------------------------------------------------------


class TestBatchCounts:
    def test_tracking_and_slash_variants_dedup(self) -> None:
        result = enrich_batch(
            [
                _link("https://jobs.lever.co/acme/123?utm_source=newsletter"),
                _link("https://jobs.lever.co/acme/123/"),
            ]
        )
        assert len(result.accepted) == 1
        assert result.duplicate_count == 1
        assert result.filtered_count == 0
        assert result.accepted[0].url == "https://jobs.lever.co/acme/123?utm_source=newsletter"
        assert result.accepted[0].normalized_url == "https://jobs.lever.co/acme/123"

    def test_unrelated_link_filtered(self) -> None:
        result = enrich_batch([_link(B_URL), _link("https://news.example.com/weather")])
        assert result.filtered_count == 1
        assert [r.url for r in result.accepted] == [B_URL]

    def test_filter_disabled_keeps_everything(self) -> None:
        result = enrich_batch(
            [_link("https://news.example.com/weather")], filter_job_links=False
        )
        assert result.filtered_count == 0
        assert len(result.accepted) == 1
        assert result.accepted[0].confidence == "low"

    def test_known_identities(self) -> None:
        result = enrich_batch(
            [_link("https://www.linkedin.com/jobs/view/1/?trk=x")],
            known_identities={"https://linkedin.com/jobs/view/1"},
        )
        assert result.accepted == ()
        assert result.duplicate_count == 1

    def test_rejected_link_does_not_reserve_identity(self) -> None:
        result = enrich_batch(
            [
                _link("https://acme.com/p/1"),
                _link(
                    "https://acme.com/p/1?utm_source=x",
                    subject="We're hiring",
                    snippet="job opportunity",
                ),
            ]
        )
        assert result.filtered_count == 1
        assert result.duplicate_count == 0
        assert len(result.accepted) == 1

    def test_counts_add_up(self) -> None:
        links = [
            _link(B_URL),
            _link(B_URL + "?utm_campaign=x"),
            _link("https://news.example.com/weather"),
            _link("https://www.indeed.com/viewjob?jk=abc"),
        ]
        result = enrich_batch(links)
        assert len(result.accepted) + result.filtered_count + result.duplicate_count == len(links)

    def test_empty(self) -> None:
        result = enrich_batch([])
        assert result.accepted == ()
        assert result.filtered_count == 0
        assert result.duplicate_count == 0

    def test_order_preserved(self) -> None:
        urls = [
            "https://www.indeed.com/viewjob?jk=abc",
            B_URL,
            "https://www.linkedin.com/jobs/view/7",
        ]
        result = enrich_batch([_link(u) for u in urls])
        assert [r.url for r in result.accepted] == urls


# ---------------------------------------------------------------------------
# Record assembly
# ---------------------------------------------------------------------------


class TestRecordAssembly:
    def test_greenhouse_record(self) -> None:
        stamp = datetime(2024, 5, 1, 12, 0)
        result = LinkPipeline().run([_link(B_URL)], extracted_at=stamp)
        record = result.accepted[0]
        assert record.title == "Senior Backend Engineer"
        assert record.company == "Acme Robotics"
        assert record.normalized_url == B_URL
        assert record.source == "gmail"
        assert record.confidence == "high"
        assert record.extraction_confidence == "low"
        assert record.tags == ("Senior", "Backend")
        assert record.extracted_at == stamp
        assert record.email_subject is None

    def test_context_carried(self) -> None:
        ctx = {
            "subject": "Application for Staff Engineer at Initech",
            "sender": "no-reply@greenhouse.io",
            "snippet": "Full-time role based in Austin, TX",
        }
        record = enrich_batch([_link("https://acme.com/jobs/42", **ctx)]).accepted[0]
        assert record.title == "Staff Engineer"
        assert record.location == "Austin, TX"
        assert record.job_type == "Full-time"
        assert record.email_subject == ctx["subject"]
        assert record.email_sender == ctx["sender"]
        assert record.email_snippet == ctx["snippet"]

    def test_preferred_board_source_overrides_default(self) -> None:
        result = enrich_batch(
            [
                _link("https://www.linkedin.com/jobs/view/1"),
                _link("https://www.glassdoor.com/job-listing/x"),
                _link("https://jobs.lever.co/acme/1"),
            ],
            default_source="manual",
        )
        assert [r.source for r in result.accepted] == ["linkedin", "glassdoor", "manual"]

    def test_tags_capped_and_unique(self) -> None:
        ctx = {
            "subject": "Job alert: Senior Python Backend Engineer",
            "snippet": "AWS, Docker, Kubernetes, React, startup with equity and visa sponsorship",
        }
        record = enrich_batch([_link("https://acme.com/jobs/senior-backend-engineer", **ctx)]).accepted[0]
        assert len(record.tags) <= 5
        assert len(record.tags) == len(set(record.tags))
        assert record.tags[0] == "Senior"

    def test_custom_tag_limit(self) -> None:
        pipeline = LinkPipeline(tagging=TaggingConfig(record_tag_limit=1))
        record = pipeline.run([_link(B_URL)]).accepted[0]
        assert record.tags == ("Senior",)

    def test_resolve_source(self) -> None:
        pipeline = LinkPipeline()
        assert pipeline.resolve_source("indeed.com", "gmail") == "indeed"
        assert pipeline.resolve_source("lever.co", "gmail") == "gmail"
        assert pipeline.resolve_source(None, "manual") == "manual"
