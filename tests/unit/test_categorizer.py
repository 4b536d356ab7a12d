"""Tests for source detection, tagging and richness confidence."""

import pytest

from joblinks.pipeline.categorizer import (
    Categorizer,
    calculate_confidence,
    categorize,
    detect_source,
    extract_tags,
    suggest_tags_from_title,
)

# ---------------------------------------------------------------------------
# detect_source
# ---------------------------------------------------------------------------


class TestDetectSource:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://www.linkedin.com/jobs/view/1", "linkedin"),
            ("https://www.indeed.com/viewjob?jk=1", "indeed"),
            ("https://www.glassdoor.com/job-listing/x", "glassdoor"),
            ("https://jobs.lever.co/acme/1", "other"),
            ("https://acme.com/careers", "other"),
        ],
    )
    def test_detect(self, url: str, expected: str) -> None:
        assert detect_source(url) == expected


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class TestExtractTags:
    TEXT = "Senior Python Backend Engineer with AWS and Docker, startup equity"

    def test_catalog_order_and_cap(self) -> None:
        assert extract_tags(self.TEXT) == ["Senior", "Python", "AWS", "Docker", "Backend"]

    def test_custom_limit(self) -> None:
        assert extract_tags(self.TEXT, limit=3) == ["Senior", "Python", "AWS"]

    def test_empty(self) -> None:
        assert extract_tags("") == []

    def test_word_boundaries(self) -> None:
        assert extract_tags("leading fintech") == []

    @pytest.mark.parametrize(
        "text",
        [
            TEXT,
            "Staff ML engineer, React and TypeScript, Kubernetes, GCP, visa sponsorship",
            "Junior frontend developer, react native, mobile, ios",
            "lead lead senior sr. principal architect",
        ],
    )
    def test_unique_and_at_most_five(self, text: str) -> None:
        tags = extract_tags(text)
        assert len(tags) <= 5
        assert len(tags) == len(set(tags))


class TestSuggestTagsFromTitle:
    def test_senior_frontend(self) -> None:
        assert suggest_tags_from_title("Senior Frontend Engineer") == ["Senior", "Frontend"]

    def test_junior_mobile(self) -> None:
        assert suggest_tags_from_title("Junior iOS Developer") == ["Junior", "Mobile"]

    def test_capped(self) -> None:
        title = "Staff ML Platform Engineer, Engineering Manager"
        assert suggest_tags_from_title(title) == ["Senior", "DevOps", "Data Science"]

    def test_role_family_needs_engineering_title(self) -> None:
        assert suggest_tags_from_title("Backend Specialist") == []

    def test_default_title(self) -> None:
        assert suggest_tags_from_title("Job Opportunity") == []


# ---------------------------------------------------------------------------
# Confidence
# ---------------------------------------------------------------------------


class TestCalculateConfidence:
    @pytest.mark.parametrize(
        ("flags", "expected"),
        [
            ((True, True, True, True, True), "high"),
            ((True, True, False, False, True), "high"),
            ((True, True, False, False, False), "medium"),
            ((False, True, True, False, False), "medium"),
            ((True, False, False, False, True), "medium"),
            ((True, False, False, False, False), "low"),
            ((False, False, False, False, False), "low"),
        ],
    )
    def test_buckets(self, flags: tuple[bool, ...], expected: str) -> None:
        assert calculate_confidence(*flags) == expected


# ---------------------------------------------------------------------------
# categorize
# ---------------------------------------------------------------------------


class TestCategorize:
    def test_rich_record(self) -> None:
        result = categorize(
            "https://www.linkedin.com/jobs/view/1",
            "Senior Backend Engineer",
            "Company: Acme. Full-time, Remote",
        )
        assert result.source == "linkedin"
        assert result.job_type == "Full-time"
        assert result.location == "Remote"
        assert result.tags == ("Senior", "Backend")
        assert result.confidence == "high"

    def test_default_title_not_counted(self) -> None:
        result = categorize("https://acme.com", "Job Opportunity", "")
        assert result.confidence == "low"
        assert result.source == "other"
        assert result.tags == ()

    def test_tag_limit(self) -> None:
        result = Categorizer().categorize(
            "https://acme.com", "Senior Python Backend Engineer", "AWS Docker", tag_limit=2
        )
        assert result.tags == ("Senior", "Python")

    def test_deterministic(self) -> None:
        args = ("https://acme.com/jobs/1", "Data Engineer", "Hybrid role in Chicago")
        assert categorize(*args) == categorize(*args)
