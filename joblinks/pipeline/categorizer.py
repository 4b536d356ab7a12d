"""Source, employment type, location and tag categorization.

The categorizer's confidence is a richness score (how much metadata was
recovered), independent of the classifier's relatedness confidence:

  non-default title        +25
  company mention          +25
  employment type found    +15
  location found           +15
  recognized platform      +20

Score >= 70 is "high", >= 40 "medium", else "low".
"""

import logging

from joblinks.core.schemas import DEFAULT_TITLE, CategoryResult, Confidence, JobSource
from joblinks.pipeline.signals import detect_job_type, detect_location
from joblinks.pipeline.tables import DEFAULT_TABLES, LookupTables

logger = logging.getLogger(__name__)

DEFAULT_TAG_LIMIT = 5
DEFAULT_TITLE_TAG_LIMIT = 3


def calculate_confidence(
    has_title: bool,
    has_company: bool,
    has_job_type: bool,
    has_location: bool,
    is_known_source: bool,
) -> Confidence:
    """Bucket the metadata richness score into a confidence tier."""
    score = 0
    if has_title:
        score += 25
    if has_company:
        score += 25
    if has_job_type:
        score += 15
    if has_location:
        score += 15
    if is_known_source:
        score += 20

    if score >= 70:
        return "high"
    if score >= 40:
        return "medium"
    return "low"


class Categorizer:
    """Derives source, employment type, location and tags for a link."""

    def __init__(self, tables: LookupTables = DEFAULT_TABLES) -> None:
        self._tables = tables

    def categorize(
        self,
        url: str,
        title: str = "",
        content: str = "",
        tag_limit: int = DEFAULT_TAG_LIMIT,
    ) -> CategoryResult:
        """Categorize a link from its URL, title and free-form content."""
        combined = f"{title} {content}".strip()

        source = self.detect_source(url)
        job_type = detect_job_type(combined, self._tables)
        location = detect_location(combined, self._tables)
        tags = self.extract_tags(combined, tag_limit)

        confidence = calculate_confidence(
            has_title=bool(title) and title != DEFAULT_TITLE,
            has_company=bool(self._tables.company_indicator_pattern.search(content)),
            has_job_type=job_type is not None,
            has_location=location is not None,
            is_known_source=source != "other",
        )
        return CategoryResult(
            source=source,
            job_type=job_type,
            location=location,
            tags=tuple(tags),
            confidence=confidence,
        )

    def detect_source(self, url: str) -> JobSource:
        for pattern, source in self._tables.source_rules:
            if pattern.search(url):
                return source
        return "other"

    def extract_tags(self, text: str, limit: int = DEFAULT_TAG_LIMIT) -> list[str]:
        """Walk the tag catalog in order; each entry contributes at most one tag."""
        tags: list[str] = []
        if not text or limit <= 0:
            return tags
        for patterns, tag in self._tables.tag_rules:
            if len(tags) >= limit:
                break
            if tag not in tags and any(p.search(text) for p in patterns):
                tags.append(tag)
        return tags

    def suggest_tags_from_title(self, title: str, limit: int = DEFAULT_TITLE_TAG_LIMIT) -> list[str]:
        """Seniority and role-family tags inferred from a job title alone."""
        t = self._tables
        tags: list[str] = []

        if t.title_senior_pattern.search(title):
            tags.append("Senior")
        elif t.title_junior_pattern.search(title):
            tags.append("Junior")

        if t.title_engineer_pattern.search(title):
            for patterns, tag in t.title_role_rules:
                if any(p.search(title) for p in patterns):
                    tags.append(tag)
                    break

        for patterns, tag in t.title_family_rules:
            if any(p.search(title) for p in patterns):
                tags.append(tag)

        return list(dict.fromkeys(tags))[: max(limit, 0)]


_DEFAULT_CATEGORIZER = Categorizer()


def categorize(url: str, title: str = "", content: str = "") -> CategoryResult:
    """Categorize with the default tables."""
    return _DEFAULT_CATEGORIZER.categorize(url, title, content)


def detect_source(url: str) -> JobSource:
    return _DEFAULT_CATEGORIZER.detect_source(url)


def extract_tags(text: str, limit: int = DEFAULT_TAG_LIMIT) -> list[str]:
    return _DEFAULT_CATEGORIZER.extract_tags(text, limit)


def suggest_tags_from_title(title: str, limit: int = DEFAULT_TITLE_TAG_LIMIT) -> list[str]:
    return _DEFAULT_CATEGORIZER.suggest_tags_from_title(title, limit)
