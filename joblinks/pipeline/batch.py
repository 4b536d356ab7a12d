"""Batch pipeline: classify -> filter -> dedup -> extract + categorize.

Data flow:
  1. Classify every candidate link (verdicts are kept even when the
     relatedness filter is off - records carry the confidence tier)
  2. JobLinkFilter (when enabled)     -> filtered_count
  3. IdentityDedupFilter              -> duplicate_count
  4. Extract metadata + categorize    -> one EnrichedRecord per survivor

Per-link work is independent; only step 3 depends on order.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from joblinks.core.config import ClassifierConfig, TaggingConfig
from joblinks.core.schemas import (
    BatchResult,
    CandidateLink,
    ClassifiedLink,
    EnrichedRecord,
    JobSource,
)
from joblinks.pipeline.categorizer import Categorizer
from joblinks.pipeline.classifier import LinkClassifier
from joblinks.pipeline.extractor import MetadataExtractor
from joblinks.pipeline.matcher import IdentityDedupFilter, JobLinkFilter
from joblinks.pipeline.normalizer import normalize_url
from joblinks.pipeline.tables import DEFAULT_TABLES, LookupTables

logger = logging.getLogger(__name__)


class LinkPipeline:
    """Turns candidate links into enriched, de-duplicated records."""

    def __init__(
        self,
        tables: LookupTables = DEFAULT_TABLES,
        classifier_config: ClassifierConfig | None = None,
        tagging: TaggingConfig | None = None,
    ) -> None:
        self._tables = tables
        self._classifier = LinkClassifier(tables, classifier_config)
        self._extractor = MetadataExtractor(tables)
        self._categorizer = Categorizer(tables)
        self._tagging = tagging or TaggingConfig()

    def run(
        self,
        links: Iterable[CandidateLink],
        known_identities: Iterable[str] = (),
        *,
        default_source: JobSource = "gmail",
        filter_job_links: bool = True,
        extracted_at: datetime | None = None,
    ) -> BatchResult:
        """Process one batch.

        Args:
            links: Candidate links, in arrival order.
            known_identities: Normalized URLs the store already holds.
            default_source: Source recorded unless a preferred job board matched.
            filter_job_links: Drop links the classifier rejects.
            extracted_at: Timestamp stamped on every record (default: now).

        Returns:
            BatchResult with accepted records and rejection counts.
        """
        classified = [
            ClassifiedLink(link=link, verdict=self._classifier.classify(link.url, link.context))
            for link in links
        ]

        related = JobLinkFilter()(classified) if filter_job_links else classified
        filtered_count = len(classified) - len(related)

        unique = IdentityDedupFilter(known_identities)(related)
        duplicate_count = len(related) - len(unique)

        stamp = extracted_at or datetime.now()
        accepted = tuple(self.enrich(c, default_source, stamp) for c in unique)

        logger.debug(
            "Batch: %d in, %d filtered, %d duplicates, %d accepted",
            len(classified), filtered_count, duplicate_count, len(accepted),
        )
        return BatchResult(
            accepted=accepted,
            filtered_count=filtered_count,
            duplicate_count=duplicate_count,
        )

    def enrich(
        self,
        classified: ClassifiedLink,
        default_source: JobSource,
        extracted_at: datetime,
    ) -> EnrichedRecord:
        """Merge verdict, metadata and categories into one record."""
        link, verdict = classified.link, classified.verdict
        context = link.context
        metadata = self._extractor.extract(link.url, context)

        content = " ".join(
            [
                (context.subject or "") if context else "",
                (context.snippet or "") if context else "",
            ]
        ).strip()
        category = self._categorizer.categorize(
            link.url, metadata.title, content, self._tagging.content_tag_limit
        )

        return EnrichedRecord(
            url=link.url,
            normalized_url=normalize_url(link.url),
            title=metadata.title,
            company=metadata.company,
            location=metadata.location or category.location,
            job_type=metadata.job_type or category.job_type,
            source=self.resolve_source(verdict.matched_source, default_source),
            tags=tuple(self.record_tags(metadata.title, content)),
            confidence=verdict.confidence,
            extraction_confidence=category.confidence,
            email_subject=context.subject if context else None,
            email_sender=context.sender if context else None,
            email_snippet=context.snippet if context else None,
            extracted_at=extracted_at,
        )

    def resolve_source(self, matched_domain: str | None, default_source: JobSource) -> JobSource:
        """Prefer linkedin/indeed/glassdoor when the classifier matched one."""
        if matched_domain:
            label = matched_domain.split(".")[0].lower()
            if label in self._tables.preferred_board_sources:
                return label  # type: ignore[return-value]
        return default_source

    def record_tags(self, title: str, content: str) -> list[str]:
        """Title suggestions first, then text tags; unique and capped."""
        cfg = self._tagging
        title_tags = self._categorizer.suggest_tags_from_title(title, cfg.title_tag_limit)
        text_tags = self._categorizer.extract_tags(
            f"{title} {content}".strip(), cfg.record_content_tag_limit
        )
        return list(dict.fromkeys(title_tags + text_tags))[: cfg.record_tag_limit]


def enrich_batch(
    links: Iterable[CandidateLink],
    known_identities: Iterable[str] = (),
    *,
    default_source: JobSource = "gmail",
    filter_job_links: bool = True,
) -> BatchResult:
    """Run the batch pipeline with default tables and config."""
    return LinkPipeline().run(
        links,
        known_identities,
        default_source=default_source,
        filter_job_links=filter_job_links,
    )
