"""Orchestrator: wires link source, store lookup, batch pipeline, and DB write.

Data flow:
  1. Source fetch -> raw candidate links
  2. Store lookup -> identities the user already has
  3. Batch pipeline -> classify, filter, dedup, enrich
  4. DB insert (store-level conflicts count as duplicates)
"""

import json
import logging
import sqlite3

from joblinks.core.config import Settings
from joblinks.core.db import get_known_identities, insert_job_link
from joblinks.core.schemas import EnrichedRecord, JobSource
from joblinks.pipeline.batch import LinkPipeline
from joblinks.pipeline.normalizer import normalize_url
from joblinks.sources.base import LinkSource

logger = logging.getLogger(__name__)


class IngestResult:
    """Summary of a single ingest run."""

    def __init__(
        self,
        source: str,
        raw_count: int,
        saved: int,
        duplicates: int,
        filtered: int,
        records: list[EnrichedRecord],
    ) -> None:
        self.source = source
        self.raw_count = raw_count
        self.saved = saved
        self.duplicates = duplicates
        self.filtered = filtered
        self.records = records


async def run_ingest(
    source: LinkSource,
    conn: sqlite3.Connection,
    user_id: str,
    settings: Settings,
    default_source: JobSource | None = None,
    dry_run: bool = False,
    pipeline: LinkPipeline | None = None,
) -> IngestResult:
    """Fetch, classify, enrich and store links for one user.

    With ``dry_run`` nothing is written; ``saved`` then counts the records
    that would have been inserted.
    """
    pipeline = pipeline or LinkPipeline(
        classifier_config=settings.classifier,
        tagging=settings.tagging,
    )
    declared_source = default_source or source.source_id

    # Step 1: fetch
    links = await source.fetch_links()
    logger.info("Fetched %d candidate links from '%s'", len(links), source.source_id)

    # Step 2: identities already stored for this user
    known = get_known_identities(conn, user_id, (normalize_url(link.url) for link in links))

    # Step 3: batch pipeline
    batch = pipeline.run(
        links,
        known,
        default_source=declared_source,
        filter_job_links=settings.ingest.filter_job_links,
    )

    # Step 4: write
    if dry_run:
        saved = len(batch.accepted)
    else:
        saved = sum(1 for record in batch.accepted if insert_job_link(conn, user_id, record))
    conflicts = len(batch.accepted) - saved
    duplicates = batch.duplicate_count + conflicts

    logger.info(
        "Ingest '%s': %d raw, %d filtered, %d duplicates, %d saved",
        source.source_id, len(links), batch.filtered_count, duplicates, saved,
    )

    return IngestResult(
        source=source.source_id,
        raw_count=len(links),
        saved=saved,
        duplicates=duplicates,
        filtered=batch.filtered_count,
        records=list(batch.accepted),
    )


def export_records_json(records: list[EnrichedRecord]) -> str:
    """Export enriched records as a JSON string."""
    data = [record.model_dump(mode="json") for record in records]
    return json.dumps(data, indent=2)
