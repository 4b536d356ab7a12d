"""Directly submitted candidate links."""

import logging
from pathlib import Path
from typing import Any

import yaml

from joblinks.core.schemas import CandidateLink, JobSource, MessageContext
from joblinks.sources.base import LinkSource

logger = logging.getLogger(__name__)


class ManualLinkSource(LinkSource):
    """Links submitted by hand, as bare URLs or with message context.

    Blank URLs are dropped and surrounding whitespace is stripped.
    """

    def __init__(
        self,
        entries: list[str | CandidateLink],
        source_id: JobSource = "manual",
    ) -> None:
        self._links: list[CandidateLink] = []
        for entry in entries:
            if isinstance(entry, CandidateLink):
                self._links.append(entry)
            elif isinstance(entry, str) and entry.strip():
                self._links.append(CandidateLink(url=entry.strip()))
        skipped = len(entries) - len(self._links)
        if skipped:
            logger.debug("ManualLinkSource: skipped %d blank entries", skipped)
        self._source_id = source_id

    @property
    def source_id(self) -> JobSource:
        return self._source_id

    async def fetch_links(self) -> list[CandidateLink]:
        return list(self._links)


def load_links_yaml(path: str | Path) -> list[str | CandidateLink]:
    """Load a ``links`` list whose entries are URLs or ``{url, context}`` maps."""
    path = Path(path)
    if not path.exists():
        msg = f"Links file not found: {path}"
        raise FileNotFoundError(msg)
    raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
    if not isinstance(raw, dict):
        msg = f"{path}: expected a YAML mapping"
        raise ValueError(msg)
    entries = raw.get("links")
    if not isinstance(entries, list):
        msg = f"{path}: expected a 'links' list"
        raise ValueError(msg)

    result: list[str | CandidateLink] = []
    for entry in entries:
        if isinstance(entry, str):
            result.append(entry)
        elif isinstance(entry, dict) and str(entry.get("url") or "").strip():
            context = entry.get("context")
            result.append(
                CandidateLink(
                    url=entry["url"],
                    context=MessageContext.model_validate(context) if context else None,
                )
            )
        else:
            logger.warning("Skipping invalid link entry in %s: %r", path, entry)
    return result
