"""Filter chain for classified links.

Filter order:
  1. JobLinkFilter          - drops links the classifier rejected (optional)
  2. IdentityDedupFilter    - drops links whose normalized identity is already
                              known, or was accepted earlier in the same batch
"""

import logging
from collections.abc import Callable, Iterable

from joblinks.core.schemas import ClassifiedLink
from joblinks.pipeline.normalizer import normalize_url

logger = logging.getLogger(__name__)

# A filter is a callable that takes classified links and returns a subset.
Filter = Callable[[list[ClassifiedLink]], list[ClassifiedLink]]


class JobLinkFilter:
    """Keep only links whose verdict says they are job links."""

    def __call__(self, links: list[ClassifiedLink]) -> list[ClassifiedLink]:
        result = [c for c in links if c.verdict.is_job_link]
        removed = len(links) - len(result)
        if removed:
            logger.debug("JobLinkFilter: removed %d non-job links", removed)
        return result


class IdentityDedupFilter:
    """Remove links whose normalized URL is known or already seen.

    Stateful: a single left-to-right pass reserves each accepted identity, so
    a later link in the same batch (or a later call) with the same identity
    is dropped.
    """

    def __init__(self, known_identities: Iterable[str] = ()) -> None:
        self._seen: set[str] = set(known_identities)

    def __call__(self, links: list[ClassifiedLink]) -> list[ClassifiedLink]:
        result: list[ClassifiedLink] = []
        for c in links:
            identity = normalize_url(c.link.url)
            if identity not in self._seen:
                self._seen.add(identity)
                result.append(c)
        deduped = len(links) - len(result)
        if deduped:
            logger.debug("IdentityDedupFilter: removed %d duplicates", deduped)
        return result

    @property
    def seen(self) -> frozenset[str]:
        return frozenset(self._seen)


def run_filter_chain(
    links: list[ClassifiedLink],
    filters: list[Filter],
) -> list[ClassifiedLink]:
    """Apply filters in order, returning the surviving links."""
    result = links
    for f in filters:
        result = f(result)
    return result
