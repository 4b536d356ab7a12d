"""Rule-based job-link relatedness classifier.

Each signal contributes its weight once (weights from ClassifierConfig):

  job-board host          +40
  job path pattern        +30
  job keyword in URL      +20
  job-like subject        +25
  job-platform sender     +20
  job terms in snippet    +15  (at least two distinct terms)

Score >= 50 is "high", >= 30 "medium", else "low". A link is a job link
iff it scores at least the medium threshold.
"""

import logging
import re

from joblinks.core.config import ClassifierConfig
from joblinks.core.schemas import (
    CONFIDENCE_RANK,
    Confidence,
    MessageContext,
    RelatednessVerdict,
)
from joblinks.pipeline.normalizer import parse_url, url_host
from joblinks.pipeline.tables import DEFAULT_TABLES, LookupTables, host_matches

logger = logging.getLogger(__name__)

_SENDER_DOMAIN = re.compile(r"@([A-Za-z0-9.-]+)")


class LinkClassifier:
    """Scores URLs (plus optional message context) for "is a job posting"."""

    def __init__(
        self,
        tables: LookupTables = DEFAULT_TABLES,
        config: ClassifierConfig | None = None,
    ) -> None:
        self._tables = tables
        self._config = config or ClassifierConfig()

    def classify(self, url: str, context: MessageContext | None = None) -> RelatednessVerdict:
        """Return the relatedness verdict for a URL. Never raises."""
        cfg = self._config
        reasons: list[str] = []
        score = 0

        domain = self.match_job_board(url)
        if domain is not None:
            reasons.append(f"URL is from known job board: {domain}")
            score += cfg.job_board_weight

        if self.has_job_path(url):
            reasons.append("URL path matches job-related patterns")
            score += cfg.path_pattern_weight

        if self.has_job_keyword(url):
            reasons.append("URL contains job-related keywords")
            score += cfg.url_keyword_weight

        if context is not None:
            if context.subject and self.is_job_subject(context.subject):
                reasons.append("Message subject indicates job-related content")
                score += cfg.subject_weight

            if context.sender and self.is_job_sender(context.sender):
                reasons.append("Message sender is from known job platform")
                score += cfg.sender_weight

            if context.snippet:
                terms = self.snippet_terms(context.snippet)
                if len(terms) >= cfg.snippet_min_terms:
                    reasons.append(f"Message snippet contains job terms: {', '.join(terms)}")
                    score += cfg.snippet_weight

        confidence = self.tier(score)
        verdict = RelatednessVerdict(
            url=url,
            is_job_link=score >= cfg.job_link_threshold,
            confidence=confidence,
            score=score,
            matched_source=domain,
            reasons=tuple(reasons),
        )
        logger.debug("Classified %s: score=%d (%s)", url, score, confidence)
        return verdict

    def tier(self, score: int) -> Confidence:
        if score >= self._config.high_threshold:
            return "high"
        if score >= self._config.job_link_threshold:
            return "medium"
        return "low"

    # --- Individual signals ---

    def match_job_board(self, url: str) -> str | None:
        """Return the job-board domain the URL's host belongs to, if any."""
        host = url_host(url)
        if not host:
            return None
        for domain in self._tables.job_board_domains:
            if host_matches(host, domain):
                return domain
        return None

    def has_job_path(self, url: str) -> bool:
        parts = parse_url(url)
        if parts is None:
            return False
        path_and_query = parts.path + (f"?{parts.query}" if parts.query else "")
        return any(p.search(path_and_query) for p in self._tables.job_path_patterns)

    def has_job_keyword(self, url: str) -> bool:
        lower = url.lower()
        return any(kw in lower for kw in self._tables.job_url_keywords)

    def is_job_subject(self, subject: str) -> bool:
        return any(p.search(subject) for p in self._tables.job_subject_patterns)

    def is_job_sender(self, sender: str) -> bool:
        """True if any address in ``sender`` is at a known job-platform domain."""
        for match in _SENDER_DOMAIN.finditer(sender):
            host = match.group(1).lower().strip(".")
            if any(host_matches(host, d) for d in self._tables.job_sender_domains):
                return True
        return False

    def snippet_terms(self, snippet: str) -> list[str]:
        """Distinct job vocabulary terms present in the snippet, in table order."""
        lower = snippet.lower()
        return [term for term in self._tables.snippet_job_terms if term in lower]


_DEFAULT_CLASSIFIER = LinkClassifier()


def classify_link(url: str, context: MessageContext | None = None) -> RelatednessVerdict:
    """Classify with the default tables and weights."""
    return _DEFAULT_CLASSIFIER.classify(url, context)


def filter_job_links(
    urls: list[str],
    context: MessageContext | None = None,
    min_confidence: Confidence = "medium",
    classifier: LinkClassifier | None = None,
) -> list[RelatednessVerdict]:
    """Classify URLs and keep job links at or above ``min_confidence``."""
    classifier = classifier or _DEFAULT_CLASSIFIER
    min_rank = CONFIDENCE_RANK[min_confidence]
    verdicts = [classifier.classify(url, context) for url in urls]
    return [
        v for v in verdicts
        if v.is_job_link and CONFIDENCE_RANK[v.confidence] >= min_rank
    ]


def extract_source_from_url(url: str, tables: LookupTables = DEFAULT_TABLES) -> str:
    """Human label for the site a URL belongs to (e.g. "Linkedin", "Acme")."""
    host = url_host(url)
    if not host:
        return "Unknown"
    for domain in tables.job_board_domains:
        if host_matches(host, domain):
            return domain.split(".")[0].capitalize()
    labels = host.split(".")
    if len(labels) >= 2:
        return labels[0].capitalize()
    return "Unknown"
