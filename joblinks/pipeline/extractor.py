"""Heuristic job metadata extraction from URLs and message context.

Title and company come from URL structure, optionally overridden by the
message subject; location and employment type come only from the
subject + snippet text. Every function is total: when nothing matches, the
committed fallbacks "Job Opportunity" / "Unknown Company" are returned.
"""

import logging
import re
from urllib.parse import unquote

from joblinks.core.schemas import (
    DEFAULT_COMPANY,
    DEFAULT_TITLE,
    ExtractedMetadata,
    MessageContext,
)
from joblinks.pipeline.normalizer import parse_url, url_host
from joblinks.pipeline.signals import detect_job_type, detect_location
from joblinks.pipeline.tables import DEFAULT_TABLES, LookupTables, host_matches

logger = logging.getLogger(__name__)

_NUMERIC_SEGMENT = re.compile(r"^\d+$")
_LEADING_ID = re.compile(r"^\d+[-_]?")
_SLUG_SEPARATORS = re.compile(r"[-_]")


class MetadataExtractor:
    """Derives title, company, location and employment type for a link."""

    def __init__(self, tables: LookupTables = DEFAULT_TABLES) -> None:
        self._tables = tables

    def extract(self, url: str, context: MessageContext | None = None) -> ExtractedMetadata:
        """Extract metadata from a URL and optional message context.

        A subject-derived title replaces the URL title; a subject-derived
        company is used only when the URL gave no company.
        """
        title = self.title_from_url(url)
        company = self.company_from_url(url)
        location: str | None = None
        job_type: str | None = None

        if context is not None:
            if context.subject:
                subject_title = self.title_from_subject(context.subject)
                if subject_title and subject_title != DEFAULT_TITLE:
                    title = subject_title

                subject_company = self.company_from_subject(context.subject)
                if subject_company and company == DEFAULT_COMPANY:
                    company = subject_company

            combined = " ".join([context.subject or "", context.snippet or ""])
            location = detect_location(combined, self._tables)
            job_type = detect_job_type(combined, self._tables)

        return ExtractedMetadata(title=title, company=company, location=location, job_type=job_type)

    # --- URL-derived fields ---

    def title_from_url(self, url: str) -> str:
        """Pick the last meaningful path segment and format it as a title."""
        parts = parse_url(url)
        if parts is None:
            return DEFAULT_TITLE

        segments = [s for s in parts.path.split("/") if s]
        for segment in reversed(segments):
            segment = unquote(segment)
            if _NUMERIC_SEGMENT.match(segment):
                continue
            if segment.lower() in self._tables.title_stop_segments:
                continue
            cleaned = _LEADING_ID.sub("", segment)
            if cleaned:
                return self.format_title(cleaned)
        return DEFAULT_TITLE

    def company_from_url(self, url: str) -> str:
        """Resolve the hiring company from the URL host (and ATS path)."""
        parts = parse_url(url)
        host = url_host(url)
        if parts is None or not host:
            return DEFAULT_COMPANY
        if any(host_matches(host, d) for d in self._tables.reserved_domains):
            return DEFAULT_COMPANY

        for domain, company in self._tables.domain_to_company:
            if host_matches(host, domain):
                return company

        if any(host_matches(host, d) for d in self._tables.path_company_hosts):
            segments = [s for s in parts.path.split("/") if s]
            if segments:
                return format_company_name(unquote(segments[0]))

        for domain, label in self._tables.opaque_company_hosts:
            if host_matches(host, domain):
                return label

        labels = host.split(".")
        if len(labels) >= 2:
            if labels[0] in self._tables.careers_subdomains:
                return format_company_name(labels[1])
            return format_company_name(labels[0])
        return DEFAULT_COMPANY

    # --- Subject-derived fields ---

    def company_from_subject(self, subject: str) -> str | None:
        for pattern in self._tables.subject_company_patterns:
            match = pattern.search(subject)
            if match and match.group(1):
                company = match.group(1).strip()
                if company and company not in self._tables.subject_company_stopwords:
                    return company
        return None

    def title_from_subject(self, subject: str) -> str | None:
        for pattern in self._tables.subject_title_patterns:
            match = pattern.search(subject)
            if match and match.group(1):
                title = match.group(1).strip()
                if title:
                    return title
        return None

    def format_title(self, slug: str) -> str:
        """Title-case a slug, keeping connective words lower-case unless first."""
        words = [w for w in _SLUG_SEPARATORS.sub(" ", slug).split(" ") if w]
        if not words:
            return DEFAULT_TITLE
        formatted = [
            w.lower() if w.lower() in self._tables.title_minor_words else w.capitalize()
            for w in words
        ]
        text = " ".join(formatted)
        return text[:1].upper() + text[1:]


def format_company_name(slug: str) -> str:
    """Turn a URL slug like ``acme-robotics`` into ``Acme Robotics``."""
    words = [w for w in _SLUG_SEPARATORS.sub(" ", slug).split(" ") if w]
    if not words:
        return DEFAULT_COMPANY
    return " ".join(w.capitalize() for w in words)


_DEFAULT_EXTRACTOR = MetadataExtractor()


def extract_metadata(url: str, context: MessageContext | None = None) -> ExtractedMetadata:
    """Extract metadata with the default tables."""
    return _DEFAULT_EXTRACTOR.extract(url, context)


def extract_title_from_url(url: str) -> str:
    return _DEFAULT_EXTRACTOR.title_from_url(url)


def extract_company_from_url(url: str) -> str:
    return _DEFAULT_EXTRACTOR.company_from_url(url)


def extract_title_from_subject(subject: str) -> str | None:
    return _DEFAULT_EXTRACTOR.title_from_subject(subject)


def extract_company_from_subject(subject: str) -> str | None:
    return _DEFAULT_EXTRACTOR.company_from_subject(subject)
