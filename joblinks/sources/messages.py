"""Candidate links harvested from mailbox messages.

The mail transport supplies message metadata and text; this module pulls
URLs out of it and attaches the subject/sender/snippet as context.
"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict

from joblinks.core.schemas import CandidateLink, JobSource, MessageContext
from joblinks.sources.base import LinkSource

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"https?://[^\s<>\"{}|\\^`\[\]]+", re.IGNORECASE)
_TRAILING_PUNCTUATION = ".,;!?"


class MailMessage(BaseModel):
    """One message as delivered by the mail transport."""

    model_config = ConfigDict(frozen=True)

    message_id: str = ""
    subject: str = ""
    sender: str = ""
    snippet: str = ""
    body: str = ""
    timestamp: int = 0

    @property
    def context(self) -> MessageContext:
        return MessageContext(
            subject=self.subject or None,
            sender=self.sender or None,
            snippet=self.snippet or None,
        )


def extract_urls(text: str | None) -> list[str]:
    """Find http(s) URLs in text, trimming trailing punctuation.

    Duplicates are dropped; first-seen order is kept.
    """
    if not text:
        return []
    urls = (m.group(0).strip().rstrip(_TRAILING_PUNCTUATION) for m in URL_PATTERN.finditer(text))
    return list(dict.fromkeys(u for u in urls if u))


def links_from_message(message: MailMessage) -> list[CandidateLink]:
    """Candidate links for every URL in a message's snippet and body."""
    context = message.context
    urls = extract_urls(f"{message.snippet}\n{message.body}")
    return [CandidateLink(url=url, context=context) for url in urls]


class MessageLinkSource(LinkSource):
    """Serves links from an already-fetched list of messages, newest first."""

    def __init__(self, messages: list[MailMessage], source_id: JobSource = "gmail") -> None:
        self._messages = messages
        self._source_id = source_id

    @property
    def source_id(self) -> JobSource:
        return self._source_id

    async def fetch_links(self) -> list[CandidateLink]:
        ordered = sorted(self._messages, key=lambda m: m.timestamp, reverse=True)
        links = [link for m in ordered for link in links_from_message(m)]
        logger.debug("Harvested %d links from %d messages", len(links), len(ordered))
        return links


def load_messages_yaml(path: str | Path) -> list[MailMessage]:
    """Load messages from a YAML file with a top-level ``messages`` list."""
    path = Path(path)
    if not path.exists():
        msg = f"Messages file not found: {path}"
        raise FileNotFoundError(msg)
    raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
    if not isinstance(raw, dict):
        msg = f"{path}: expected a YAML mapping"
        raise ValueError(msg)
    entries = raw.get("messages")
    if not isinstance(entries, list):
        msg = f"{path}: expected a 'messages' list"
        raise ValueError(msg)
    return [MailMessage.model_validate(entry) for entry in entries]
