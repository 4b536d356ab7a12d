"""Tests for link sources and their YAML loaders."""

from pathlib import Path
from textwrap import dedent

import pytest

from joblinks.core.schemas import CandidateLink, MessageContext
from joblinks.sources import load_source_file
from joblinks.sources.manual import ManualLinkSource, load_links_yaml
from joblinks.sources.messages import (
    MailMessage,
    MessageLinkSource,
    extract_urls,
    links_from_message,
    load_messages_yaml,
)

# ---------------------------------------------------------------------------
# URL harvesting
# ---------------------------------------------------------------------------


class TestExtractUrls:
    def test_trailing_punctuation_trimmed(self) -> None:
        text = "Apply at https://acme.com/jobs/1. Or see https://acme.com/jobs/2!"
        assert extract_urls(text) == ["https://acme.com/jobs/1", "https://acme.com/jobs/2"]

    def test_duplicates_dropped_in_order(self) -> None:
        text = "https://b.com/x https://a.com/y https://b.com/x"
        assert extract_urls(text) == ["https://b.com/x", "https://a.com/y"]

    def test_angle_brackets(self) -> None:
        assert extract_urls("<https://acme.com/jobs/1>") == ["https://acme.com/jobs/1"]

    def test_query_kept(self) -> None:
        assert extract_urls("see https://a.com/j?id=1&utm_source=x now") == [
            "https://a.com/j?id=1&utm_source=x"
        ]

    def test_none_and_empty(self) -> None:
        assert extract_urls(None) == []
        assert extract_urls("no links here") == []


class TestMailMessage:
    def test_context_blank_fields_become_none(self) -> None:
        m = MailMessage(subject="Job alert", sender="")
        assert m.context == MessageContext(subject="Job alert")

    def test_links_from_message(self) -> None:
        m = MailMessage(
            subject="Job alert",
            snippet="New role https://a.com/jobs/1",
            body="Details: https://a.com/jobs/1 and https://a.com/jobs/2",
        )
        links = links_from_message(m)
        assert [link.url for link in links] == ["https://a.com/jobs/1", "https://a.com/jobs/2"]
        assert all(link.context == m.context for link in links)


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------


class TestMessageLinkSource:
    async def test_newest_message_first(self) -> None:
        source = MessageLinkSource(
            [
                MailMessage(message_id="old", body="https://a.com/old", timestamp=1),
                MailMessage(message_id="new", body="https://a.com/new", timestamp=2),
            ]
        )
        links = await source.fetch_links()
        assert [link.url for link in links] == ["https://a.com/new", "https://a.com/old"]
        assert source.source_id == "gmail"


class TestManualLinkSource:
    async def test_blank_entries_dropped(self) -> None:
        source = ManualLinkSource(
            ["  https://a.com/jobs/1  ", "", "   ", CandidateLink(url="https://b.com")]
        )
        links = await source.fetch_links()
        assert [link.url for link in links] == ["https://a.com/jobs/1", "https://b.com"]
        assert source.source_id == "manual"

    async def test_custom_source_id(self) -> None:
        assert ManualLinkSource([], source_id="other").source_id == "other"


# ---------------------------------------------------------------------------
# YAML loaders
# ---------------------------------------------------------------------------


class TestLoaders:
    def test_load_messages(self, tmp_path: Path) -> None:
        path = tmp_path / "inbox.yaml"
        path.write_text(dedent("""\
            messages:
              - message_id: m1
                subject: Job alert
                sender: jobs@linkedin.com
                body: https://www.linkedin.com/jobs/view/1
                timestamp: 10
        """))
        messages = load_messages_yaml(path)
        assert len(messages) == 1
        assert messages[0].sender == "jobs@linkedin.com"

    def test_load_links_mixed_entries(self, tmp_path: Path) -> None:
        path = tmp_path / "links.yaml"
        path.write_text(dedent("""\
            links:
              - https://acme.com/jobs/1
              - url: https://acme.com/jobs/2
                context:
                  subject: Referral
              - 42
              - url: ""
        """))
        entries = load_links_yaml(path)
        assert entries[0] == "https://acme.com/jobs/1"
        assert isinstance(entries[1], CandidateLink)
        assert entries[1].context == MessageContext(subject="Referral")
        assert len(entries) == 2

    def test_load_links_requires_list(self, tmp_path: Path) -> None:
        path = tmp_path / "links.yaml"
        path.write_text("links: nope\n")
        with pytest.raises(ValueError, match="links"):
            load_links_yaml(path)

    def test_missing_file(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_messages_yaml("/nonexistent/inbox.yaml")


class TestLoadSourceFile:
    def test_messages_file(self, tmp_path: Path) -> None:
        path = tmp_path / "inbox.yaml"
        path.write_text("messages: []\n")
        source = load_source_file(path)
        assert isinstance(source, MessageLinkSource)
        assert source.source_id == "gmail"

    def test_links_file(self, tmp_path: Path) -> None:
        path = tmp_path / "links.yaml"
        path.write_text("links:\n  - https://acme.com/jobs/1\n")
        source = load_source_file(path, source_id="linkedin")
        assert isinstance(source, ManualLinkSource)
        assert source.source_id == "linkedin"

    def test_unknown_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "other.yaml"
        path.write_text("items: []\n")
        with pytest.raises(ValueError):
            load_source_file(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- https://acme.com\n")
        with pytest.raises(ValueError, match="mapping"):
            load_source_file(path)

    def test_shipped_example(self) -> None:
        path = Path(__file__).resolve().parents[2] / "config" / "inbox.example.yaml"
        assert isinstance(load_source_file(path), MessageLinkSource)
