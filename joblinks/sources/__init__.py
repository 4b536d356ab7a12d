"""Link sources and an input-file loader.

Usage:
    from joblinks.sources import load_source_file

    source = load_source_file("inbox.yaml")
    links = await source.fetch_links()
"""

from pathlib import Path
from typing import Any

import yaml

from joblinks.core.schemas import JobSource
from joblinks.sources.base import LinkSource
from joblinks.sources.manual import ManualLinkSource, load_links_yaml
from joblinks.sources.messages import MessageLinkSource, load_messages_yaml

__all__ = ["LinkSource", "ManualLinkSource", "MessageLinkSource", "load_source_file"]


def load_source_file(path: str | Path, source_id: JobSource | None = None) -> LinkSource:
    """Build a source from a YAML file holding ``messages`` or ``links``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file has neither key.
    """
    path = Path(path)
    if not path.exists():
        msg = f"Input file not found: {path}"
        raise FileNotFoundError(msg)
    raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
    if not isinstance(raw, dict):
        msg = f"{path}: expected a YAML mapping"
        raise ValueError(msg)

    if "messages" in raw:
        messages = load_messages_yaml(path)
        return MessageLinkSource(messages, source_id=source_id or "gmail")
    if "links" in raw:
        return ManualLinkSource(load_links_yaml(path), source_id=source_id or "manual")

    msg = f"{path}: expected a 'messages' or 'links' list"
    raise ValueError(msg)
