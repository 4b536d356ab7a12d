"""URL identity normalization for deduplication.

Pure functions - zero I/O. The normalized identity is the key the store
enforces uniqueness on, per user.

The whole identity is lower-cased, path included, so two resources that
differ only in path letter case share one identity. That merge is accepted
behaviour.
"""

import logging
import re
from urllib.parse import SplitResult, parse_qsl, quote_plus, urlencode, urlsplit

logger = logging.getLogger(__name__)

# Query parameters that only carry tracking/referral state (compared lower-cased).
TRACKING_PARAMS: frozenset[str] = frozenset(
    {
        "ref",
        "source",
        "fbclid",
        "gclid",
        "mc_cid",
        "mc_eid",
        "trk",
        "trackingid",
        "refid",
        "originalreferer",
    }
)
TRACKING_PREFIXES: tuple[str, ...] = ("utm_",)

_WWW_PREFIX = re.compile(r"^(?:www\.)+")
_WHITESPACE = re.compile(r"\s")
_TRAILING_SLASHES = re.compile(r"[/\s]+$")


def parse_url(url: str) -> SplitResult | None:
    """Split an absolute URL, or return None if it has no scheme or host.

    Never raises: ``urlsplit`` errors (bad IPv6 brackets, etc.) yield None.
    A host containing whitespace is rejected as malformed.
    """
    try:
        parts = urlsplit(url.strip())
        host = parts.hostname
    except ValueError:
        logger.debug("Unparseable URL %r", url)
        return None
    if not parts.scheme or not host or _WHITESPACE.search(host):
        return None
    return parts


def url_host(url: str) -> str:
    """Return the lower-cased host without a leading ``www.``, or ""."""
    parts = parse_url(url)
    if parts is None:
        return ""
    return _WWW_PREFIX.sub("", parts.hostname or "")


def is_tracking_param(name: str) -> bool:
    key = name.lower()
    return key in TRACKING_PARAMS or key.startswith(TRACKING_PREFIXES)


def normalize_url(url: str) -> str:
    """Canonicalize a URL into its deduplication identity.

    Drops tracking query parameters, the fragment, credentials and port;
    strips ``www.`` and any trailing run of slashes and whitespace;
    lower-cases everything. Total: an unparseable input (including a host
    with whitespace in it) comes back lower-cased as-is. Idempotent.

    Example::

        >>> normalize_url("https://www.Example.com/Jobs/42/?utm_source=x&id=7")
        'https://example.com/jobs/42?id=7'
    """
    parts = parse_url(url)
    if parts is None:
        return url.lower()

    host = _WWW_PREFIX.sub("", parts.hostname or "")
    if not host:
        return url.lower()
    if ":" in host:
        host = f"[{host}]"

    params = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if not is_tracking_param(key)
    ]

    path = _TRAILING_SLASHES.sub("", parts.path)
    normalized = f"{parts.scheme}://{host}{path}"
    if params:
        normalized += "?" + urlencode(params, quote_via=quote_plus)
    return normalized.lower()
