"""Inbox search query builder for the mail transport.

Pure functions - zero network dependency.
"""

import logging

from joblinks.core.config import MailQueryConfig

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 50
MAX_RESULTS_LIMIT = 100

JOB_SEARCH_QUERIES: tuple[str, ...] = (
    # Job vocabulary in the subject
    "subject:(job OR career OR position OR opportunity OR hiring OR opening OR vacancy OR recruit)",
    # Job platform senders
    "from:(linkedin.com OR indeed.com OR glassdoor.com OR ziprecruiter.com OR dice.com "
    "OR hired.com OR wellfound.com OR angel.co)",
    # Application lifecycle
    "subject:(application OR applied OR interview OR offer)",
    # Recruiters
    "from:(recruiter OR talent OR hr OR hiring OR careers)",
)


def build_job_search_query(config: MailQueryConfig) -> str:
    """Build the inbox search string.

    With the job filter on, restricts to the inbox, the last
    ``newer_than_days`` days, and any of the job-related clauses.
    """
    if not config.use_job_filter:
        return "in:inbox"
    combined = " OR ".join(JOB_SEARCH_QUERIES)
    return f"in:inbox newer_than:{config.newer_than_days}d ({combined})"


def clamp_max_results(value: str | int | None) -> int:
    """Parse a requested page size, defaulting to 50 and capping at 100."""
    try:
        requested = int(value) if value is not None else DEFAULT_MAX_RESULTS
    except (TypeError, ValueError):
        logger.warning("Invalid max_results %r - using %d", value, DEFAULT_MAX_RESULTS)
        requested = DEFAULT_MAX_RESULTS
    if requested <= 0:
        requested = DEFAULT_MAX_RESULTS
    return min(requested, MAX_RESULTS_LIMIT)
