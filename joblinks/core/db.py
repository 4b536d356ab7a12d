"""SQLite storage for enriched job links.

Uniqueness is enforced on (user_id, normalized_url); inserts that collide
are skipped, not raised. Stored fields are advisory: users may override
any of them with ``update_job_link``.
"""

import json
import sqlite3
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

from joblinks.core.schemas import EnrichedRecord

JOB_STATUSES = ("saved", "applied", "interview", "rejected", "offer")
JOB_TYPES = (
    "Full-time",
    "Part-time",
    "Contract",
    "Freelance",
    "Internship",
    "Temporary",
    "Remote",
    "Hybrid",
    "On-site",
)

_JOB_LINKS_TABLE = """
CREATE TABLE IF NOT EXISTS job_links (
    id                    INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id               TEXT    NOT NULL,
    url                   TEXT    NOT NULL,
    normalized_url        TEXT    NOT NULL,
    title                 TEXT    NOT NULL,
    company               TEXT    NOT NULL,
    location              TEXT,
    job_type              TEXT,
    source                TEXT    NOT NULL DEFAULT 'other',
    status                TEXT    NOT NULL DEFAULT 'saved',
    confidence            TEXT    NOT NULL DEFAULT 'low',
    extraction_confidence TEXT    NOT NULL DEFAULT 'low',
    email_subject         TEXT,
    email_sender          TEXT,
    tags                  TEXT    NOT NULL DEFAULT '[]',
    notes                 TEXT,
    extracted_at          TEXT    NOT NULL,
    created_at            TEXT    NOT NULL,
    updated_at            TEXT    NOT NULL,
    UNIQUE(user_id, normalized_url)
);
"""

# Identities per IN (...) lookup; old SQLite builds cap bound parameters at 999.
IDENTITY_QUERY_CHUNK = 500

# Columns a user may override after extraction.
_UPDATABLE_FIELDS = ("status", "title", "company", "location", "job_type", "notes", "tags")


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(_JOB_LINKS_TABLE)
    conn.commit()
    return conn


def insert_job_link(conn: sqlite3.Connection, user_id: str, record: EnrichedRecord) -> bool:
    """Insert a record, skipping it if (user_id, normalized_url) exists.

    Returns True if a new row was inserted, False if it was a duplicate.
    """
    now = datetime.now().isoformat()
    try:
        conn.execute(
            """
            INSERT INTO job_links
                (user_id, url, normalized_url, title, company, location, job_type,
                 source, confidence, extraction_confidence, email_subject,
                 email_sender, tags, extracted_at, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                user_id,
                record.url,
                record.normalized_url,
                record.title,
                record.company,
                record.location,
                record.job_type,
                record.source,
                record.confidence,
                record.extraction_confidence,
                record.email_subject,
                record.email_sender,
                json.dumps(list(record.tags)),
                record.extracted_at.isoformat(),
                now,
                now,
            ),
        )
        conn.commit()
        return True
    except sqlite3.IntegrityError:
        return False


def get_known_identities(
    conn: sqlite3.Connection,
    user_id: str,
    identities: Iterable[str] | None = None,
) -> set[str]:
    """Return the user's stored normalized URLs, optionally limited to ``identities``."""
    if identities is None:
        rows = conn.execute(
            "SELECT normalized_url FROM job_links WHERE user_id = ?", (user_id,)
        ).fetchall()
        return {row["normalized_url"] for row in rows}

    wanted = sorted(set(identities))
    found: set[str] = set()
    for start in range(0, len(wanted), IDENTITY_QUERY_CHUNK):
        chunk = wanted[start : start + IDENTITY_QUERY_CHUNK]
        placeholders = ", ".join("?" for _ in chunk)
        rows = conn.execute(
            f"SELECT normalized_url FROM job_links WHERE user_id = ? AND normalized_url IN ({placeholders})",
            (user_id, *chunk),
        ).fetchall()
        found.update(row["normalized_url"] for row in rows)
    return found


def list_job_links(
    conn: sqlite3.Connection,
    user_id: str,
    status: str | None = None,
    source: str | None = None,
    search: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[dict[str, Any]]:
    """Return the user's job links, newest first, with tags decoded."""
    clauses = ["user_id = ?"]
    params: list[Any] = [user_id]
    if status:
        clauses.append("status = ?")
        params.append(status)
    if source:
        clauses.append("source = ?")
        params.append(source)
    if search:
        # LIKE is case-insensitive for ASCII in SQLite.
        clauses.append("(title LIKE ? OR company LIKE ? OR url LIKE ? OR notes LIKE ?)")
        pattern = f"%{search}%"
        params.extend([pattern] * 4)

    sql = f"SELECT * FROM job_links WHERE {' AND '.join(clauses)} ORDER BY created_at DESC, id DESC"
    if limit is not None:
        sql += " LIMIT ? OFFSET ?"
        params.extend([limit, offset])
    elif offset:
        sql += " LIMIT -1 OFFSET ?"
        params.append(offset)

    rows = conn.execute(sql, params).fetchall()
    return [_row_to_dict(row) for row in rows]


def job_link_stats(conn: sqlite3.Connection, user_id: str) -> dict[str, Any]:
    """Return total, per-status and per-source counts for a user."""
    by_status = {s: 0 for s in JOB_STATUSES}
    for row in conn.execute(
        "SELECT status, COUNT(*) AS n FROM job_links WHERE user_id = ? GROUP BY status",
        (user_id,),
    ):
        by_status[row["status"]] = row["n"]

    by_source: dict[str, int] = {}
    for row in conn.execute(
        "SELECT source, COUNT(*) AS n FROM job_links WHERE user_id = ? GROUP BY source",
        (user_id,),
    ):
        by_source[row["source"]] = row["n"]

    return {"total": sum(by_status.values()), "by_status": by_status, "by_source": by_source}


def update_job_link(
    conn: sqlite3.Connection,
    user_id: str,
    link_id: int,
    **fields: Any,
) -> bool:
    """Override stored fields of one job link.

    Returns True if the row was updated, False if it does not exist.

    Raises:
        ValueError: On unknown fields, an invalid status or job type, or no fields.
    """
    unknown = set(fields) - set(_UPDATABLE_FIELDS)
    if unknown:
        msg = f"Cannot update fields: {sorted(unknown)}"
        raise ValueError(msg)
    if not fields:
        msg = "No fields to update"
        raise ValueError(msg)
    if "status" in fields and fields["status"] not in JOB_STATUSES:
        msg = f"status must be one of {list(JOB_STATUSES)}, got '{fields['status']}'"
        raise ValueError(msg)
    if fields.get("job_type") is not None and fields["job_type"] not in JOB_TYPES:
        msg = f"job_type must be one of {list(JOB_TYPES)}, got '{fields['job_type']}'"
        raise ValueError(msg)
    if "tags" in fields:
        if not isinstance(fields["tags"], (list, tuple)):
            msg = "tags must be a list"
            raise ValueError(msg)
        fields["tags"] = json.dumps(list(fields["tags"]))

    columns = [name for name in _UPDATABLE_FIELDS if name in fields]
    assignments = ", ".join(f"{name} = ?" for name in columns)
    cursor = conn.execute(
        f"UPDATE job_links SET {assignments}, updated_at = ? WHERE id = ? AND user_id = ?",
        (*[fields[name] for name in columns], datetime.now().isoformat(), link_id, user_id),
    )
    conn.commit()
    return cursor.rowcount > 0


def _row_to_dict(row: sqlite3.Row) -> dict[str, Any]:
    data = dict(row)
    data["tags"] = json.loads(data.get("tags") or "[]")
    return data
