"""Employment type and location detection shared by extractor and categorizer.

Both detectors walk an ordered rule list and return the first hit, so the
metadata extractor and the categorizer always agree on the same text.
"""

from joblinks.pipeline.tables import DEFAULT_TABLES, LookupTables


def detect_job_type(text: str, tables: LookupTables = DEFAULT_TABLES) -> str | None:
    """Return the first employment type whose patterns match ``text``.

    Precedence: Full-time, Part-time, Contract, Freelance, Internship,
    Temporary, Remote, Hybrid, On-site.
    """
    if not text:
        return None
    for patterns, job_type in tables.job_type_rules:
        if any(p.search(text) for p in patterns):
            return job_type
    return None


def detect_location(text: str, tables: LookupTables = DEFAULT_TABLES) -> str | None:
    """Return a location string found in ``text``, or None.

    Order: remote indicators ("Remote"), "City, ST", a major city
    (with a state code if one follows closely), then a country.
    """
    if not text:
        return None

    if tables.remote_location_pattern.search(text):
        return "Remote"

    match = tables.city_state_pattern.search(text)
    if match:
        return match.group(0)

    match = tables.major_city_pattern.search(text)
    if match:
        window = text[match.end() : match.end() + tables.state_lookahead_chars]
        state = tables.state_code_pattern.search(window)
        if state:
            return f"{match.group(0)}, {state.group(0)}"
        return match.group(0)

    match = tables.country_pattern.search(text)
    if match:
        return match.group(0)

    return None
