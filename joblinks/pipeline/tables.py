"""Lookup tables for link classification, extraction and tagging.

All tables are immutable and bundled into one frozen ``LookupTables``
instance that callers inject into the classifier, extractor and
categorizer. Ordered rules are tuples of ``(patterns, label)`` pairs:
the first matching entry wins, so tuple order is part of the contract.
"""

import re
from dataclasses import dataclass

from joblinks.core.schemas import JobSource

# A rule maps any of several patterns to one label.
Rule = tuple[tuple[re.Pattern[str], ...], str]


def _rule(label: str, *patterns: str, flags: int = re.IGNORECASE) -> Rule:
    return tuple(re.compile(p, flags) for p in patterns), label


# =============================================================================
# RELATEDNESS SIGNALS
# =============================================================================

JOB_BOARD_DOMAINS: tuple[str, ...] = (
    "linkedin.com",
    "indeed.com",
    "glassdoor.com",
    "monster.com",
    "ziprecruiter.com",
    "careerbuilder.com",
    "dice.com",
    "simplyhired.com",
    "lever.co",
    "greenhouse.io",
    "workday.com",
    "myworkdayjobs.com",
    "icims.com",
    "smartrecruiters.com",
    "jobvite.com",
    "breezy.hr",
    "ashbyhq.com",
    "angel.co",
    "wellfound.com",
    "hired.com",
    "weworkremotely.com",
    "remoteok.com",
    "flexjobs.com",
    "remote.co",
    "builtin.com",
    "themuse.com",
    "idealist.org",
    "usajobs.gov",
    "governmentjobs.com",
    "naukri.com",
    "seek.com.au",
    "reed.co.uk",
    "totaljobs.com",
    "cwjobs.co.uk",
    "stepstone.de",
    "xing.com",
    "hh.ru",
)

# Matched against path + query.
JOB_PATH_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"/jobs?/",
        r"/careers?/",
        r"/positions?/",
        r"/openings?/",
        r"/opportunities?/",
        r"/vacancies?/",
        r"/hiring/",
        r"/apply/",
        r"/job-",
        r"/career-",
        r"-job/",
        r"-jobs/",
        r"/job_",
        r"/join-us",
        r"/join-our-team",
        r"/work-with-us",
        r"/employment",
        r"/recruiting",
    )
)

# Substrings of the lower-cased URL.
JOB_URL_KEYWORDS: tuple[str, ...] = (
    "job",
    "career",
    "position",
    "opening",
    "opportunity",
    "vacancy",
    "hiring",
    "apply",
    "employment",
    "recruit",
    "talent",
    "work-with-us",
    "join-us",
    "join-our-team",
)

JOB_SUBJECT_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"job\s*(?:opportunity|opening|position|alert|posting)",
        r"career\s*(?:opportunity|opening|position)",
        r"we(?:'re|\s*are)\s*hiring",
        r"invitation\s*to\s*(?:apply|interview)",
        r"application\s*(?:received|status|update)",
        r"thank\s*you\s*for\s*(?:applying|your\s*application)",
        r"interview\s*(?:invitation|request|schedule)",
        r"new\s*job\s*(?:match|alert|recommendation)",
        r"position\s*(?:available|open)",
        r"join\s*(?:our\s*team|us)",
        r"talent\s*(?:network|community)",
        r"recruiter",
        r"hiring\s*manager",
    )
)

JOB_SENDER_DOMAINS: tuple[str, ...] = (
    "linkedin.com",
    "indeed.com",
    "glassdoor.com",
    "monster.com",
    "ziprecruiter.com",
    "dice.com",
    "hired.com",
    "angel.co",
    "wellfound.com",
    "lever.co",
    "greenhouse.io",
    "workday.com",
    "icims.com",
    "smartrecruiters.com",
    "jobvite.com",
    "ashbyhq.com",
    "breezy.hr",
)

SNIPPET_JOB_TERMS: tuple[str, ...] = (
    "job",
    "position",
    "role",
    "opportunity",
    "career",
    "apply",
    "hiring",
)


# =============================================================================
# COMPANY AND TITLE EXTRACTION
# =============================================================================

# Checked in order. ATS hosts (lever.co, greenhouse.io) and linkedin.com are
# deliberately absent: they have dedicated rules in the extractor.
DOMAIN_TO_COMPANY: tuple[tuple[str, str], ...] = (
    ("indeed.com", "Indeed"),
    ("glassdoor.com", "Glassdoor"),
    ("monster.com", "Monster"),
    ("ziprecruiter.com", "ZipRecruiter"),
    ("dice.com", "Dice"),
    ("hired.com", "Hired"),
    ("angel.co", "AngelList"),
    ("wellfound.com", "Wellfound"),
    ("workday.com", "Workday"),
    ("google.com", "Google"),
    ("amazon.com", "Amazon"),
    ("amazon.jobs", "Amazon"),
    ("microsoft.com", "Microsoft"),
    ("apple.com", "Apple"),
    ("meta.com", "Meta"),
    ("metacareers.com", "Meta"),
    ("facebook.com", "Meta"),
    ("netflix.com", "Netflix"),
    ("salesforce.com", "Salesforce"),
    ("adobe.com", "Adobe"),
    ("oracle.com", "Oracle"),
    ("ibm.com", "IBM"),
    ("intel.com", "Intel"),
    ("nvidia.com", "NVIDIA"),
    ("spotify.com", "Spotify"),
    ("uber.com", "Uber"),
    ("lyft.com", "Lyft"),
    ("airbnb.com", "Airbnb"),
    ("stripe.com", "Stripe"),
    ("shopify.com", "Shopify"),
    ("twitter.com", "X (Twitter)"),
    ("x.com", "X (Twitter)"),
)

# Hosts whose first path segment is the hiring company's slug.
PATH_COMPANY_HOSTS: tuple[str, ...] = ("lever.co", "greenhouse.io")

# Hosts whose postings never reveal the company in the URL.
OPAQUE_COMPANY_HOSTS: tuple[tuple[str, str], ...] = (("linkedin.com", "LinkedIn Job"),)

CAREERS_SUBDOMAINS: frozenset[str] = frozenset({"careers", "jobs", "work", "talent", "recruiting"})

# RFC 2606 / RFC 6761 names that never identify a real employer.
RESERVED_DOMAINS: tuple[str, ...] = (
    "example.com",
    "example.org",
    "example.net",
    "example.edu",
    "example",
    "test",
    "invalid",
    "localhost",
)

TITLE_STOP_SEGMENTS: frozenset[str] = frozenset(
    {"jobs", "job", "careers", "positions", "apply", "view"}
)

TITLE_MINOR_WORDS: frozenset[str] = frozenset({"and", "or", "of", "the", "in", "at", "for"})

SUBJECT_COMPANY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"(?:at|from|with)\s+([A-Z][A-Za-z0-9\s&]+?)(?:\s+[-–—]|\s*[|:]|\s+is|\s+has|\s*$)",
        re.IGNORECASE,
    ),
    re.compile(r"^([A-Z][A-Za-z0-9\s&]+?)(?:\s+[-–—]|\s*[|:]|\s+is|\s+has)"),
    re.compile(r"application\s+(?:to|for|at)\s+([A-Z][A-Za-z0-9\s&]+)", re.IGNORECASE),
)

SUBJECT_COMPANY_STOPWORDS: frozenset[str] = frozenset(
    {"Your", "New", "The", "Job", "We", "Thank"}
)

SUBJECT_TITLE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?:position|role|job|opportunity):\s*(.+?)(?:\s+at|\s+[-–—]|$)", re.IGNORECASE),
    re.compile(
        r"(?:apply for|application for|interested in)\s+(?:the\s+)?(.+?)"
        r"(?:\s+position|\s+role|\s+at|$)",
        re.IGNORECASE,
    ),
    re.compile(r"^(.+?)\s+(?:position|role|job|opportunity)\b", re.IGNORECASE),
)


# =============================================================================
# EMPLOYMENT TYPE AND LOCATION (shared by extractor and categorizer)
# =============================================================================

JOB_TYPE_RULES: tuple[Rule, ...] = (
    _rule("Full-time", r"full[- ]?time", r"\bft\b", r"permanent"),
    _rule("Part-time", r"part[- ]?time", r"\bpt\b"),
    _rule("Contract", r"contract", r"consulting", r"\bc2c\b", r"corp[- ]?to[- ]?corp"),
    _rule("Freelance", r"freelance", r"\bgig\b"),
    _rule("Internship", r"\bintern(?:ship)?s?\b", r"co-op", r"\bcoop\b", r"trainee"),
    _rule("Temporary", r"temporary", r"\btemp\b", r"seasonal"),
    _rule("Remote", r"\bremote\b", r"work from home", r"\bwfh\b", r"telecommute", r"distributed"),
    _rule("Hybrid", r"hybrid", r"flexible", r"partial remote"),
    _rule("On-site", r"on[- ]?site", r"in[- ]?office", r"in[- ]?person", r"office[- ]?based"),
)

REMOTE_LOCATION_PATTERN: re.Pattern[str] = re.compile(
    r"\b(?:remote|anywhere|worldwide|global|distributed|work from home|wfh)\b", re.IGNORECASE
)

# "City, ST" - literal spaces so a match never spans a line break.
CITY_STATE_PATTERN: re.Pattern[str] = re.compile(r"\b[A-Z][a-z]+(?: [A-Z][a-z]+)?,[ \t]*[A-Z]{2}\b")

MAJOR_CITIES: tuple[str, ...] = (
    "New York",
    "Los Angeles",
    "Chicago",
    "Houston",
    "Phoenix",
    "Philadelphia",
    "San Antonio",
    "San Diego",
    "Dallas",
    "San Jose",
    "Austin",
    "Jacksonville",
    "Fort Worth",
    "Columbus",
    "Charlotte",
    "San Francisco",
    "Indianapolis",
    "Seattle",
    "Denver",
    "Boston",
    "El Paso",
    "Nashville",
    "Detroit",
    "Portland",
    "Memphis",
    "Louisville",
    "Baltimore",
    "Milwaukee",
    "Albuquerque",
    "Tucson",
    "Fresno",
    "Sacramento",
    "Kansas City",
    "Atlanta",
    "Miami",
    "Raleigh",
    "Omaha",
    "Oakland",
)

MAJOR_CITY_PATTERN: re.Pattern[str] = re.compile(
    r"\b(?:" + "|".join(re.escape(c) for c in MAJOR_CITIES) + r")\b", re.IGNORECASE
)

US_STATE_CODES: tuple[str, ...] = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA", "HI", "ID", "IL",
    "IN", "IA", "KS", "KY", "LA", "ME", "MD", "MA", "MI", "MN", "MS", "MO", "MT",
    "NE", "NV", "NH", "NJ", "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI",
    "SC", "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
)

STATE_CODE_PATTERN: re.Pattern[str] = re.compile(r"\b(?:" + "|".join(US_STATE_CODES) + r")\b")

# Characters after a city name searched for a trailing state code.
STATE_LOOKAHEAD_CHARS = 20

# Country names match in any case; short codes only in upper case so
# "join us" is not read as a country.
COUNTRY_PATTERN: re.Pattern[str] = re.compile(
    r"\b(?:(?i:United States|United Kingdom|Canada|Germany|France|Australia|India|Japan"
    r"|Singapore|Netherlands|Ireland)|USA|US|UK)\b"
)


# =============================================================================
# CATEGORIZATION AND TAGS
# =============================================================================

SOURCE_RULES: tuple[tuple[re.Pattern[str], JobSource], ...] = (
    (re.compile(r"linkedin\.com", re.IGNORECASE), "linkedin"),
    (re.compile(r"indeed\.com", re.IGNORECASE), "indeed"),
    (re.compile(r"glassdoor\.com", re.IGNORECASE), "glassdoor"),
    (re.compile(r"lever\.co", re.IGNORECASE), "other"),
    (re.compile(r"greenhouse\.io", re.IGNORECASE), "other"),
    (re.compile(r"workday\.com", re.IGNORECASE), "other"),
    (re.compile(r"icims\.com", re.IGNORECASE), "other"),
    (re.compile(r"smartrecruiters\.com", re.IGNORECASE), "other"),
)

# Sources a job-board match may promote over a caller-supplied default.
PREFERRED_BOARD_SOURCES: frozenset[str] = frozenset({"linkedin", "indeed", "glassdoor"})

COMPANY_INDICATOR_PATTERN: re.Pattern[str] = re.compile(r"company", re.IGNORECASE)

TAG_RULES: tuple[Rule, ...] = (
    # Seniority
    _rule("Senior", r"senior", r"\bsr\b\.?", r"\blead\b"),
    _rule("Junior", r"junior", r"\bjr\b\.?", r"entry[- ]?level"),
    _rule("Mid-level", r"mid[- ]?level", r"mid[- ]?senior"),
    _rule("Principal", r"principal", r"\bstaff\b", r"architect"),
    _rule("Management", r"manager", r"director", r"head of"),
    # Tech stack
    _rule("React", r"react"),
    _rule("Node.js", r"node\.?js"),
    _rule("Python", r"python"),
    _rule("Java", r"\bjava\b"),
    _rule("TypeScript", r"typescript", r"\bts\b"),
    _rule("JavaScript", r"javascript", r"\bjs\b"),
    _rule("AWS", r"\baws\b", r"amazon web services"),
    _rule("Azure", r"azure", r"microsoft cloud"),
    _rule("GCP", r"google cloud", r"\bgcp\b"),
    _rule("Kubernetes", r"kubernetes", r"\bk8s\b"),
    _rule("Docker", r"docker", r"container"),
    # Role family
    _rule("Frontend", r"frontend", r"front[- ]?end", r"ui developer"),
    _rule("Backend", r"backend", r"back[- ]?end", r"server[- ]?side"),
    _rule("Full Stack", r"full[- ]?stack"),
    _rule("DevOps", r"devops", r"site reliability", r"\bsre\b"),
    _rule("Data Science", r"data science", r"data scientist", r"\bml\b", r"machine learning"),
    _rule("Mobile", r"mobile", r"\bios\b", r"android", r"flutter", r"react native"),
    # Benefits
    _rule("Visa Sponsorship", r"visa sponsor", r"\bh1b\b", r"work authorization"),
    _rule("Equity", r"equity", r"stock options", r"\brsu\b"),
    _rule("Startup", r"startup", r"early[- ]?stage"),
)

# Title-only suggestions: (trigger, tag). Role-family rules only fire when
# the title names an engineering role.
TITLE_SENIOR_PATTERN = re.compile(r"\b(?:senior|sr\.?|lead|principal|staff)\b", re.IGNORECASE)
TITLE_JUNIOR_PATTERN = re.compile(r"\b(?:junior|jr\.?|entry|associate)\b", re.IGNORECASE)
TITLE_ENGINEER_PATTERN = re.compile(r"\b(?:engineer|developer|programmer)\b", re.IGNORECASE)
TITLE_ROLE_RULES: tuple[Rule, ...] = (
    _rule("Frontend", r"frontend|front[- ]end|\bui\b"),
    _rule("Backend", r"backend|back[- ]end|server"),
    _rule("Full Stack", r"full[- ]?stack"),
)
TITLE_FAMILY_RULES: tuple[Rule, ...] = (
    _rule("DevOps", r"\b(?:devops|sre|infrastructure|platform)\b"),
    _rule("Data Science", r"\b(?:data|ml|machine learning|ai|analytics)\b"),
    _rule("Mobile", r"\b(?:mobile|ios|android|flutter)\b"),
    _rule("Management", r"\b(?:manager|director|head|vp|chief)\b"),
)


@dataclass(frozen=True)
class LookupTables:
    """Every table the pipeline consults, bundled for injection.

    Build a variant with ``dataclasses.replace(DEFAULT_TABLES, ...)``.
    """

    job_board_domains: tuple[str, ...] = JOB_BOARD_DOMAINS
    job_path_patterns: tuple[re.Pattern[str], ...] = JOB_PATH_PATTERNS
    job_url_keywords: tuple[str, ...] = JOB_URL_KEYWORDS
    job_subject_patterns: tuple[re.Pattern[str], ...] = JOB_SUBJECT_PATTERNS
    job_sender_domains: tuple[str, ...] = JOB_SENDER_DOMAINS
    snippet_job_terms: tuple[str, ...] = SNIPPET_JOB_TERMS

    domain_to_company: tuple[tuple[str, str], ...] = DOMAIN_TO_COMPANY
    path_company_hosts: tuple[str, ...] = PATH_COMPANY_HOSTS
    opaque_company_hosts: tuple[tuple[str, str], ...] = OPAQUE_COMPANY_HOSTS
    careers_subdomains: frozenset[str] = CAREERS_SUBDOMAINS
    reserved_domains: tuple[str, ...] = RESERVED_DOMAINS
    title_stop_segments: frozenset[str] = TITLE_STOP_SEGMENTS
    title_minor_words: frozenset[str] = TITLE_MINOR_WORDS
    subject_company_patterns: tuple[re.Pattern[str], ...] = SUBJECT_COMPANY_PATTERNS
    subject_company_stopwords: frozenset[str] = SUBJECT_COMPANY_STOPWORDS
    subject_title_patterns: tuple[re.Pattern[str], ...] = SUBJECT_TITLE_PATTERNS

    job_type_rules: tuple[Rule, ...] = JOB_TYPE_RULES
    remote_location_pattern: re.Pattern[str] = REMOTE_LOCATION_PATTERN
    city_state_pattern: re.Pattern[str] = CITY_STATE_PATTERN
    major_city_pattern: re.Pattern[str] = MAJOR_CITY_PATTERN
    state_code_pattern: re.Pattern[str] = STATE_CODE_PATTERN
    state_lookahead_chars: int = STATE_LOOKAHEAD_CHARS
    country_pattern: re.Pattern[str] = COUNTRY_PATTERN

    source_rules: tuple[tuple[re.Pattern[str], JobSource], ...] = SOURCE_RULES
    preferred_board_sources: frozenset[str] = PREFERRED_BOARD_SOURCES
    company_indicator_pattern: re.Pattern[str] = COMPANY_INDICATOR_PATTERN
    tag_rules: tuple[Rule, ...] = TAG_RULES
    title_senior_pattern: re.Pattern[str] = TITLE_SENIOR_PATTERN
    title_junior_pattern: re.Pattern[str] = TITLE_JUNIOR_PATTERN
    title_engineer_pattern: re.Pattern[str] = TITLE_ENGINEER_PATTERN
    title_role_rules: tuple[Rule, ...] = TITLE_ROLE_RULES
    title_family_rules: tuple[Rule, ...] = TITLE_FAMILY_RULES


DEFAULT_TABLES = LookupTables()


def host_matches(host: str, domain: str) -> bool:
    """Return True if ``host`` is ``domain`` or one of its subdomains."""
    return host == domain or host.endswith("." + domain)
