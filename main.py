"""CLI entry point for the job link classifier."""

import argparse
import asyncio
import json
import logging
import sys

from joblinks.core.config import Settings
from joblinks.core.db import init_db, job_link_stats, list_job_links
from joblinks.core.schemas import MessageContext
from joblinks.pipeline.categorizer import categorize
from joblinks.pipeline.classifier import classify_link
from joblinks.pipeline.extractor import extract_metadata
from joblinks.pipeline.normalizer import normalize_url
from joblinks.pipeline.orchestrator import export_records_json, run_ingest
from joblinks.sources import load_source_file
from joblinks.sources.gmail_query import build_job_search_query, clamp_max_results

SOURCE_CHOICES = ["gmail", "manual", "linkedin", "indeed", "glassdoor", "other"]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Job link classifier - detect, enrich and store job posting links",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- classify subcommand ---
    classify_parser = subparsers.add_parser("classify", help="Classify one or more URLs")
    classify_parser.add_argument("urls", nargs="+", help="URLs to classify")
    classify_parser.add_argument("--subject", help="Message subject the links came from")
    classify_parser.add_argument("--sender", help="Message sender the links came from")
    classify_parser.add_argument("--snippet", help="Message snippet the links came from")

    # --- ingest subcommand ---
    ingest_parser = subparsers.add_parser(
        "ingest",
        help="Classify links from a YAML input file and store job links",
    )
    ingest_parser.add_argument(
        "--input",
        required=True,
        help="YAML file with a 'messages' or 'links' list",
    )
    ingest_parser.add_argument("--user", required=True, help="Owning user ID")
    ingest_parser.add_argument(
        "--source",
        choices=SOURCE_CHOICES,
        help="Declared source tag (default: derived from the input file)",
    )
    ingest_parser.add_argument(
        "--no-filter",
        action="store_true",
        help="Store every link, not only the ones classified as job links",
    )
    ingest_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be stored without writing to the database",
    )
    ingest_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export accepted records to format (json)",
    )

    # --- list subcommand ---
    list_parser = subparsers.add_parser("list", help="List stored job links")
    list_parser.add_argument("--user", required=True, help="Owning user ID")
    list_parser.add_argument("--status", help="Only links with this status")
    list_parser.add_argument("--source", choices=SOURCE_CHOICES, help="Only links from this source")
    list_parser.add_argument("--search", help="Case-insensitive text search")

    # --- query subcommand ---
    query_parser = subparsers.add_parser(
        "query", help="Print the inbox search query and page size",
    )

    for sub in (classify_parser, ingest_parser, list_parser):
        sub.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Enable verbose (DEBUG) logging",
        )
    for sub in (ingest_parser, list_parser, query_parser):
        sub.add_argument(
            "--config",
            default="config/settings.yaml",
            help="Path to settings YAML file (default: config/settings.yaml)",
        )

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def cmd_classify(args: argparse.Namespace) -> None:
    """Print verdict, metadata and categories for each URL as JSON."""
    context = None
    if args.subject or args.sender or args.snippet:
        context = MessageContext(subject=args.subject, sender=args.sender, snippet=args.snippet)

    output = []
    for url in args.urls:
        verdict = classify_link(url, context)
        metadata = extract_metadata(url, context)
        content = " ".join(filter(None, [args.subject, args.snippet]))
        category = categorize(url, metadata.title, content)
        output.append({
            "url": url,
            "normalized_url": normalize_url(url),
            "verdict": verdict.model_dump(mode="json"),
            "metadata": metadata.model_dump(mode="json"),
            "category": category.model_dump(mode="json"),
        })
    print(json.dumps(output, indent=2))


async def cmd_ingest(args: argparse.Namespace, settings: Settings) -> None:
    """Run the ingest pipeline for one input file."""
    if args.no_filter:
        settings = settings.model_copy(
            update={"ingest": settings.ingest.model_copy(update={"filter_job_links": False})}
        )
    source = load_source_file(args.input)
    conn = init_db(settings.database.path)
    try:
        result = await run_ingest(
            source,
            conn,
            args.user,
            settings,
            default_source=args.source,
            dry_run=args.dry_run,
        )
    finally:
        conn.close()

    prefix = "[DRY RUN] " if args.dry_run else ""
    print(f"{prefix}Ingest complete: {result.raw_count} links, {result.filtered} filtered, "
          f"{result.duplicates} duplicates, {result.saved} saved.")
    for record in result.records:
        print(f"  [{record.confidence}] {record.title} @ {record.company} ({record.source})")

    if args.export == "json" and result.records:
        print(f"\n{export_records_json(result.records)}")


def cmd_list(args: argparse.Namespace, settings: Settings) -> None:
    """Print a user's stored job links and stats."""
    conn = init_db(settings.database.path)
    try:
        rows = list_job_links(
            conn, args.user, status=args.status, source=args.source, search=args.search,
        )
        stats = job_link_stats(conn, args.user)
    finally:
        conn.close()

    for row in rows:
        tags = ", ".join(row["tags"])
        print(f"#{row['id']} [{row['status']}] {row['title']} @ {row['company']} - {row['url']}"
              + (f" ({tags})" if tags else ""))
    print(f"\n{stats['total']} total: "
          + ", ".join(f"{k}={v}" for k, v in stats["by_status"].items() if v))


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(getattr(args, "verbose", False))

    if args.command == "classify":
        cmd_classify(args)
        return

    try:
        settings = Settings.from_yaml(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "query":
        print(build_job_search_query(settings.mail))
        print(f"max_results: {clamp_max_results(settings.mail.max_results)}")
    elif args.command == "list":
        cmd_list(args, settings)
    else:
        try:
            asyncio.run(cmd_ingest(args, settings))
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
