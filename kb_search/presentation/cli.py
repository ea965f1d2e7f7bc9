import argparse
import logging
import sys
from typing import Optional

from kb_search.config.settings import Settings, settings
from kb_search.container import configure_container
from kb_search.core.services.ingest_service import IngestService
from kb_search.core.services.search_service import SearchService

logger = logging.getLogger(__name__)


def cmd_ingest(app_settings: Settings) -> int:
    """Ingest command - load and index the knowledge base."""
    container = configure_container(app_settings)
    ingest_service = container.resolve(IngestService)
    count = ingest_service.run()
    for category, total in sorted(ingest_service.categories().items()):
        logger.info(f"  {category}: {total}")
    logger.info(f"Indexed {count} documents")
    return 0


def cmd_search(app_settings: Settings, args: argparse.Namespace) -> int:
    """Search command - index, query, print LLM context."""
    container = configure_container(app_settings)
    container.resolve(IngestService).run()

    options = {
        "fuzzy_match": not args.no_fuzzy,
        "priority_boost": not args.no_priority_boost,
        "category_filter": args.category,
    }
    response = container.resolve(SearchService).search(
        args.query, max_results=args.max_results, options=options
    )
    if not response.results:
        print("No matching documents")
        return 1
    print(response.context)
    return 0


def cmd_suggest(app_settings: Settings, args: argparse.Namespace) -> int:
    """Suggest command - print completions for a partial query."""
    container = configure_container(app_settings)
    container.resolve(IngestService).run()
    for suggestion in container.resolve(SearchService).suggest(args.partial):
        print(suggestion)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kb-search", description="Knowledge base search"
    )
    parser.add_argument("--docs-path", help="Knowledge base directory")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("ingest", help="Index documents only")

    search = sub.add_parser("search", help="Search the knowledge base")
    search.add_argument("query")
    search.add_argument("--max-results", type=int, default=None)
    search.add_argument("--category", default=None)
    search.add_argument("--no-fuzzy", action="store_true")
    search.add_argument("--no-priority-boost", action="store_true")

    suggest = sub.add_parser("suggest", help="Suggest titles and keywords")
    suggest.add_argument("partial")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    app_settings = settings
    if args.docs_path:
        app_settings = settings.model_copy(update={"docs_path": args.docs_path})

    logging.basicConfig(level=app_settings.log_level.upper(), format="%(message)s")

    if args.command == "ingest":
        return cmd_ingest(app_settings)
    if args.command == "search":
        return cmd_search(app_settings, args)
    return cmd_suggest(app_settings, args)


if __name__ == "__main__":
    sys.exit(main())
