#!/usr/bin/env python3
"""Query a catalog from the command line: recommendations, search and title matching."""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import argparse
import json
import logging
import structlog

from moviesim.data.loaders import CatalogError, catalog_loader, find_by_id
from moviesim.models.scoring import Algorithm
from moviesim.pipeline.rank import get_recommendations
from moviesim.pipeline.resolve import find_closest_match, resolve_title, search_movies
from moviesim.service.config import config

# Configure logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)

def _summary(movie, score_field=None):
    row = {"id": movie.id, "title": movie.title, "year": movie.year, "rating": movie.rating}
    if score_field:
        row[score_field] = round(getattr(movie, score_field), 4)
    return row

def cmd_recommend(movies, args) -> int:
    if args.id:
        selected = find_by_id(movies, args.id)
    else:
        selected = resolve_title(movies, args.title, args.min_confidence)
    if selected is None:
        logger.error("Movie not found", movie_id=args.id, title=args.title)
        return 1

    recommendations = get_recommendations(movies, selected, Algorithm(args.algorithm), args.top_n)
    print(json.dumps({
        "selected": _summary(selected),
        "recommendations": [_summary(m, "similarity_score") for m in recommendations],
    }, indent=2))
    return 0

def cmd_search(movies, args) -> int:
    results = search_movies(movies, args.query, args.max_results)
    print(json.dumps([_summary(m, "search_score") for m in results], indent=2))
    return 0

def cmd_match(movies, args) -> int:
    match = find_closest_match(movies, args.title)
    if match.movie is None or match.confidence < args.min_confidence:
        logger.error("No match found", title=args.title, confidence=match.confidence)
        return 1
    print(json.dumps({"movie": _summary(match.movie), "confidence": round(match.confidence, 4)}, indent=2))
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Movie similarity queries")
    parser.add_argument(
        "--catalog",
        default=config.CATALOG_PATH,
        help=f"Catalog file, .json/.jsonl/.csv (default: {config.CATALOG_PATH})"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    recommend = subparsers.add_parser("recommend", help="Movies similar to one movie")
    target = recommend.add_mutually_exclusive_group(required=True)
    target.add_argument("--id", help="Catalog id of the selected movie")
    target.add_argument("--title", help="Title to resolve (typos allowed)")
    recommend.add_argument(
        "--algorithm",
        choices=[a.value for a in Algorithm],
        default=config.DEFAULT_ALGORITHM,
        help="Text similarity algorithm"
    )
    recommend.add_argument("--top-n", type=int, default=config.DEFAULT_TOP_N)
    recommend.add_argument("--min-confidence", type=float, default=config.MIN_MATCH_CONFIDENCE)
    recommend.set_defaults(handler=cmd_recommend)

    search = subparsers.add_parser("search", help="Search titles and descriptions")
    search.add_argument("query")
    search.add_argument("--max-results", type=int, default=config.DEFAULT_MAX_RESULTS)
    search.set_defaults(handler=cmd_search)

    match = subparsers.add_parser("match", help="Closest title match")
    match.add_argument("title")
    match.add_argument("--min-confidence", type=float, default=config.MIN_MATCH_CONFIDENCE)
    match.set_defaults(handler=cmd_match)

    return parser

def main(argv=None) -> int:
    """Main function."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL.upper(), format="%(message)s")

    try:
        movies = catalog_loader.load(args.catalog)
    except CatalogError as e:
        logger.error("Failed to load catalog", catalog=args.catalog, error=str(e))
        return 1

    return args.handler(movies, args)

if __name__ == "__main__":
    sys.exit(main())
