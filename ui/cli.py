"""Command line access to segmentation, retrieval and ingest."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from application.use_cases.ingest_paths import extractor_for, ingest_paths
from application.use_cases.search import build_grounding_context
from domain.errors import StudyLensError
from infrastructure.config import ContainerConfig, build_default_container, build_retriever, build_splitter
from infrastructure.query.keyword_retriever import validate_max_results
from infrastructure.splitting.paragraph_splitter import segment
from ui.logging_utils import setup_logging


def _read_text(path: Path) -> str:
    return extractor_for(path).extract(path.read_bytes())


def cmd_segment(args: argparse.Namespace) -> int:
    chunks = segment(_read_text(Path(args.path)), args.target_size, args.overlap)
    payload = [
        {"chunk_index": chunk.chunk_index, "page_number": chunk.page_number, "content": chunk.content}
        for chunk in chunks
    ]
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    config = ContainerConfig.from_env()
    retriever = build_retriever(config)
    max_results = config.max_results if args.max_results is None else args.max_results
    validate_max_results(max_results)
    chunks = build_splitter(config).split(_read_text(Path(args.path)))
    results = retriever.find_relevant(chunks, args.query, max_results)
    payload = {
        "query": args.query,
        "results": [
            {
                "chunk_index": result.chunk_index,
                "score": result.score,
                "raw_score": result.raw_score,
                "matched_words": result.matched_words,
                "content": result.content,
            }
            for result in results
        ],
        "context": build_grounding_context(results),
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


def cmd_ingest(args: argparse.Namespace) -> int:
    container = build_default_container(ContainerConfig.from_env())
    report = ingest_paths(
        [Path(path) for path in args.paths],
        splitter=container.splitter,
        document_repository=container.document_repository,
        chunk_repository=container.chunk_repository,
    )
    print(f"Indexed {report.indexed} of {report.total} files")
    for error in report.errors:
        print(f"  {error.path}: {error.reason}", file=sys.stderr)
    return 0 if not report.errors else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="studylens", description=__doc__)
    parser.add_argument("--log-level", default=None, help="Logging level (default: STUDYLENS_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    segment_parser = subparsers.add_parser("segment", help="Split a file into chunks and print them as JSON.")
    segment_parser.add_argument("path", help="PDF, .txt or .md file")
    segment_parser.add_argument("--target-size", type=int, default=500, help="Target words per chunk (default: 500)")
    segment_parser.add_argument("--overlap", type=int, default=50, help="Overlap in words (default: 50)")
    segment_parser.set_defaults(handler=cmd_segment)

    search_parser = subparsers.add_parser("search", help="Rank a file's chunks against a query.")
    search_parser.add_argument("path", help="PDF, .txt or .md file")
    search_parser.add_argument("query", help="Question or concept to look up")
    search_parser.add_argument("--max-results", type=int, default=None, help="Number of chunks to return")
    search_parser.set_defaults(handler=cmd_search)

    ingest_parser = subparsers.add_parser("ingest", help="Store files or directories in the document database.")
    ingest_parser.add_argument("paths", nargs="+", help="Files or directories to ingest")
    ingest_parser.set_defaults(handler=cmd_ingest)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)
    try:
        return args.handler(args)
    except StudyLensError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
