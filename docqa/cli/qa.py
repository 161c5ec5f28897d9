# =============================================================================
# docqa/cli/qa.py — Document Q&A Command Line
# =============================================================================
#
# Drives the four pipeline operations from a shell:
#
#   process — fetch a document, chunk it, embed it and store the vectors
#   ask     — answer one question about a document
#   batch   — answer several questions about one document
#   search  — show the stored chunks closest to a query in a namespace
#
# Results are printed to stdout as JSON. Log lines go to stderr, so the
# output can be piped straight into jq.
#
# Usage examples:
#   python -m docqa.cli process --url https://example.com/policy.pdf
#   python -m docqa.cli ask --url https://example.com/policy.pdf \
#       --question "What is the waiting period for pre-existing diseases?"
#   python -m docqa.cli batch --url https://example.com/handbook.docx --type docx \
#       --question "How many vacation days?" --question "Who approves leave?"
#   python -m docqa.cli search --query "grace period" --namespace doc_1700000000000_1a2b3c4d
# =============================================================================

"""Command-line interface for the docqa pipeline."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from docqa.config.loader import load_settings
from docqa.models.document import DocumentType
from docqa.pipeline.orchestrator import DocumentQAPipeline
from docqa.utils.errors import DocQAError
from docqa.utils.logging import configure_logging

_TYPE_CHOICES = [t.value for t in DocumentType]


def _emit(payload: BaseModel | list[BaseModel]) -> None:
    """Print a model (or list of models) as indented JSON on stdout."""
    data: Any
    if isinstance(payload, list):
        data = [item.model_dump(mode="json") for item in payload]
    else:
        data = payload.model_dump(mode="json")
    print(json.dumps(data, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def _handle_process(args: argparse.Namespace, pipeline: DocumentQAPipeline) -> int:
    result = await pipeline.process_document(args.url, args.type, namespace=args.namespace)
    _emit(result)
    return 0


async def _handle_ask(args: argparse.Namespace, pipeline: DocumentQAPipeline) -> int:
    record = await pipeline.process_query(args.question, args.url, args.type)
    _emit(record)
    return 0


async def _handle_batch(args: argparse.Namespace, pipeline: DocumentQAPipeline) -> int:
    result = await pipeline.process_multiple_queries(args.question, args.url, args.type)
    _emit(result)
    return 0


async def _handle_search(args: argparse.Namespace, pipeline: DocumentQAPipeline) -> int:
    matches = await pipeline.search_chunks(args.query, namespace=args.namespace, top_k=args.top_k)
    _emit(matches)
    return 0


_HANDLERS = {
    "process": _handle_process,
    "ask": _handle_ask,
    "batch": _handle_batch,
    "search": _handle_search,
}


async def _run(args: argparse.Namespace, pipeline: DocumentQAPipeline) -> int:
    try:
        return await _HANDLERS[args.command](args, pipeline)
    finally:
        await pipeline.aclose()


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the docqa CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m docqa.cli",
        description="Answer questions about PDF, DOCX and text documents.",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Path to the YAML configuration file (default: config/config.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # -- process --
    process_parser = subparsers.add_parser("process", help="Process and store a document")
    process_parser.add_argument("--url", required=True, help="Document URL")
    process_parser.add_argument("--type", default="pdf", choices=_TYPE_CHOICES, help="Document type")
    process_parser.add_argument("--namespace", default=None, help="Target namespace")

    # -- ask --
    ask_parser = subparsers.add_parser("ask", help="Answer one question about a document")
    ask_parser.add_argument("--url", required=True, help="Document URL")
    ask_parser.add_argument("--question", required=True, help="Question to answer")
    ask_parser.add_argument("--type", default="pdf", choices=_TYPE_CHOICES, help="Document type")

    # -- batch --
    batch_parser = subparsers.add_parser("batch", help="Answer several questions about a document")
    batch_parser.add_argument("--url", required=True, help="Document URL")
    batch_parser.add_argument(
        "--question",
        required=True,
        action="append",
        help="Question to answer (repeat for more)",
    )
    batch_parser.add_argument("--type", default="pdf", choices=_TYPE_CHOICES, help="Document type")

    # -- search --
    search_parser = subparsers.add_parser("search", help="Show stored chunks closest to a query")
    search_parser.add_argument("--query", required=True, help="Search text")
    search_parser.add_argument("--namespace", default="default", help="Namespace to search")
    search_parser.add_argument("--top-k", dest="top_k", type=_positive_int, default=None, help="Number of matches")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point.  Returns the process exit status."""
    from docqa.main import build_pipeline

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        app_settings = load_settings(args.config)
        configure_logging(
            log_level=app_settings.log_level,
            json_output=(app_settings.app_env == "production"),
        )
        pipeline = build_pipeline(app_settings)
        return asyncio.run(_run(args, pipeline))
    except DocQAError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
