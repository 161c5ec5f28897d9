# =============================================================================
# docqa/cli/__init__.py — CLI Module Overview
# =============================================================================
#
# Command-line access to the document Q&A pipeline for operators and
# developers. One tool, four subcommands (see qa.py):
#
#   process  — fetch, chunk, embed and store a document
#   ask      — answer a single question about a document
#   batch    — answer several questions about one document
#   search   — inspect the chunks stored in a namespace
#
# Architecture Notes:
#   - argparse for argument parsing (not Click/Typer).
#   - The pipeline is built through docqa.main.build_pipeline so the CLI
#     uses exactly the providers the settings select.
#   - Library errors are reported as "error: <message>" on stderr with
#     exit status 1; results are JSON on stdout.
# =============================================================================

"""CLI tools for the docqa pipeline.

- ``python -m docqa.cli process --url URL`` — process and store a document
- ``python -m docqa.cli ask --url URL --question Q`` — answer one question
- ``python -m docqa.cli batch --url URL --question Q [--question Q ...]``
- ``python -m docqa.cli search --query Q --namespace NS``
"""
