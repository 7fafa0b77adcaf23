"""Command-line interface for the smart JSON formatter.

Examples:
  # Pretty-print a Python dict dump
  python -m smartjson format dump.txt

  # Minify from stdin
  cat data.json | python -m smartjson minify -

  # Repair, falling back to the configured LLM providers
  python -m smartjson fix broken.txt --dotenv .env

  # Structural diff of two documents
  python -m smartjson diff before.json after.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from smartjson.llm.provider import LLMProviderError
from smartjson.llm.provider_registry import create_provider_chain
from smartjson.llm.service import RepairService
from smartjson.models import FormatResult

from . import workflow

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smartjson",
        description="Repair, format and diff loosely structured JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("format", "Pretty-print the input with two-space indentation."),
        ("minify", "Print the input as compact JSON."),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("input", help="Input file, or '-' to read stdin.")

    fix = subparsers.add_parser(
        "fix", help="Repair the input locally, falling back to an LLM provider."
    )
    fix.add_argument("input", help="Input file, or '-' to read stdin.")
    fix.add_argument(
        "--dotenv",
        type=Path,
        default=None,
        help="Path to a .env file with provider API keys.",
    )
    fix.add_argument(
        "--provider",
        default=None,
        help="Primary provider name (overrides LLM_PRIMARY).",
    )
    fix.add_argument(
        "--local-only",
        action="store_true",
        help="Never call a remote provider.",
    )

    diff = subparsers.add_parser("diff", help="Show a structural diff of two inputs.")
    diff.add_argument("original", help="Original file, or '-' to read stdin.")
    diff.add_argument("modified", help="Modified file.")
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8-sig")


def _emit(result: FormatResult) -> int:
    if not result.success:
        print(result.error, file=sys.stderr)
        return 1
    print(result.text)
    return 0


def _run_fix(args: argparse.Namespace, text: str) -> int:
    if args.local_only:
        return _emit(workflow.fix_text(text))

    try:
        service = RepairService(
            create_provider_chain(dotenv_path=args.dotenv, primary=args.provider)
        )
    except (LLMProviderError, ValueError) as exc:
        # Without a usable provider we can still try the local heuristics.
        logger.warning("Remote repair unavailable: %s", exc)
        return _emit(workflow.fix_text(text))
    return _emit(workflow.fix_text(text, service.repair))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        if args.command == "diff":
            result = workflow.diff_texts(
                _read_input(args.original), _read_input(args.modified)
            )
            if result.tree is None:
                assert result.failure is not None
                print(f"{result.side}: {result.failure.reason}", file=sys.stderr)
                return 1
            print(json.dumps(result.tree.to_dict(), indent=2, ensure_ascii=False))
            return 0

        text = _read_input(args.input)
    except OSError as exc:
        print(f"Could not read input: {exc}", file=sys.stderr)
        return 1

    if args.command == "format":
        return _emit(workflow.format_text(text))
    if args.command == "minify":
        return _emit(workflow.minify_text(text))
    return _run_fix(args, text)


if __name__ == "__main__":
    sys.exit(main())
