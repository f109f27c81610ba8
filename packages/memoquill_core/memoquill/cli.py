"""
Command-line interface for memoquill.

Usage:
    memoquill generate --to Finance --from Operations --subject Review --body-file body.html
    memoquill generate ... --banner banner.png --footer footer.png --output memo.pdf
    memoquill plan --subject Review --body "<p>Hello</p>"
    memoquill version
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from .api import build_plan, generate_memo, load_asset
from .config import MemoLayoutConfig
from .exceptions import AssetError, MemoQuillError

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="memoquill",
        description="memoquill - bilingual memo PDF generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  memoquill generate --to Finance --from Operations --subject Review --body-file body.html
  memoquill generate --to Finance --subject Review --body "مرحبا" --classification Internal
  memoquill plan --subject Review --body-file body.html
  memoquill version
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    generate_parser = subparsers.add_parser("generate", help="Render a memo to PDF")
    _add_memo_arguments(generate_parser)
    generate_parser.add_argument("--banner", help="Banner image shown at the top of the first page")
    generate_parser.add_argument("--footer", help="Footer image drawn at the bottom of every page")
    generate_parser.add_argument(
        "--no-default-images",
        action="store_true",
        help="Leave banner and footer images out of the document",
    )
    generate_parser.add_argument(
        "-o", "--output",
        help="Output file or directory (default: Memo_YYYYMMDD_HHMM.pdf in the current directory)",
    )

    plan_parser = subparsers.add_parser("plan", help="Print the document plan as JSON")
    _add_memo_arguments(plan_parser)

    subparsers.add_parser("version", help="Show version information")

    return parser


def _add_memo_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--to", default="", help="To field")
    parser.add_argument("--through", help="Through field (omitted when blank)")
    parser.add_argument("--from", dest="from_", default="", help="From field")
    parser.add_argument("--subject", default="", help="Subject field")
    body = parser.add_mutually_exclusive_group()
    body.add_argument("--body", default="", help="Memo body (HTML subset or plain text)")
    body.add_argument("--body-file", help="Read the memo body from a file")
    parser.add_argument("--classification", help="Classification shown in the footer")
    parser.add_argument("--memo-number", help="Memo number (default: M-YYYYMMDD-HHMMSS)")
    parser.add_argument("--date", dest="date_text", help="Date text (default: e.g. 'October 18th 2026')")
    parser.add_argument("--margin", type=float, help="Page margin in points")
    parser.add_argument("--config", help="JSON file with layout configuration")


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(name)s - %(levelname)s - %(message)s")


def _read_text(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise AssetError("Could not read body file", details=f"{path}: {exc.strerror or exc}") from exc


def _load_config(path):
    if not path:
        return MemoLayoutConfig()
    try:
        data = json.loads(_read_text(path))
    except json.JSONDecodeError as exc:
        raise AssetError("Configuration file is not valid JSON", details=f"{path}: {exc}") from exc
    return MemoLayoutConfig.from_mapping(data)


def _memo_fields(args) -> dict:
    body = _read_text(args.body_file) if args.body_file else args.body
    return {
        "to": args.to,
        "through": args.through,
        "from": args.from_,
        "subject": args.subject,
        "body": body,
        "classification": args.classification,
        "memo_number": args.memo_number,
        "date_text": args.date_text,
        "page_margin": args.margin,
    }


def cmd_generate(args) -> int:
    """Handle generate command."""
    config = _load_config(args.config)
    fields = _memo_fields(args)
    fields["banner_image"] = load_asset(args.banner) if args.banner else None
    fields["footer_image"] = load_asset(args.footer) if args.footer else None
    fields["use_default_images"] = not args.no_default_images

    result = generate_memo(fields, config=config, now=datetime.now(timezone.utc))

    if args.output:
        output_path = Path(args.output)
        if output_path.is_dir():
            output_path = output_path / result.file_name
    else:
        output_path = Path.cwd() / result.file_name
    try:
        output_path.write_bytes(result.content)
    except OSError as exc:
        raise AssetError("Could not write memo", details=f"{output_path}: {exc.strerror or exc}") from exc

    print(f"Saved: {output_path}")
    print(f"   Memo: {result.plan.memo_number}")
    print(f"   Size: {result.size:,} bytes")
    return 0


def cmd_plan(args) -> int:
    """Handle plan command."""
    config = _load_config(args.config)
    plan = build_plan(_memo_fields(args), config=config)
    print(json.dumps(plan.to_dict(), indent=2, ensure_ascii=False))
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__
    print(f"memoquill v{__version__}")
    print("Bilingual memo PDF generator")
    return 0


def main(argv=None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    handlers = {
        "generate": cmd_generate,
        "plan": cmd_plan,
        "version": cmd_version,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except AssetError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except MemoQuillError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
