"""Command line interface for formatting BibTeX reference lists."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from abntcite.models.schemas import FormattingOptions
from abntcite.services.abnt_formatter import format_bibliography, render_reference_section
from abntcite.services.bibtex_reader import BibtexParseError, parse_bibtex
from abntcite.services.exceptions import CitationError
from abntcite.services.key_fixer import DEFAULT_PLACEHOLDER_YEAR, fix_years
from abntcite.services.punctuation import PunctuationFilter

logger = logging.getLogger("abntcite")


def _read_input(path: Optional[Path]) -> str:
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _run_format(args: argparse.Namespace) -> int:
    options = FormattingOptions(
        exclude_prefix=args.exclude_prefix,
        heading=args.heading,
        wrap_html=not args.no_wrap,
        clean_punctuation=not args.raw_punctuation,
    )

    records = parse_bibtex(_read_input(args.input))
    try:
        citations, _ = format_bibliography(records, options)
    except CitationError as exc:
        logger.error("Cannot format %s: %s", exc.citation_key or "entry", exc.message)
        return 1

    # Cleanup happens on the output stream, not per citation
    document = render_reference_section(
        citations, options.model_copy(update={"clean_punctuation": False})
    )
    out = PunctuationFilter(sys.stdout) if options.clean_punctuation else sys.stdout
    out.write(document)
    out.flush()
    return 0


def _run_fix_years(args: argparse.Namespace) -> int:
    records = parse_bibtex(_read_input(args.input))
    sys.stdout.write(fix_years(records, args.prefix, args.placeholder))
    return 0


def build_parser() -> argparse.ArgumentParser:
    defaults = FormattingOptions()

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log formatting decisions to stderr",
    )

    parser = argparse.ArgumentParser(
        prog="abntcite",
        description="Format BibTeX bibliographies as ABNT reference lists",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    format_parser = subparsers.add_parser(
        "format",
        parents=[common],
        help="Render a Markdown reference section from BibTeX",
    )
    format_parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="BibTeX file to read (default: standard input)",
    )
    format_parser.add_argument(
        "--exclude-prefix",
        default=defaults.exclude_prefix,
        help="Leave out entries whose citation key starts with this prefix "
        "(empty string keeps everything)",
    )
    format_parser.add_argument(
        "--heading",
        default=defaults.heading,
        help="Section heading",
    )
    format_parser.add_argument(
        "--no-wrap",
        action="store_true",
        help="Do not wrap the section in an HTML <div>",
    )
    format_parser.add_argument(
        "--raw-punctuation",
        action="store_true",
        help="Keep doubled punctuation where fields meet",
    )
    format_parser.set_defaults(handler=_run_format)

    fix_parser = subparsers.add_parser(
        "fix-years",
        parents=[common],
        help="Prefix citation keys and replace their placeholder year",
    )
    fix_parser.add_argument("prefix", help="Text prepended to every citation key")
    fix_parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="BibTeX file to read (default: standard input)",
    )
    fix_parser.add_argument(
        "--placeholder",
        default=DEFAULT_PLACEHOLDER_YEAR,
        help="Year in the exported keys to replace with the entry's year",
    )
    fix_parser.set_defaults(handler=_run_fix_years)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.handler(args)
    except BibtexParseError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())
