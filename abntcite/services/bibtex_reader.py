"""BibTeX input: turn a .bib document into bibliographic records."""

import logging
import re

import bibtexparser
from bibtexparser.bparser import BibTexParser

from abntcite.models.schemas import BibliographicRecord

logger = logging.getLogger(__name__)


# Month macros resolve to month numbers; "ago" and "dez" are Portuguese spellings
MONTH_MACROS = {
    name: str(number)
    for number, name in enumerate(
        ["jan", "feb", "mar", "apr", "may", "jun",
         "jul", "aug", "sep", "oct", "nov", "dec"],
        start=1,
    )
}
MONTH_MACROS["ago"] = "8"
MONTH_MACROS["dez"] = "12"

BOOKKEEPING_KEYS = ("ENTRYTYPE", "ID")

FIELD_NAME_PATTERN = re.compile(r'\s*([^\s=,{}"#()]+)\s*=')


class BibtexParseError(ValueError):
    """Raised when a BibTeX document cannot be parsed."""


def _month_preamble() -> str:
    return "\n".join(
        f'@string{{{name} = "{number}"}}' for name, number in MONTH_MACROS.items()
    )


def _make_parser() -> BibTexParser:
    parser = BibTexParser(common_strings=False, ignore_nonstandard_types=False)
    parser.customization = None
    return parser


def parse_bibtex(content: str) -> list[BibliographicRecord]:
    """
    Parse BibTeX source into records.

    Entries keep their field order as written in the source. Entry types
    and field names are lower-cased; values have their outer braces or
    quotes removed.

    Args:
        content: BibTeX document text

    Returns:
        List of BibliographicRecord in document order

    Raises:
        BibtexParseError: If bibtexparser rejects the document
    """
    source = f"{_month_preamble()}\n{content}"
    try:
        bib_db = bibtexparser.loads(source, parser=_make_parser())
    except Exception as exc:
        raise BibtexParseError(f"Invalid BibTeX: {exc}") from exc

    records = [_entry_to_record(entry, content) for entry in bib_db.entries]
    logger.debug("Parsed %d BibTeX entries", len(records))
    return records


def source_field_order(content: str, citation_key: str) -> dict[str, int]:
    """
    Map each lower-cased field name of an entry to its position in the source.

    The entry body is scanned at brace depth zero, outside quoted values,
    so commas inside values never start a field.
    """
    header = re.compile(
        r"@\s*\w+\s*[{(]\s*" + re.escape(citation_key) + r"\s*,"
    )
    match = header.search(content)
    if match is None:
        return {}

    order: dict[str, int] = {}
    position = match.end()
    depth = 0
    in_quotes = False
    field_start = position
    while position <= len(content):
        if field_start is not None:
            name_match = FIELD_NAME_PATTERN.match(content, field_start)
            if name_match:
                order.setdefault(name_match.group(1).lower(), len(order))
            field_start = None
        if position == len(content):
            break

        char = content[position]
        if char == "\\":
            position += 2
            continue
        if char == "{":
            depth += 1
        elif char in "})" and not in_quotes:
            if depth == 0:
                break
            depth -= 1
        elif char == '"' and depth == 0:
            in_quotes = not in_quotes
        elif char == "," and depth == 0 and not in_quotes:
            field_start = position + 1
        position += 1

    return order


def _entry_to_record(entry: dict, content: str) -> BibliographicRecord:
    """Convert a bibtexparser entry dict to a BibliographicRecord."""
    citation_key = entry.get("ID", "")
    tags = [
        (name.lower(), value)
        for name, value in entry.items()
        if name not in BOOKKEEPING_KEYS
    ]
    # bibtexparser does not keep the order fields were written in
    order = source_field_order(content, citation_key)
    if order:
        tags.sort(key=lambda tag: order.get(tag[0], len(order)))
    return BibliographicRecord(
        entry_type=entry.get("ENTRYTYPE", "").lower(),
        citation_key=citation_key,
        tags=tags,
    )
