"""ABNT reference formatting: entry-type dispatch and reference lists."""

import logging
from typing import Callable, Optional

from abntcite.models.schemas import BibliographicRecord, EntryFormat, FormattingOptions
from abntcite.services import entry_formatters, fields
from abntcite.services.exceptions import UnrecognizedEntryType
from abntcite.services.extra_info import extract_extra_info, format_extra_info
from abntcite.services.punctuation import clean_punctuation
from abntcite.services.sorting import sort_records

logger = logging.getLogger(__name__)


ENTRY_FORMATS: dict[str, EntryFormat] = {
    "article": EntryFormat.ARTICLE,
    "online": EntryFormat.ARTICLE,
    "movie": EntryFormat.ARTICLE,
    "misc": EntryFormat.ARTICLE,
    "book": EntryFormat.BOOK,
    "thesis": EntryFormat.THESIS,
    "inbook": EntryFormat.INBOOK,
    "incollection": EntryFormat.INCOLLECTION,
    "inproceedings": EntryFormat.INPROCEEDINGS,
    "collection": EntryFormat.COLLECTION,
}

# Extraction step and body formatter for each entry format
FORMATTERS: dict[EntryFormat, tuple[Callable, Callable]] = {
    EntryFormat.ARTICLE: (fields.extract_article, entry_formatters.format_article),
    EntryFormat.BOOK: (fields.extract_book, entry_formatters.format_book),
    EntryFormat.THESIS: (fields.extract_thesis, entry_formatters.format_thesis),
    EntryFormat.INBOOK: (fields.extract_inbook, entry_formatters.format_inbook),
    EntryFormat.INCOLLECTION: (
        fields.extract_incollection,
        entry_formatters.format_incollection,
    ),
    EntryFormat.INPROCEEDINGS: (
        fields.extract_inproceedings,
        entry_formatters.format_inproceedings,
    ),
    EntryFormat.COLLECTION: (
        fields.extract_collection,
        entry_formatters.format_collection,
    ),
}

SECTION_OPEN = '<div class="references txt-sml txt-left proportional-nums">'
SECTION_CLOSE = "</div>"


def entry_format_for(record: BibliographicRecord) -> EntryFormat:
    """
    Select the formatter for a record's entry type.

    Raises:
        UnrecognizedEntryType: If no formatter handles the type
    """
    entry_format = ENTRY_FORMATS.get(record.entry_type.lower())
    if entry_format is None:
        raise UnrecognizedEntryType(record.entry_type, record.citation_key)
    return entry_format


def format_record(record: BibliographicRecord) -> str:
    """
    Format one record as a full ABNT citation.

    Args:
        record: Parsed bibliography entry

    Returns:
        Citation body followed by the trailing note/link/access elements

    Raises:
        CitationError: If the record has an unknown type, lacks required
            fields or has an editor without the organizer role
    """
    entry_format = entry_format_for(record)
    extract, render = FORMATTERS[entry_format]
    logger.debug(
        "Formatting %s (%s) as %s",
        record.citation_key,
        record.entry_type,
        entry_format.value,
    )

    body = render(extract(record)).rstrip()
    return body + format_extra_info(extract_extra_info(record))


def split_excluded(
    records: list[BibliographicRecord],
    exclude_prefix: str,
) -> tuple[list[BibliographicRecord], list[str]]:
    """Separate records whose key starts with ``exclude_prefix``."""
    if not exclude_prefix:
        return list(records), []

    kept: list[BibliographicRecord] = []
    excluded: list[str] = []
    for record in records:
        if record.citation_key.startswith(exclude_prefix):
            logger.warning("Leaving out %s (prefix %r)", record.citation_key, exclude_prefix)
            excluded.append(record.citation_key)
        else:
            kept.append(record)
    return kept, excluded


def format_bibliography(
    records: list[BibliographicRecord],
    options: Optional[FormattingOptions] = None,
) -> tuple[list[str], list[str]]:
    """
    Format a reference list.

    Records with an excluded key prefix are dropped, the rest are sorted
    and formatted. The first failing record aborts the whole list.

    Args:
        records: Parsed bibliography entries
        options: Formatting options (defaults apply when omitted)

    Returns:
        Tuple of (citations in order, excluded citation keys)
    """
    options = options or FormattingOptions()
    kept, excluded = split_excluded(records, options.exclude_prefix)
    citations = [format_record(record) for record in sort_records(kept)]
    return citations, excluded


def render_reference_section(
    citations: list[str],
    options: Optional[FormattingOptions] = None,
) -> str:
    """
    Render citations as a Markdown reference section.

    Args:
        citations: Formatted citations, already in order
        options: Heading, wrapper and punctuation settings

    Returns:
        Markdown document text
    """
    options = options or FormattingOptions()
    lines: list[str] = []

    if options.wrap_html:
        lines.extend([SECTION_OPEN, ""])
    lines.extend([f"## {options.heading}", ""])

    for citation in citations:
        if options.clean_punctuation:
            citation = clean_punctuation(citation)
        lines.extend([citation, ""])

    if options.wrap_html:
        lines.append(SECTION_CLOSE)

    return "\n".join(lines) + "\n"
