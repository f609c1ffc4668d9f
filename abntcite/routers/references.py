"""Reference list API endpoints."""

import logging

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from abntcite.models.schemas import (
    CitationErrorDetail,
    EntryTypeInfo,
    FormatRequest,
    FormatResult,
    FormattingOptions,
)
from abntcite.services.abnt_formatter import (
    ENTRY_FORMATS,
    format_bibliography,
    render_reference_section,
)
from abntcite.services.bibtex_reader import BibtexParseError, parse_bibtex
from abntcite.services.exceptions import CitationError

logger = logging.getLogger(__name__)

router = APIRouter()


def _format_bibtex(content: str, options: FormattingOptions) -> FormatResult:
    """Parse, format and render, translating failures to HTTP errors."""
    try:
        records = parse_bibtex(content)
    except BibtexParseError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    try:
        citations, excluded = format_bibliography(records, options)
    except CitationError as exc:
        logger.warning("Rejected bibliography: %s", exc)
        detail = CitationErrorDetail(citation_key=exc.citation_key, message=exc.message)
        raise HTTPException(status_code=422, detail=detail.model_dump())

    return FormatResult(
        citations=citations,
        excluded=excluded,
        document=render_reference_section(citations, options),
    )


@router.post("/format", response_model=FormatResult)
async def format_references(request: FormatRequest):
    """
    Format a BibTeX bibliography as an ABNT reference list.

    Returns:
        FormatResult with the sorted citations, the excluded keys and the
        rendered Markdown section
    """
    return _format_bibtex(request.bibtex, request.options)


@router.post("/format/file", response_model=FormatResult)
async def format_reference_file(
    file: UploadFile = File(...),
    exclude_prefix: str = Form("Self"),
    heading: str = Form("Referências"),
    wrap_html: bool = Form(True),
    clean_punctuation: bool = Form(True),
):
    """
    Format an uploaded .bib file.

    Args:
        file: The .bib file to format
        exclude_prefix: Citation-key prefix of entries to leave out
        heading: Section heading
        wrap_html: Whether to wrap the section in a <div>
        clean_punctuation: Whether to collapse doubled punctuation
    """
    if not file.filename or not file.filename.endswith(".bib"):
        raise HTTPException(status_code=400, detail="Only .bib files are supported")

    try:
        content = (await file.read()).decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File is not valid UTF-8")

    options = FormattingOptions(
        exclude_prefix=exclude_prefix,
        heading=heading,
        wrap_html=wrap_html,
        clean_punctuation=clean_punctuation,
    )
    return _format_bibtex(content, options)


@router.get("/entry-types", response_model=list[EntryTypeInfo])
async def list_entry_types():
    """List the entry types the formatter accepts."""
    return [
        EntryTypeInfo(entry_type=entry_type, formatter=entry_format)
        for entry_type, entry_format in ENTRY_FORMATS.items()
    ]
