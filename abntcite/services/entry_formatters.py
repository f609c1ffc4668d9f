"""ABNT citation bodies, one formatter per entry type."""

from typing import Optional

from abntcite.services.extra_info import format_date
from abntcite.services.fields import (
    ArticleFields,
    BookFields,
    CollectionFields,
    InBookFields,
    InCollectionFields,
    InProceedingsFields,
    ThesisFields,
)
from abntcite.services.location_publisher import format_location_publisher
from abntcite.services.names import format_authors, strip_final_period
from abntcite.services.tex_text import escape_tex, split_once_free, uppercase


ORGANIZER_MARK = "(Org.)"


def strong(text: str) -> str:
    """Bold markup."""
    return f"<strong>{text}</strong>"


def format_volume(volume: str) -> str:
    return f"v. {escape_tex(volume)}"


def format_issue(issue: str) -> str:
    return f"n. {escape_tex(issue)}"


def format_pages(pages: str) -> str:
    """
    Render a page or page range.

    "201--226" becomes "p. 201–226"; a single page such as "v" becomes
    "p. v".
    """
    first, separator, last = pages.partition("--")
    if separator:
        return f"p. {escape_tex(first)}–{escape_tex(last)}"
    return f"p. {escape_tex(pages)}"


def _author_block(author: str) -> str:
    return strip_final_period(format_authors(author))


def _title_with_subtitle(title: str, subtitle: Optional[str], bold: bool = False) -> str:
    text = escape_tex(title)
    if bold:
        text = strong(text)
    if subtitle:
        text += f": {escape_tex(subtitle)}"
    return text


def _title_lead(title: str) -> tuple[str, Optional[str]]:
    """Split a title into its uppercased first word and the remainder."""
    pair = split_once_free(title, " ")
    if pair is None:
        return uppercase(escape_tex(title)), None
    start, rest = pair
    return uppercase(escape_tex(start)), rest


def format_article(fields: ArticleFields) -> str:
    """
    Format article-like entries (article, online, movie, misc).

    Without an author the first word of the title is uppercased and leads
    the citation, e.g. "TRANSLADO do Auto de Terras do Rio Grande. ...".
    """
    out = ""

    if fields.author:
        out += f"{_author_block(fields.author)}. "
        titles = [escape_tex(t) for t in (fields.title, fields.subtitle) if t]
        if titles:
            out += ": ".join(titles) + ". "
    elif fields.title:
        lead, rest = _title_lead(fields.title)
        heading = f"{lead} {escape_tex(rest)}" if rest else lead
        if fields.subtitle:
            heading += f": {escape_tex(fields.subtitle)}"
        out += heading + ". "
    elif fields.subtitle:
        out += escape_tex(fields.subtitle) + ". "

    parts: list[str] = []
    if fields.journal:
        parts.append(strong(escape_tex(fields.journal)))
    if fields.publisher:
        parts.append(format_location_publisher(fields.location or "", fields.publisher))
    elif fields.location:
        parts.append(escape_tex(fields.location))
    if fields.volume:
        parts.append(format_volume(fields.volume))
    if fields.issue:
        parts.append(format_issue(fields.issue))
    if fields.pages:
        parts.append(format_pages(fields.pages))
    if fields.year:
        parts.append(fields.year)
    elif fields.date:
        parts.append(format_date(fields.date))

    if parts:
        out += ", ".join(parts) + "."

    return out.rstrip()


def format_book(fields: BookFields) -> str:
    """Format a book; organizer-edited books carry "(Org.)"."""
    if fields.organizer:
        out = f"{format_authors(fields.names)} {ORGANIZER_MARK}. "
    else:
        out = f"{_author_block(fields.names)}. "

    if fields.title:
        out += _title_with_subtitle(fields.title, fields.subtitle, bold=True) + ". "

    imprint = format_location_publisher(fields.location, fields.publisher)
    return out + f"{imprint}, {fields.year}."


def format_thesis(fields: ThesisFields) -> str:
    out = (
        f"{_author_block(fields.author)}. "
        f"{_title_with_subtitle(fields.title, fields.subtitle, bold=True)}. "
        f"{fields.year}. "
        f"{escape_tex(fields.thesis_type)} – {escape_tex(fields.institution)}"
    )
    if fields.location:
        out += f", {escape_tex(fields.location)}"
    return out + "."


def format_inbook(fields: InBookFields) -> str:
    """
    Format a chapter of a book.

    The host book is introduced by its authors, or by its organizers, or,
    when neither exists, by its uppercased first word.
    """
    out = (
        f"{_author_block(fields.author)}. "
        f"{_title_with_subtitle(fields.title, fields.subtitle)}. In: "
    )

    book_authors = _author_block(fields.bookauthor) if fields.bookauthor else ""
    if not book_authors and fields.editor:
        book_authors = f"{format_authors(fields.editor)} {ORGANIZER_MARK}"

    if book_authors:
        out += (
            f"{book_authors}. "
            f"{_title_with_subtitle(fields.booktitle, fields.booksubtitle, bold=True)}."
        )
    else:
        lead, rest = _title_lead(fields.booktitle)
        heading = f"{lead} {escape_tex(rest)}" if rest else lead
        if fields.booksubtitle:
            heading += f": {escape_tex(fields.booksubtitle)}"
        out += f"{heading}."

    imprint = format_location_publisher(fields.location, fields.publisher)
    return out + f" {imprint}, {fields.year}."


def format_incollection(fields: InCollectionFields) -> str:
    imprint = format_location_publisher(fields.location, fields.publisher)
    return (
        f"{_author_block(fields.author)}. "
        f"{_title_with_subtitle(fields.title, fields.subtitle)}. "
        f"In: {format_authors(fields.editor)} {ORGANIZER_MARK}. "
        f"{_title_with_subtitle(fields.booktitle, fields.booksubtitle, bold=True)}. "
        f"{imprint}, {fields.year}."
    )


def format_inproceedings(fields: InProceedingsFields) -> str:
    """Format a conference paper: "In: EVENT TITLE, number, year, place."."""
    details = [
        escape_tex(part)
        for part in (fields.number, fields.year, fields.location)
        if part
    ]
    return (
        f"{_author_block(fields.author)}. "
        f"{_title_with_subtitle(fields.title, fields.subtitle)}. "
        f"In: {uppercase(escape_tex(fields.eventtitle))}, {', '.join(details)}."
    )


def format_collection(fields: CollectionFields) -> str:
    imprint = format_location_publisher(fields.location, fields.publisher)
    return (
        f"{format_authors(fields.editor)} {ORGANIZER_MARK}. "
        f"{_title_with_subtitle(fields.title, fields.subtitle, bold=True)}. "
        f"{imprint}, {fields.year}."
    )
