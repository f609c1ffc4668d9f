"""Trailing note, link and access-date elements shared by all entry types."""

from dataclasses import dataclass
from typing import Optional

from abntcite.models.schemas import BibliographicRecord
from abntcite.services.fields import TagCollector
from abntcite.services.tex_text import escape_tex


MONTH_ABBREVIATIONS = [
    "jan", "fev", "mar", "abr", "mai", "jun",
    "jul", "ago", "set", "out", "nov", "dez",
]

DOI_PREFIXES = ("https://doi.org/", "http://doi.org/")

EXTRA_SLOTS: dict[str, tuple[str, ...]] = {
    "note": ("note",),
    "url": ("url",),
    "doi": ("doi",),
    "urldate": ("urldate",),
}


@dataclass
class ExtraInfo:
    """Optional elements appended after every citation body."""
    note: Optional[str] = None
    url: Optional[str] = None
    doi: Optional[str] = None
    url_date: Optional[str] = None


def extract_extra_info(record: BibliographicRecord) -> ExtraInfo:
    """Collect note, URL, DOI and access date from a record."""
    collector = TagCollector(EXTRA_SLOTS).collect(record)

    note = collector.get("note")
    if note is not None:
        note = note.rstrip(".") or None

    return ExtraInfo(
        note=note,
        url=collector.get("url"),
        doi=_strip_doi_prefix(collector.get("doi")),
        url_date=collector.get("urldate"),
    )


def format_extra_info(extra: ExtraInfo) -> str:
    """
    Render the trailing elements that are present.

    Order is note, then "Disponível em" (DOI preferred over URL), then
    "Acesso em". Each element starts with a space and ends with a period.
    """
    parts: list[str] = []

    if extra.note:
        parts.append(f" {escape_tex(extra.note)}.")

    if extra.doi:
        parts.append(f" Disponível em: <https://doi.org/{extra.doi}>.")
    elif extra.url:
        parts.append(f" Disponível em: <{extra.url}>.")

    if extra.url_date:
        parts.append(f" Acesso em: {format_date(extra.url_date)}.")

    return "".join(parts)


def format_date(value: str) -> str:
    """
    Render an ISO-like date in ABNT form.

    "2020-12-14" becomes "14 dez. 2020". Anything without a parseable day
    and a month in 1-12 is returned unchanged.
    """
    parts = value.split("-")
    if len(parts) < 3:
        return value

    year, month_text, day_text = parts[0], parts[1], parts[2]
    if not (month_text.isdecimal() and day_text.isdecimal()):
        return value

    month = int(month_text)
    day = int(day_text)
    if not 1 <= month <= 12:
        return value

    return f"{day} {MONTH_ABBREVIATIONS[month - 1]}. {year}"


def _strip_doi_prefix(doi: Optional[str]) -> Optional[str]:
    if doi is None:
        return None
    for prefix in DOI_PREFIXES:
        if doi.startswith(prefix):
            return doi[len(prefix):]
    return doi
