"""Sort keys for ordering a reference list."""

from dataclasses import dataclass, field
from typing import Optional

from abntcite.models.schemas import BibliographicRecord
from abntcite.services.fields import TagCollector
from abntcite.services.names import format_authors


SORT_SLOTS: dict[str, tuple[str, ...]] = {
    "sorttitle": ("sorttitle",),
    "author": ("author",),
    "editor": ("editor", "organizer"),
    "title": ("title",),
    "year": ("year",),
}


@dataclass(frozen=True, order=True)
class SortKey:
    """
    Ordering key of a record: resolved key first, year as tiebreaker.

    A missing key or year sorts before any present one.
    """
    key: Optional[str] = field(default=None, compare=False)
    year: Optional[str] = field(default=None, compare=False)
    _order: tuple = field(default=(), init=False, repr=False)

    def __post_init__(self):
        order = (
            self.key is not None, self.key or "",
            self.year is not None, self.year or "",
        )
        object.__setattr__(self, "_order", order)


def resolve_sort_key(record: BibliographicRecord) -> SortKey:
    """
    Derive the sort key of a record.

    The key is the sort title, else the formatted author, else the
    formatted editor, else the raw title.
    """
    collector = TagCollector(SORT_SLOTS).collect(record)

    key = collector.get("sorttitle")
    if key is None:
        names = collector.get("author") or collector.get("editor")
        if names is not None:
            key = format_authors(names)
        else:
            key = collector.get("title")

    return SortKey(key=key, year=collector.get("year"))


def sort_records(records: list[BibliographicRecord]) -> list[BibliographicRecord]:
    """Return records in reference-list order (stable for equal keys)."""
    return sorted(records, key=resolve_sort_key)
