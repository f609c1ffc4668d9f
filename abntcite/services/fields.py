"""Field extraction: pull the tags each entry type needs out of a record."""

from dataclasses import dataclass
from typing import Optional

from abntcite.models.schemas import BibliographicRecord
from abntcite.services.exceptions import InvalidEditorRole, MissingRequiredFields


ORGANIZER_ROLE = "organizer"


class TagCollector:
    """
    Collect one value per logical field from a record's tags.

    Each logical field (slot) lists the tag names that fill it, synonyms
    included. The first non-empty tag seen for a slot wins; later tags for
    the same slot are ignored. Values are whitespace-trimmed.
    """

    def __init__(self, slots: dict[str, tuple[str, ...]]):
        self._slot_for_tag = {
            tag: slot for slot, tags in slots.items() for tag in tags
        }
        self._values: dict[str, str] = {}

    def feed(self, tag: str, value: str) -> None:
        """Offer one tag pair to the collector."""
        slot = self._slot_for_tag.get(tag.lower())
        if slot is None or slot in self._values:
            return
        value = value.strip()
        if value:
            self._values[slot] = value

    def collect(self, record: BibliographicRecord) -> "TagCollector":
        """Feed every tag of a record, in order."""
        for tag, value in record.tags:
            self.feed(tag, value)
        return self

    def get(self, slot: str) -> Optional[str]:
        return self._values.get(slot)

    def missing(self, *slots: str) -> list[str]:
        """Return the slots, among ``slots``, that were never filled."""
        return [slot for slot in slots if slot not in self._values]

    def require(self, citation_key: str, *slots: str) -> None:
        """
        Fail unless every slot in ``slots`` is filled.

        All missing slots are reported together, not just the first.

        Raises:
            MissingRequiredFields: If any slot is empty
        """
        missing = self.missing(*slots)
        if missing:
            raise MissingRequiredFields(citation_key, missing)


@dataclass
class ArticleFields:
    """Fields for article, online, movie and misc entries."""
    author: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    journal: Optional[str] = None
    location: Optional[str] = None
    publisher: Optional[str] = None
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None
    year: Optional[str] = None
    date: Optional[str] = None


@dataclass
class BookFields:
    """Fields for book entries. ``organizer`` marks editor-as-author."""
    names: str
    year: str
    organizer: bool = False
    title: Optional[str] = None
    subtitle: Optional[str] = None
    location: str = ""
    publisher: str = ""


@dataclass
class ThesisFields:
    author: str
    title: str
    year: str
    thesis_type: str
    institution: str
    subtitle: Optional[str] = None
    location: Optional[str] = None


@dataclass
class InBookFields:
    author: str
    title: str
    booktitle: str
    year: str
    subtitle: Optional[str] = None
    bookauthor: Optional[str] = None
    booksubtitle: Optional[str] = None
    editor: Optional[str] = None
    location: str = ""
    publisher: str = ""


@dataclass
class InCollectionFields:
    author: str
    title: str
    editor: str
    booktitle: str
    year: str
    subtitle: Optional[str] = None
    booksubtitle: Optional[str] = None
    location: str = ""
    publisher: str = ""


@dataclass
class InProceedingsFields:
    author: str
    title: str
    eventtitle: str
    year: str
    subtitle: Optional[str] = None
    number: Optional[str] = None
    location: Optional[str] = None


@dataclass
class CollectionFields:
    editor: str
    title: str
    year: str
    subtitle: Optional[str] = None
    location: str = ""
    publisher: str = ""


ARTICLE_SLOTS: dict[str, tuple[str, ...]] = {
    "author": ("author",),
    "title": ("title",),
    "subtitle": ("subtitle",),
    "journal": ("journal", "journaltitle"),
    "location": ("location", "address"),
    "publisher": ("publisher",),
    "issue": ("issue", "number"),
    "volume": ("volume",),
    "pages": ("page", "pages"),
    "year": ("year",),
    "date": ("date",),
}

BOOK_SLOTS: dict[str, tuple[str, ...]] = {
    "author": ("author",),
    "editor": ("editor",),
    "organizer": ("organizer",),
    "editortype": ("editortype",),
    "title": ("title",),
    "subtitle": ("subtitle",),
    "location": ("location", "address"),
    "publisher": ("publisher",),
    "year": ("year",),
}

THESIS_SLOTS: dict[str, tuple[str, ...]] = {
    "author": ("author",),
    "title": ("title",),
    "subtitle": ("subtitle",),
    "type": ("type",),
    "institution": ("institution",),
    "location": ("location", "address"),
    "year": ("year",),
}

INBOOK_SLOTS: dict[str, tuple[str, ...]] = {
    "author": ("author",),
    "title": ("title",),
    "subtitle": ("subtitle",),
    "booktitle": ("booktitle",),
    "booksubtitle": ("booksubtitle",),
    "bookauthor": ("bookauthor",),
    "editor": ("editor",),
    "organizer": ("organizer",),
    "location": ("location", "address"),
    "publisher": ("publisher",),
    "year": ("year",),
}

INCOLLECTION_SLOTS: dict[str, tuple[str, ...]] = {
    "author": ("author",),
    "title": ("title",),
    "subtitle": ("subtitle",),
    "booktitle": ("booktitle",),
    "booksubtitle": ("booksubtitle",),
    "editor": ("editor",),
    "organizer": ("organizer",),
    "editortype": ("editortype",),
    "location": ("location", "address"),
    "publisher": ("publisher",),
    "year": ("year",),
}

INPROCEEDINGS_SLOTS: dict[str, tuple[str, ...]] = {
    "author": ("author",),
    "title": ("title",),
    "subtitle": ("subtitle",),
    "eventtitle": ("eventtitle",),
    "number": ("number",),
    "location": ("location", "address", "venue"),
    "year": ("year", "eventyear"),
}

COLLECTION_SLOTS: dict[str, tuple[str, ...]] = {
    "editor": ("editor",),
    "organizer": ("organizer",),
    "editortype": ("editortype",),
    "title": ("title",),
    "subtitle": ("subtitle",),
    "location": ("location", "address"),
    "publisher": ("publisher",),
    "year": ("year",),
}


def organizer_names(collector: TagCollector, citation_key: str) -> Optional[str]:
    """
    Resolve the editor names for types that require the organizer role.

    An ``organizer`` tag always wins. An ``editor`` tag is accepted only
    together with ``editortype = organizer``.

    Raises:
        InvalidEditorRole: If an editor is given with another role
    """
    organizer = collector.get("organizer")
    if organizer:
        return organizer

    editor = collector.get("editor")
    if editor and collector.get("editortype") != ORGANIZER_ROLE:
        raise InvalidEditorRole(citation_key)
    return editor


def extract_article(record: BibliographicRecord) -> ArticleFields:
    """Extract fields for the article formatter."""
    collector = TagCollector(ARTICLE_SLOTS).collect(record)

    if not (collector.get("author") or collector.get("title") or collector.get("journal")):
        raise MissingRequiredFields(record.citation_key, ["title"])

    return ArticleFields(**{slot: collector.get(slot) for slot in ARTICLE_SLOTS})


def extract_book(record: BibliographicRecord) -> BookFields:
    """Extract fields for a book; editors stand in for a missing author."""
    collector = TagCollector(BOOK_SLOTS).collect(record)
    editor = organizer_names(collector, record.citation_key)
    author = collector.get("author")

    missing = collector.missing("year")
    if not (author or editor):
        missing.insert(0, "author")
    if missing:
        raise MissingRequiredFields(record.citation_key, missing)

    return BookFields(
        names=author or editor,
        organizer=not author,
        year=collector.get("year"),
        title=collector.get("title"),
        subtitle=collector.get("subtitle"),
        location=collector.get("location") or "",
        publisher=collector.get("publisher") or "",
    )


def extract_thesis(record: BibliographicRecord) -> ThesisFields:
    collector = TagCollector(THESIS_SLOTS).collect(record)
    collector.require(
        record.citation_key, "author", "title", "year", "type", "institution"
    )

    return ThesisFields(
        author=collector.get("author"),
        title=collector.get("title"),
        year=collector.get("year"),
        thesis_type=collector.get("type"),
        institution=collector.get("institution"),
        subtitle=collector.get("subtitle"),
        location=collector.get("location"),
    )


def extract_inbook(record: BibliographicRecord) -> InBookFields:
    collector = TagCollector(INBOOK_SLOTS).collect(record)
    collector.require(record.citation_key, "author", "title", "booktitle", "year")

    return InBookFields(
        author=collector.get("author"),
        title=collector.get("title"),
        booktitle=collector.get("booktitle"),
        year=collector.get("year"),
        subtitle=collector.get("subtitle"),
        bookauthor=collector.get("bookauthor"),
        booksubtitle=collector.get("booksubtitle"),
        editor=collector.get("organizer") or collector.get("editor"),
        location=collector.get("location") or "",
        publisher=collector.get("publisher") or "",
    )


def extract_incollection(record: BibliographicRecord) -> InCollectionFields:
    collector = TagCollector(INCOLLECTION_SLOTS).collect(record)
    editor = organizer_names(collector, record.citation_key)

    missing = collector.missing("author", "title")
    if not editor:
        missing.append("editor")
    missing.extend(collector.missing("booktitle", "year"))
    if missing:
        raise MissingRequiredFields(record.citation_key, missing)

    return InCollectionFields(
        author=collector.get("author"),
        title=collector.get("title"),
        editor=editor,
        booktitle=collector.get("booktitle"),
        year=collector.get("year"),
        subtitle=collector.get("subtitle"),
        booksubtitle=collector.get("booksubtitle"),
        location=collector.get("location") or "",
        publisher=collector.get("publisher") or "",
    )


def extract_inproceedings(record: BibliographicRecord) -> InProceedingsFields:
    collector = TagCollector(INPROCEEDINGS_SLOTS).collect(record)
    collector.require(record.citation_key, "author", "title", "eventtitle", "year")

    return InProceedingsFields(
        author=collector.get("author"),
        title=collector.get("title"),
        eventtitle=collector.get("eventtitle"),
        year=collector.get("year"),
        subtitle=collector.get("subtitle"),
        number=collector.get("number"),
        location=collector.get("location"),
    )


def extract_collection(record: BibliographicRecord) -> CollectionFields:
    collector = TagCollector(COLLECTION_SLOTS).collect(record)
    editor = organizer_names(collector, record.citation_key)

    missing = [] if editor else ["editor"]
    missing.extend(collector.missing("title", "year"))
    if missing:
        raise MissingRequiredFields(record.citation_key, missing)

    return CollectionFields(
        editor=editor,
        title=collector.get("title"),
        year=collector.get("year"),
        subtitle=collector.get("subtitle"),
        location=collector.get("location") or "",
        publisher=collector.get("publisher") or "",
    )
