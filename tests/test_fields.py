"""Tests for field extraction."""

import pytest

from abntcite.models.schemas import BibliographicRecord
from abntcite.services.exceptions import InvalidEditorRole, MissingRequiredFields
from abntcite.services.fields import (
    ARTICLE_SLOTS,
    TagCollector,
    extract_article,
    extract_book,
    extract_collection,
    extract_inbook,
    extract_incollection,
    extract_inproceedings,
    extract_thesis,
)


def _record(entry_type, key, **tags):
    return BibliographicRecord(
        entry_type=entry_type, citation_key=key, tags=list(tags.items())
    )


class TestTagCollector:
    """Tests for TagCollector class."""

    def test_first_synonym_wins(self):
        """Test that the first tag filling a slot is kept."""
        record = BibliographicRecord(
            entry_type="article",
            citation_key="k",
            tags=[("journal", "Primeira"), ("journaltitle", "Segunda")],
        )
        collector = TagCollector(ARTICLE_SLOTS).collect(record)
        assert collector.get("journal") == "Primeira"

    def test_values_trimmed(self):
        """Test that values are whitespace-trimmed."""
        collector = TagCollector(ARTICLE_SLOTS)
        collector.feed("title", "  Telenovela \n")
        assert collector.get("title") == "Telenovela"

    def test_blank_value_does_not_fill(self):
        """Test that a blank value leaves the slot open."""
        collector = TagCollector(ARTICLE_SLOTS)
        collector.feed("title", "   ")
        collector.feed("title", "Depois")
        assert collector.get("title") == "Depois"

    def test_tag_names_case_insensitive(self):
        """Test that tag names match regardless of case."""
        collector = TagCollector(ARTICLE_SLOTS)
        collector.feed("Pages", "27")
        assert collector.get("pages") == "27"

    def test_require_reports_all_missing(self):
        """Test that every missing slot is reported together."""
        collector = TagCollector(ARTICLE_SLOTS)
        collector.feed("title", "T")

        with pytest.raises(MissingRequiredFields) as exc_info:
            collector.require("k", "author", "title", "year")

        assert exc_info.value.missing == ["author", "year"]
        assert exc_info.value.citation_key == "k"


class TestExtractArticle:
    """Tests for extract_article function."""

    def test_synonyms(self):
        """Test journaltitle, number and page synonyms."""
        record = _record(
            "article", "Azevedo1959",
            journaltitle="Boletim", number="33", page="27", address="São Paulo",
        )
        fields = extract_article(record)
        assert fields.journal == "Boletim"
        assert fields.issue == "33"
        assert fields.pages == "27"
        assert fields.location == "São Paulo"

    def test_journal_alone_is_enough(self):
        """Test that a journal without author or title is accepted."""
        fields = extract_article(_record("article", "k", journal="Diário de Natal"))
        assert fields.author is None
        assert fields.title is None

    def test_nothing_identifying(self):
        """Test that an article without author, title or journal fails."""
        with pytest.raises(MissingRequiredFields) as exc_info:
            extract_article(_record("article", "Vazio", year="1900"))
        assert exc_info.value.missing == ["title"]


class TestExtractBook:
    """Tests for extract_book function."""

    def test_author_book(self):
        """Test a book with an author."""
        fields = extract_book(_record("book", "Passos1854", author="Passos, A. B.", year="1854"))
        assert fields.names == "Passos, A. B."
        assert fields.organizer is False
        assert fields.location == ""
        assert fields.publisher == ""

    def test_organizer_as_author(self):
        """Test that an organizer stands in for the author."""
        fields = extract_book(_record("book", "k", organizer="Lapa, J.", year="1980"))
        assert fields.names == "Lapa, J."
        assert fields.organizer is True

    def test_editor_with_organizer_role(self):
        """Test that an editor with the organizer role is accepted."""
        fields = extract_book(
            _record("book", "k", editor="Lapa, J.", editortype="organizer", year="1980")
        )
        assert fields.organizer is True

    def test_editor_without_role(self):
        """Test that a plain editor is rejected."""
        with pytest.raises(InvalidEditorRole):
            extract_book(_record("book", "k", editor="Lapa, J.", year="1980"))

    def test_missing_author_and_year(self):
        """Test that missing names and year are both reported."""
        with pytest.raises(MissingRequiredFields) as exc_info:
            extract_book(_record("book", "k", title="Sem autor"))
        assert exc_info.value.missing == ["author", "year"]


class TestExtractOtherTypes:
    """Tests for thesis, chapter, proceedings and collection extraction."""

    def test_thesis_missing_fields(self):
        """Test that a thesis reports each absent required field."""
        with pytest.raises(MissingRequiredFields) as exc_info:
            extract_thesis(_record("thesis", "Dias2011", author="Dias, T. A."))
        assert exc_info.value.missing == ["title", "year", "type", "institution"]

    def test_inbook_organizer_overrides_editor(self):
        """Test that an organizer tag replaces the editor."""
        fields = extract_inbook(
            _record(
                "inbook", "k",
                author="A, B.", title="T", booktitle="Livro", year="2001",
                editor="Editor, E.", organizer="Organizador, O.",
            )
        )
        assert fields.editor == "Organizador, O."

    def test_inbook_requires_booktitle(self):
        """Test that a chapter without its book fails."""
        with pytest.raises(MissingRequiredFields) as exc_info:
            extract_inbook(_record("inbook", "k", author="A, B.", title="T", year="2001"))
        assert exc_info.value.missing == ["booktitle"]

    def test_incollection_missing_editor(self):
        """Test that a collection chapter needs an organizer."""
        with pytest.raises(MissingRequiredFields) as exc_info:
            extract_incollection(
                _record("incollection", "k", author="A, B.", title="T", booktitle="L", year="2019")
            )
        assert exc_info.value.missing == ["editor"]

    def test_incollection_editor_role(self):
        """Test that a chapter editor must be an organizer."""
        with pytest.raises(InvalidEditorRole):
            extract_incollection(
                _record(
                    "incollection", "k",
                    author="A, B.", title="T", booktitle="L", year="2019", editor="E, F.",
                )
            )

    def test_inproceedings_event_synonyms(self):
        """Test venue and eventyear synonyms, first one winning."""
        fields = extract_inproceedings(
            _record(
                "inproceedings", "k",
                author="Motter, M.", title="Telenovela", eventtitle="Congresso",
                venue="Recife", eventyear="1998", location="Olinda", year="1999",
            )
        )
        assert fields.location == "Recife"
        assert fields.year == "1998"

    def test_collection_role_checked_before_required(self):
        """Test that the editor role fails before missing fields."""
        with pytest.raises(InvalidEditorRole) as exc_info:
            extract_collection(_record("collection", "Lapa1980", editor="Lapa, J. R. A."))
        assert exc_info.value.citation_key == "Lapa1980"

    def test_collection_missing(self):
        """Test the missing fields of an empty collection."""
        with pytest.raises(MissingRequiredFields) as exc_info:
            extract_collection(_record("collection", "k"))
        assert exc_info.value.missing == ["editor", "title", "year"]
