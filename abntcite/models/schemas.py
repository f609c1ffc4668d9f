"""Pydantic models for AbntCite."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class EntryFormat(str, Enum):
    """Formatters available for entry types."""
    ARTICLE = "article"
    BOOK = "book"
    THESIS = "thesis"
    INBOOK = "inbook"
    INCOLLECTION = "incollection"
    INPROCEEDINGS = "inproceedings"
    COLLECTION = "collection"


class BibliographicRecord(BaseModel):
    """A parsed bibliography entry: type, key and ordered tag pairs."""
    entry_type: str = Field(..., description="Entry type, e.g. 'article' or 'book'")
    citation_key: str = Field(..., description="Citation key of the entry")
    tags: list[tuple[str, str]] = Field(
        default_factory=list,
        description="Ordered (field name, field value) pairs",
    )

    def first(self, name: str) -> Optional[str]:
        """Return the value of the first tag called ``name``."""
        for key, value in self.tags:
            if key == name:
                return value
        return None


class FormattingOptions(BaseModel):
    """Options for rendering a reference list."""
    exclude_prefix: str = Field(
        default="Self",
        description="Entries whose citation key starts with this prefix are left out",
    )
    heading: str = Field(default="Referências", description="Section heading")
    wrap_html: bool = Field(default=True, description="Wrap the section in a <div>")
    clean_punctuation: bool = Field(
        default=True,
        description="Collapse doubled punctuation at field junctions",
    )


class FormatRequest(BaseModel):
    """BibTeX payload to format."""
    bibtex: str = Field(..., description="BibTeX source")
    options: FormattingOptions = Field(default_factory=FormattingOptions)


class FormatResult(BaseModel):
    """Formatted reference list."""
    citations: list[str] = Field(default_factory=list, description="Citations in sort order")
    excluded: list[str] = Field(
        default_factory=list,
        description="Citation keys left out by the exclusion prefix",
    )
    document: str = Field(default="", description="Rendered Markdown reference section")


class EntryTypeInfo(BaseModel):
    """An entry type accepted by the formatter."""
    entry_type: str
    formatter: EntryFormat


class CitationErrorDetail(BaseModel):
    """Error payload for a record that cannot be formatted."""
    citation_key: Optional[str] = None
    message: str
