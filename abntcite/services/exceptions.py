"""Errors raised while turning bibliographic records into ABNT citations."""

from typing import Optional


class CitationError(Exception):
    """Base class for records that cannot be formatted."""

    def __init__(self, message: str, citation_key: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.citation_key = citation_key


class MissingRequiredFields(CitationError):
    """One or more required fields are absent from a record."""

    def __init__(self, citation_key: Optional[str], missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            f"missing required fields: {', '.join(self.missing)} "
            f"(citation key: {citation_key})",
            citation_key,
        )


class InvalidEditorRole(CitationError):
    """An editor was given without the organizer role."""

    def __init__(self, citation_key: Optional[str]):
        super().__init__(
            f"invalid editor type: expecting organizer (citation key: {citation_key})",
            citation_key,
        )


class UnrecognizedEntryType(CitationError):
    """No formatter exists for the record's entry type."""

    def __init__(self, entry_type: str, citation_key: Optional[str] = None):
        self.entry_type = entry_type
        super().__init__(
            f"unexpected entry type: {entry_type} (citation key: {citation_key})",
            citation_key,
        )
