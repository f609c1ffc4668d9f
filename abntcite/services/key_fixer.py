"""Citation-key re-keying and BibTeX write-back.

Keys exported with a placeholder year (e.g. "silva2021") get a project
prefix and the entry's real year: "Selfsilva2021" with year 2019 becomes
"Selfsilva2019".
"""

from abntcite.models.schemas import BibliographicRecord


DEFAULT_PLACEHOLDER_YEAR = "2021"


def rekey_record(
    record: BibliographicRecord,
    prefix: str,
    placeholder: str = DEFAULT_PLACEHOLDER_YEAR,
) -> BibliographicRecord:
    """
    Prefix a record's citation key and substitute its year.

    Every occurrence of ``placeholder`` in the prefixed key is replaced by
    the value of the first ``year`` tag. Without a year only the prefix is
    added.

    Args:
        record: Record to re-key (left unchanged)
        prefix: Text prepended to the citation key
        placeholder: Year text to replace

    Returns:
        A copy of the record with the new key
    """
    key = prefix + record.citation_key
    year = record.first("year")
    if year is not None:
        key = key.replace(placeholder, year)
    return record.model_copy(update={"citation_key": key})


def render_bibtex_entry(record: BibliographicRecord) -> str:
    """
    Write a record back as a BibTeX entry.

    Field names are padded to one column past the longest name so the
    "=" signs line up. Fields keep their record order.
    """
    width = max((len(name) for name, _ in record.tags), default=0) + 1

    out = f"@{record.entry_type}{{{record.citation_key}"
    for name, value in record.tags:
        out += f",\n  {name:{width}}= {{{value}}}"
    return out + "\n}\n"


def fix_years(
    records: list[BibliographicRecord],
    prefix: str,
    placeholder: str = DEFAULT_PLACEHOLDER_YEAR,
) -> str:
    """Re-key every record and render them all as BibTeX."""
    return "".join(
        render_bibtex_entry(rekey_record(record, prefix, placeholder))
        for record in records
    )
