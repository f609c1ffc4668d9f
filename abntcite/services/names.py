"""Author and editor name formatting for ABNT references."""

import re

from abntcite.services.tex_text import rfind_free, split_once_free, uppercase


# Separator between names (and between parallel location/publisher values)
AND_PATTERN = re.compile(r" and ", re.IGNORECASE)

ET_AL = "<em>et al</em>"

# ABNT lists up to three authors before switching to "et al."
MAX_LISTED_AUTHORS = 3


def split_and(value: str) -> list[str]:
    """Split a field on the case-insensitive `` and `` separator."""
    return AND_PATTERN.split(value)


def format_name(name: str) -> str:
    """
    Format one name surname-first with initials.

    "Family, Given" splits on the first comma outside braces; "Given Family"
    splits on the last space outside braces. Lowercase particles leading the
    family part ("de", "del") move after the initials.

    Args:
        name: A single raw name, e.g. "del Priori, M."

    Returns:
        Formatted name, e.g. "PRIORI, M. del"
    """
    name = name.strip()
    particles = []

    pair = split_once_free(name, ",")
    if pair is not None:
        family, given = pair
    else:
        index = rfind_free(name, " ")
        if index is None:
            # Mononym: no reordering, no initials
            return uppercase(name)
        given_parts = name[:index].split()
        family = name[index + 1:]
        # "Ludwig van Beethoven": particles sit right before the family name
        while given_parts and given_parts[-1][:1].islower():
            particles.insert(0, given_parts.pop())
        given = " ".join(given_parts)

    family_parts = family.split()
    while family_parts and family_parts[0][:1].islower():
        particles.append(family_parts.pop(0))

    formatted = " ".join(uppercase(part) for part in family_parts)

    initials = format_initials(given)
    # "Family, " keeps its comma even when the given part is empty
    if initials or pair is not None:
        formatted += f", {initials}"

    for particle in particles:
        formatted += f" {particle}"

    return formatted


def format_initials(given: str) -> str:
    """Reduce given names to initials: "Maria de Lourdes" -> "M. d. L."."""
    initials = []
    for part in given.split():
        letters = part.lstrip("{}")
        if letters:
            initials.append(f"{letters[0]}.")
    return " ".join(initials)


def format_authors(value: str) -> str:
    """
    Format an " and "-separated list of names.

    Up to three names are all listed, joined with "; ". Four or more are
    reduced to the first name followed by the et al. marker.

    Args:
        value: Raw author or editor field

    Returns:
        Formatted author block, or an empty string for empty input
    """
    if not value.strip():
        return ""

    names = [name.strip() for name in split_and(value.strip())]

    if len(names) > MAX_LISTED_AUTHORS:
        return f"{format_name(names[0])}; {ET_AL}"

    return "; ".join(format_name(name) for name in names)


def strip_final_period(text: str) -> str:
    """Drop one trailing period so a caller can add its own punctuation."""
    if text.endswith("."):
        return text[:-1]
    return text
