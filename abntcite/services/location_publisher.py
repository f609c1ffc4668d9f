"""Place of publication and publisher rendering."""

from abntcite.services.names import split_and
from abntcite.services.tex_text import escape_tex


NO_PLACE = "[s.l.]"
NO_PUBLISHER = "[s.n.]"
NO_PLACE_NO_PUBLISHER = "[s.l.: s.n.]"


def format_location_publisher(locations: str, publishers: str) -> str:
    """
    Render "Place: Publisher" for possibly multi-valued fields.

    Both fields are split on " and ". Equal counts pair up positionally
    ("Belo Horizonte: Itatiaia; São Paulo: EDUSP"). Unequal counts cannot
    be paired, so each side is listed on its own with a final " e ".

    Args:
        locations: Raw location/address field, possibly empty
        publishers: Raw publisher field, possibly empty

    Returns:
        Formatted imprint
    """
    location_list = [value.strip() for value in split_and(locations.strip())]
    publisher_list = [value.strip() for value in split_and(publishers.strip())]

    if len(location_list) == len(publisher_list):
        return "; ".join(
            _format_pair(location, publisher)
            for location, publisher in zip(location_list, publisher_list)
        )

    return (
        f"{join_with_and([escape_tex(v) for v in location_list])}: "
        f"{join_with_and([escape_tex(v) for v in publisher_list])}"
    )


def _format_pair(location: str, publisher: str) -> str:
    if not location and not publisher:
        return NO_PLACE_NO_PUBLISHER
    if not location:
        return f"{NO_PLACE}: {escape_tex(publisher)}"
    if not publisher:
        return f"{escape_tex(location)}: {NO_PUBLISHER}"
    return f"{escape_tex(location)}: {escape_tex(publisher)}"


def join_with_and(items: list[str], separator: str = ", ", final: str = " e ") -> str:
    """Join items as "a, b e c"."""
    if len(items) < 2:
        return "".join(items)
    return separator.join(items[:-1]) + final + items[-1]
