"""TeX-like markup handling for field values.

Covers the three text primitives every formatter relies on:

- ``escape_tex``: dashes, quotes and a few commands to typeset Unicode
- ``uppercase``: Unicode uppercasing that drops ``{``/``}`` grouping
- ``find_free`` / ``rfind_free`` / ``split_once_free``: delimiter
  matching that ignores anything inside ``{...}`` groups
"""

from enum import Enum
from typing import Optional


EN_DASH = "–"
EM_DASH = "—"
OPEN_SINGLE = "‘"
CLOSE_SINGLE = "’"
OPEN_DOUBLE = "“"
CLOSE_DOUBLE = "”"

COMMANDS: dict[str, str] = {
    "\\dots": "…",
    "\\&": "&",
    "\\$": "$",
}


class _State(Enum):
    NORMAL = "normal"
    DASH = "dash"
    EN_DASH = "en_dash"
    GRAVE = "grave"
    APOSTROPHE = "apostrophe"
    COMMAND = "command"


def escape_tex(text: str) -> str:
    """
    Rewrite TeX-like markup into display text.

    ``--`` and ``---`` become en and em dashes, ```` `` ```` and ``''``
    become curly double quotes, single back-ticks and apostrophes become
    curly single quotes, and ``\\dots``, ``\\&`` and ``\\$`` become their
    characters. Unknown commands are dropped and ``\\\\`` emits a single
    backslash.

    Args:
        text: Raw field value

    Returns:
        Display text
    """
    out: list[str] = []
    state = _State.NORMAL
    command_start = 0

    for i, char in enumerate(text):
        if state is _State.COMMAND:
            if char == " ":
                command = COMMANDS.get(text[command_start:i])
                if command is not None:
                    out.append(command + " ")
                state = _State.NORMAL
            elif char == "\\":
                if command_start == i - 1:
                    out.append("\\")
                    state = _State.NORMAL
                else:
                    out.append(COMMANDS.get(text[command_start:i], ""))
                    command_start = i
            continue

        if state is _State.DASH:
            if char == "-":
                state = _State.EN_DASH
                continue
            out.append("-")
        elif state is _State.EN_DASH:
            if char == "-":
                out.append(EM_DASH)
                state = _State.NORMAL
                continue
            out.append(EN_DASH)
        elif state is _State.GRAVE:
            if char == "`":
                out.append(OPEN_DOUBLE)
                state = _State.NORMAL
                continue
            out.append(OPEN_SINGLE)
        elif state is _State.APOSTROPHE:
            if char == "'":
                out.append(CLOSE_DOUBLE)
                state = _State.NORMAL
                continue
            out.append(CLOSE_SINGLE)

        # Pending state flushed above; handle the character from scratch.
        if char == "-":
            state = _State.DASH
        elif char == "`":
            state = _State.GRAVE
        elif char == "'":
            state = _State.APOSTROPHE
        elif char == "\\":
            state = _State.COMMAND
            command_start = i
        else:
            out.append(char)
            state = _State.NORMAL

    if state is _State.DASH:
        out.append("-")
    elif state is _State.EN_DASH:
        out.append(EN_DASH)
    elif state is _State.GRAVE:
        out.append(OPEN_SINGLE)
    elif state is _State.APOSTROPHE:
        out.append(CLOSE_SINGLE)
    elif state is _State.COMMAND:
        out.append(COMMANDS.get(text[command_start:], ""))

    return "".join(out)


def uppercase(text: str) -> str:
    """Uppercase text, dropping ``{`` and ``}`` grouping markers."""
    return "".join(char.upper() for char in text if char not in "{}")


def _free_positions(text: str, target: str) -> list[int]:
    """Indexes of ``target`` that sit outside any ``{...}`` group."""
    positions = []
    depth = 0
    for i, char in enumerate(text):
        if char == target and depth == 0:
            positions.append(i)
        elif char == "{":
            depth += 1
        elif char == "}":
            depth = max(depth - 1, 0)
    return positions


def find_free(text: str, target: str) -> Optional[int]:
    """Index of the first ``target`` outside braces, or None."""
    positions = _free_positions(text, target)
    return positions[0] if positions else None


def rfind_free(text: str, target: str) -> Optional[int]:
    """Index of the last ``target`` outside braces, or None."""
    positions = _free_positions(text, target)
    return positions[-1] if positions else None


def split_once_free(text: str, target: str) -> Optional[tuple[str, str]]:
    """
    Split on the first ``target`` that is not inside a ``{...}`` group.

    >>> split_once_free("Os{ }Multantes da Record", " ")
    ('Os{ }Multantes', 'da Record')
    """
    index = find_free(text, target)
    if index is None:
        return None
    return text[:index], text[index + 1:]
