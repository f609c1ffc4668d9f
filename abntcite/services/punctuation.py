"""Punctuation cleanup for text assembled from several fields.

Joining fields often doubles punctuation ("Why?." or "Org.:"). When one
punctuation character directly follows another, the second is kept only
for the pairs in ``KEPT_PAIRS`` and dropped otherwise.
"""

from typing import Optional, TextIO


PUNCTUATION = frozenset(".;?!…:,")

KEPT_PAIRS = frozenset({"??", "?!", "!?", "!!", "..", ".;"})


class PunctuationFilter:
    """
    Text stream wrapper that drops doubled punctuation.

    The previous character is remembered across ``write`` calls. The
    wrapped stream is flushed after every newline.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream
        self._previous: Optional[str] = None

    def write(self, text: str) -> int:
        for char in text:
            previous = self._previous
            self._previous = char

            if (
                previous in PUNCTUATION
                and char in PUNCTUATION
                and previous + char not in KEPT_PAIRS
            ):
                continue

            self.stream.write(char)
            if char == "\n":
                self.stream.flush()
        return len(text)

    def flush(self) -> None:
        self.stream.flush()


def clean_punctuation(text: str) -> str:
    """Return ``text`` with doubled punctuation removed."""
    out: list[str] = []
    previous: Optional[str] = None
    for char in text:
        if not (
            previous in PUNCTUATION
            and char in PUNCTUATION
            and previous + char not in KEPT_PAIRS
        ):
            out.append(char)
        previous = char
    return "".join(out)
