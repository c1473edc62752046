"""Noise-skipping, longest-match scanner over a phrase trie."""

from collections.abc import Iterator
from dataclasses import dataclass

from wordmask.trie import Trie

# Separators commonly inserted to split a banned phrase
DEFAULT_NOISE: frozenset[str] = frozenset(" !*-+_=,，.@;:；：")
DEFAULT_PLACEHOLDER = "*"


@dataclass(frozen=True)
class MatchSpan:
    """Inclusive character range of a confirmed match.

    Attributes:
        start: Index of the first matched character
        end: Index of the last matched character (inclusive)
        text: The covered slice of the input, noise included
    """

    start: int
    end: int
    text: str

    def __len__(self) -> int:
        return self.end - self.start + 1


def is_blank(text: str | None) -> bool:
    """True for None, empty, or whitespace-only text."""
    return not text or text.isspace()


class Scanner:
    """Finds and masks trie phrases in text.

    Matching is greedy per start position: the walk keeps descending while a
    continuation exists and the match ends at the last terminal reached.
    Noise characters are skipped without advancing the trie level but are
    masked when they fall inside a match.
    """

    def __init__(
        self,
        trie: Trie,
        noise: frozenset[str] | set[str] | str = DEFAULT_NOISE,
        placeholder: str = DEFAULT_PLACEHOLDER,
    ):
        if len(placeholder) != 1:
            raise ValueError(f"Placeholder must be a single character, got {placeholder!r}")
        self.trie = trie
        # Masked spans must stay visible to later scans
        self.noise = frozenset(noise) - {placeholder}
        self.placeholder = placeholder

    def _next_candidate(self, text: str, start: int) -> int:
        """Index of the next character at or after ``start`` that begins a phrase."""
        starts = self.trie.characters()
        for i in range(start, len(text)):
            if text[i] in starts:
                return i
        return -1

    def _walk(self, text: str, start: int) -> int:
        """Walk the trie from ``start``; return the last matched index or -1."""
        level = self.trie.root_children()
        end = -1
        for j in range(start, len(text)):
            ch = text[j]
            if ch in self.noise:
                continue
            node = level.get(ch)
            if node is None:
                break
            level = node.children
            if node.terminal or not node.children:
                end = j
                if not node.children:
                    break
        return end

    def _spans(self, text: str) -> Iterator[MatchSpan]:
        i = self._next_candidate(text, 0)
        while i != -1:
            end = self._walk(text, i)
            if end == -1:
                # Any later position may still start a phrase
                next_start = i + 1
            else:
                yield MatchSpan(start=i, end=end, text=text[i : end + 1])
                next_start = end + 1
            i = self._next_candidate(text, next_start)

    def find(self, text: str | None) -> list[MatchSpan]:
        """Return every match span in order of position."""
        if not self.trie or is_blank(text):
            return []
        assert text is not None
        return list(self._spans(text))

    def mask(self, text: str | None) -> str | None:
        """Replace every matched span with the placeholder character.

        Args:
            text: Input text (None and blank text are returned unchanged)

        Returns:
            Text of the same length with matched spans overwritten
        """
        if not self.trie or is_blank(text):
            return text
        assert text is not None

        chars: list[str] | None = None
        for span in self._spans(text):
            if chars is None:
                chars = list(text)
            chars[span.start : span.end + 1] = self.placeholder * len(span)

        if chars is None:
            return text
        return "".join(chars)

    def contains(self, text: str | None) -> bool:
        """True if masking would change the text."""
        if is_blank(text):
            return False
        return self.mask(text) != text
