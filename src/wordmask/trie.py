"""Character-keyed prefix tree of banned phrases."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass
class TrieNode:
    """One character position shared by every phrase with the same prefix.

    Attributes:
        character: The character this node matches
        terminal: True if a loaded phrase ends exactly here
        children: Continuations keyed by next character (empty for a leaf).
            A read-only view once the owning trie is built.
    """

    character: str
    terminal: bool = False
    children: Mapping[str, "TrieNode"] = field(default_factory=dict)


class Trie:
    """Immutable-after-build prefix tree.

    The root is implicit: the trie owns the root's children mapping directly.
    Every children mapping is exposed as a read-only view after the build.
    Build a new instance with ``Trie.load()`` instead of mutating an existing one.
    """

    def __init__(self) -> None:
        self._root: dict[str, TrieNode] = {}
        self._phrases: frozenset[str] = frozenset()
        self._characters: frozenset[str] = frozenset()

    @classmethod
    def load(cls, phrases: Iterable[str | None] | None) -> "Trie":
        """Build a trie from a phrase sequence.

        Duplicates are collapsed and None/empty entries are skipped.

        Args:
            phrases: Phrases to load (may be None)

        Returns:
            A new Trie holding every distinct non-empty phrase
        """
        trie = cls()
        if phrases is None:
            return trie

        unique = list(dict.fromkeys(p for p in phrases if p))
        for phrase in unique:
            level = trie._root
            node: TrieNode | None = None
            for ch in phrase:
                node = level.get(ch)
                if node is None:
                    node = TrieNode(ch)
                    level[ch] = node
                level = node.children  # type: ignore[assignment]
            assert node is not None
            # May be a node created earlier by a longer phrase
            node.terminal = True

        cls._freeze(trie._root)
        trie._phrases = frozenset(unique)
        trie._characters = frozenset(trie._root)
        return trie

    @staticmethod
    def _freeze(level: dict[str, TrieNode]) -> None:
        """Replace every children dict below ``level`` with a read-only view."""
        pending = list(level.values())
        while pending:
            node = pending.pop()
            pending.extend(node.children.values())
            node.children = MappingProxyType(node.children)

    def root_children(self) -> Mapping[str, TrieNode]:
        """Read-only view of the first-character level."""
        return MappingProxyType(self._root)

    def characters(self) -> frozenset[str]:
        """Characters that can begin a match."""
        return self._characters

    def child(self, node: TrieNode | None, character: str) -> TrieNode | None:
        """Look up a continuation of ``node`` (None means the root)."""
        level = self._root if node is None else node.children
        return level.get(character)

    @staticmethod
    def is_terminal(node: TrieNode) -> bool:
        return node.terminal

    @staticmethod
    def has_children(node: TrieNode) -> bool:
        return bool(node.children)

    def __len__(self) -> int:
        return len(self._phrases)

    def __bool__(self) -> bool:
        return bool(self._root)

    def __contains__(self, phrase: object) -> bool:
        return phrase in self._phrases

    def __repr__(self) -> str:
        return f"Trie(phrases={len(self._phrases)})"
