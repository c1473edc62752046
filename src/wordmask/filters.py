"""Content filtering with a hot-swappable banned phrase dictionary."""

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from wordmask.loader import WordListClient, WordListError, read_word_file
from wordmask.scanner import DEFAULT_NOISE, DEFAULT_PLACEHOLDER, MatchSpan, Scanner
from wordmask.trie import Trie

if TYPE_CHECKING:
    from wordmask.config import Config, FilterSettings


class ContentFilter:
    """Detects and masks banned phrases in text.

    Holds a single reference to the active scanner. Loading a new dictionary
    builds a fresh trie and swaps the reference, so scans already in progress
    finish against the dictionary they started with.
    """

    def __init__(
        self,
        words: Iterable[str | None] | None = None,
        placeholder: str = DEFAULT_PLACEHOLDER,
        noise: Iterable[str] = DEFAULT_NOISE,
        base_dir: Path | str | None = None,
    ):
        self.base_dir = Path(base_dir) if isinstance(base_dir, str) else base_dir
        self._scanner = Scanner(Trie.load(words), noise=frozenset(noise), placeholder=placeholder)

    @property
    def trie(self) -> Trie:
        """The active dictionary."""
        return self._scanner.trie

    @property
    def placeholder(self) -> str:
        return self._scanner.placeholder

    @property
    def noise(self) -> frozenset[str]:
        return self._scanner.noise

    @property
    def word_count(self) -> int:
        """Number of distinct phrases in the active dictionary."""
        return len(self._scanner.trie)

    def load(self, phrases: Iterable[str | None] | None) -> None:
        """Replace the active dictionary with ``phrases``."""
        current = self._scanner
        self._scanner = Scanner(
            Trie.load(phrases), noise=current.noise, placeholder=current.placeholder
        )

    def _resolve(self, path: Path | str) -> Path:
        path = Path(path).expanduser()
        if not path.is_absolute() and self.base_dir is not None:
            path = self.base_dir / path
        return path

    def load_file(self, path: Path | str) -> bool:
        """Replace the dictionary with the contents of a local word list.

        Returns:
            True if loaded. On failure a warning is printed and the
            previous dictionary stays active.
        """
        try:
            words = read_word_file(self._resolve(path))
        except WordListError as e:
            print(f"Warning: Word list not loaded, keeping previous dictionary: {e}")
            return False
        self.load(words)
        print(f"Content filter loaded {self.word_count} words from {path}")
        return True

    async def load_url(self, url: str, client: WordListClient | None = None) -> bool:
        """Replace the dictionary with a remote word list.

        Args:
            url: HTTP(S) URL of the word list
            client: Optional shared client (a temporary one is used otherwise)

        Returns:
            True if loaded, False if the previous dictionary was kept
        """
        try:
            if client is None:
                async with WordListClient() as temp_client:
                    words = await temp_client.fetch(url)
            else:
                words = await client.fetch(url)
        except WordListError as e:
            print(f"Warning: Word list not loaded, keeping previous dictionary: {e}")
            return False
        self.load(words)
        print(f"Content filter loaded {self.word_count} words from {url}")
        return True

    @staticmethod
    def _read_local(settings: "FilterSettings") -> list[str]:
        """Inline words followed by the contents of every local word file."""
        words = list(settings.words)
        for path in settings.word_files:
            words.extend(read_word_file(path))
        return words

    @classmethod
    def from_config(cls, config: "Config") -> "ContentFilter":
        """Create filter from the [filter] section of a Config.

        Inline words and local word files are loaded; remote ``word_urls``
        need network access and are loaded by ``reload()``.

        Raises:
            ConfigError: If the [filter] section is malformed
        """
        settings = config.filter_settings()
        content_filter = cls(
            placeholder=settings.placeholder,
            noise=settings.noise,
            base_dir=config.base_path.parent,
        )
        try:
            content_filter.load(cls._read_local(settings))
        except WordListError as e:
            print(f"Warning: Content filter starting with empty dictionary: {e}")
        return content_filter

    async def reload(
        self, settings: "FilterSettings", client: WordListClient | None = None
    ) -> bool:
        """Rebuild the dictionary from every source in ``settings``.

        All sources must load; if any fails the previous dictionary and
        settings stay active.

        Returns:
            True if the new dictionary was swapped in
        """
        try:
            words = self._read_local(settings)
            if settings.word_urls:
                if client is None:
                    async with WordListClient() as temp_client:
                        for url in settings.word_urls:
                            words.extend(await temp_client.fetch(url))
                else:
                    for url in settings.word_urls:
                        words.extend(await client.fetch(url))
        except WordListError as e:
            print(f"Warning: Content filter reload failed, keeping previous dictionary: {e}")
            return False

        self._scanner = Scanner(
            Trie.load(words), noise=settings.noise, placeholder=settings.placeholder
        )
        print(f"Content filter reloaded: {self.word_count} words")
        return True

    def find(self, text: str | None) -> list[MatchSpan]:
        """Return all match spans in ``text``."""
        return self._scanner.find(text)

    def mask(self, text: str | None) -> str | None:
        """Mask every banned phrase in ``text`` with the placeholder."""
        return self._scanner.mask(text)

    def contains(self, text: str | None) -> bool:
        """True if ``text`` contains a banned phrase."""
        return self._scanner.contains(text)

    def check(self, text: str | None) -> tuple[bool, str | None]:
        """Check text against the dictionary.

        Args:
            text: The text to check

        Returns:
            Tuple of (allowed, matched_phrase). If allowed is True, matched_phrase
            is None. Otherwise it holds the first match with noise removed.
        """
        scanner = self._scanner
        spans = scanner.find(text)
        if not spans:
            return True, None
        matched = "".join(ch for ch in spans[0].text if ch not in scanner.noise)
        return False, matched
