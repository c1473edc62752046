"""Line-based word list loading from local files and HTTP sources."""

import asyncio
from pathlib import Path
from typing import Any

import httpx


class WordListError(Exception):
    """Base exception for word list loading errors."""

    pass


class WordListNotFoundError(WordListError):
    """Word list file or URL does not exist."""

    pass


def parse_word_list(content: str) -> list[str]:
    """Split word list content into phrases, one per line.

    Surrounding whitespace is stripped and blank lines are skipped.
    """
    return [line.strip() for line in content.splitlines() if line.strip()]


def read_word_file(path: Path | str, encoding: str = "utf-8") -> list[str]:
    """Read a local word list.

    Args:
        path: Path to a text file with one phrase per line
        encoding: File encoding (default: UTF-8)

    Returns:
        List of phrases

    Raises:
        WordListNotFoundError: If the file does not exist
        WordListError: If the file cannot be read or decoded
    """
    path = Path(path)
    if not path.is_file():
        raise WordListNotFoundError(f"Word list not found: {path}")

    try:
        content = path.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        raise WordListError(f"Cannot decode word list {path}: {e}") from e
    except OSError as e:
        raise WordListError(f"Cannot read word list {path}: {e}") from e

    return parse_word_list(content)


class WordListClient:
    """Async client for fetching remote word lists.

    Args:
        timeout: Request timeout in seconds.
        max_retries: Attempts per fetch for rate limits and transport errors.
    """

    USER_AGENT = "wordmask/0.1.0"

    def __init__(self, timeout: float = 30.0, max_retries: int = 3):
        self.timeout = timeout
        self.max_retries = max_retries
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "WordListClient":
        """Async context manager entry."""
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": self.USER_AGENT},
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str) -> list[str]:
        """Download a word list with retry on rate limit and transport errors.

        Args:
            url: HTTP(S) URL of a text file with one phrase per line

        Returns:
            List of phrases

        Raises:
            WordListNotFoundError: If the server answers 404
            WordListError: For other HTTP errors or when retries are exhausted
        """
        client = await self._ensure_client()

        for attempt in range(self.max_retries):
            try:
                response = await client.get(url)

                if response.status_code == 404:
                    raise WordListNotFoundError(f"Word list not found: {url}")

                if response.status_code == 429:
                    if attempt < self.max_retries - 1:
                        wait_time = 2**attempt
                        print(f"Rate limited fetching {url}, waiting {wait_time}s before retry...")
                        await asyncio.sleep(wait_time)
                        continue
                    raise WordListError(f"Rate limit exceeded after retries: {url}")

                response.raise_for_status()
                return parse_word_list(response.text)

            except httpx.HTTPStatusError as e:
                raise WordListError(f"HTTP error {e.response.status_code}: {url}") from e
            except httpx.RequestError as e:
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(2**attempt)
                    continue
                raise WordListError(f"Request failed: {e}") from e

        raise WordListError("Max retries exceeded")
