"""Shared fixtures for wordmask tests."""

from pathlib import Path

import pytest

from wordmask.trie import Trie


@pytest.fixture
def base_config_content() -> str:
    """Minimal valid TOML config."""
    return """
[filter]
words = ["banned", "forbidden"]
placeholder = "*"
"""


@pytest.fixture
def base_config_file(tmp_path: Path, base_config_content: str) -> Path:
    """Create a temporary base config file."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(base_config_content)
    return config_file


@pytest.fixture
def word_file(tmp_path: Path) -> Path:
    """Word list with one phrase per line."""
    path = tmp_path / "words.txt"
    path.write_text("白日梦\n白痴不白痴\n\n  白痴是你  \nTMD\n", encoding="utf-8")
    return path


@pytest.fixture
def sample_trie() -> Trie:
    """Trie with overlapping and prefix phrases."""
    return Trie.load(["白日梦", "白痴不白痴", "白痴是你", "TMD"])

