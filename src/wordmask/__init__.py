"""Trie-based banned phrase detection and masking."""

from wordmask.config import Config, ConfigError, FilterSettings
from wordmask.filters import ContentFilter
from wordmask.scanner import DEFAULT_NOISE, DEFAULT_PLACEHOLDER, MatchSpan, Scanner
from wordmask.trie import Trie, TrieNode

__all__ = [
    "Config",
    "ConfigError",
    "FilterSettings",
    "DEFAULT_NOISE",
    "DEFAULT_PLACEHOLDER",
    "ContentFilter",
    "MatchSpan",
    "Scanner",
    "Trie",
    "TrieNode",
]
