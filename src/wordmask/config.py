"""Filter configuration from layered TOML files, reloaded on change."""

import asyncio
import os
import tomllib
from collections.abc import Callable, Coroutine
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from watchfiles import awatch

from wordmask.scanner import DEFAULT_NOISE, DEFAULT_PLACEHOLDER

ChangeCallback = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]


class ConfigError(ValueError):
    """A [filter] value has the wrong type or shape."""

    pass


def _string_list(section: dict[str, Any], key: str) -> tuple[str, ...]:
    value = section.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"filter.{key} must be a list of strings, got {value!r}")
    return tuple(value)


def _noise(section: dict[str, Any]) -> frozenset[str]:
    value = section.get("noise")
    if value is None:
        return DEFAULT_NOISE
    if isinstance(value, str):
        return frozenset(value)
    if isinstance(value, list) and all(isinstance(ch, str) and len(ch) == 1 for ch in value):
        return frozenset(value)
    raise ConfigError(f"filter.noise must be a string or a list of characters, got {value!r}")


@dataclass(frozen=True)
class FilterSettings:
    """Validated contents of the [filter] table.

    Attributes:
        words: Inline banned phrases
        word_files: Local word lists, resolved against the config directory
        word_urls: Remote word lists
        placeholder: Masking character
        noise: Characters skipped inside a match
    """

    words: tuple[str, ...] = ()
    word_files: tuple[Path, ...] = ()
    word_urls: tuple[str, ...] = ()
    placeholder: str = DEFAULT_PLACEHOLDER
    noise: frozenset[str] = DEFAULT_NOISE

    @classmethod
    def from_dict(cls, section: Any, base_dir: Path | None = None) -> "FilterSettings":
        """Validate a raw [filter] table.

        Raises:
            ConfigError: If any value has the wrong type
        """
        if section is None:
            section = {}
        if not isinstance(section, dict):
            raise ConfigError(f"[filter] must be a table, got {type(section).__name__}")

        placeholder = section.get("placeholder", DEFAULT_PLACEHOLDER)
        if not isinstance(placeholder, str) or len(placeholder) != 1:
            raise ConfigError(f"filter.placeholder must be one character, got {placeholder!r}")

        word_files = []
        for name in _string_list(section, "word_files"):
            path = Path(name).expanduser()
            if not path.is_absolute() and base_dir is not None:
                path = base_dir / path
            word_files.append(path)

        return cls(
            words=_string_list(section, "words"),
            word_files=tuple(word_files),
            word_urls=_string_list(section, "word_urls"),
            placeholder=placeholder,
            noise=_noise(section),
        )


def merge_tables(base: dict, overlay: dict) -> dict:
    """Return ``base`` with ``overlay`` merged in; nested tables merge, other values replace."""
    merged = deepcopy(base)
    for key, value in overlay.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = merge_tables(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


class Config:
    """A base TOML file with an optional overlay merged on top.

    While watching, an edit to either file or to a local word list named in
    [filter] reloads the config and runs the change callbacks.
    """

    def __init__(self, base_path: Path | str, overlay_path: Path | str | None = None):
        self.base_path = Path(base_path)
        self.overlay_path = Path(overlay_path) if overlay_path is not None else None
        self._config: dict[str, Any] = {}
        self._callbacks: list[ChangeCallback] = []
        self._watch_task: asyncio.Task | None = None

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from CONFIG_PATH and CONFIG_OVERLAY_PATH."""
        return cls(
            base_path=os.environ.get("CONFIG_PATH", "config.toml"),
            overlay_path=os.environ.get("CONFIG_OVERLAY_PATH") or None,
        )

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        with open(path, "rb") as f:
            return tomllib.load(f)

    def load(self) -> None:
        """Read the base file and merge the overlay when it exists and parses."""
        if not self.base_path.exists():
            raise FileNotFoundError(f"Base config not found: {self.base_path}")

        config = self._read(self.base_path)
        if self.overlay_path is not None and self.overlay_path.exists():
            try:
                config = merge_tables(config, self._read(self.overlay_path))
            except tomllib.TOMLDecodeError as e:
                print(f"Warning: Invalid overlay TOML, using base only: {e}")
        self._config = config

    def get(self, *keys: str, default: Any = None) -> Any:
        """Get a nested value, e.g. ``config.get("filter", "placeholder")``."""
        value: Any = self._config
        for key in keys:
            if not isinstance(value, dict) or key not in value:
                return default
            value = value[key]
        return value

    def filter_settings(self) -> FilterSettings:
        """Validated [filter] table with word files resolved next to the base config.

        Raises:
            ConfigError: If the table holds a value of the wrong type
        """
        return FilterSettings.from_dict(self.get("filter"), base_dir=self.base_path.parent)

    @property
    def data(self) -> dict[str, Any]:
        """Deep copy of the merged config."""
        return deepcopy(self._config)

    def on_change(self, callback: ChangeCallback) -> None:
        """Register an async callback that receives the merged config after a reload."""
        self._callbacks.append(callback)

    def watched_files(self) -> set[Path]:
        """Absolute paths of the config files and the local word lists they reference."""
        files = {self.base_path}
        if self.overlay_path is not None:
            files.add(self.overlay_path)
        try:
            files.update(self.filter_settings().word_files)
        except ConfigError:
            # The change handler reports the bad table
            pass
        return {path.absolute() for path in files}

    def _is_watched(self, _change: Any, path: str) -> bool:
        return Path(path) in self.watched_files()

    async def start_watching(self) -> None:
        """Start a background task that reloads on file changes."""
        if self._watch_task is not None:
            return

        directories = sorted({path.parent for path in self.watched_files() if path.parent.is_dir()})
        self._watch_task = asyncio.create_task(self._watch(directories))
        print(f"Config watcher started for: {[str(d) for d in directories]}")

    async def stop_watching(self) -> None:
        """Cancel the watcher task if one is running."""
        task, self._watch_task = self._watch_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        print("Config watcher stopped")

    async def _notify(self) -> None:
        for callback in self._callbacks:
            try:
                await callback(self._config)
            except Exception as e:
                print(f"Config callback error: {e}")

    async def _watch(self, directories: list[Path]) -> None:
        try:
            async for changes in awatch(*directories, watch_filter=self._is_watched, debounce=2000):
                print(f"Config changed: {sorted(path for _change, path in changes)}")
                try:
                    self.load()
                except Exception as e:
                    print(f"Config reload error: {e}")
                    continue
                await self._notify()
        except asyncio.CancelledError:
            pass
