"""Config change handling for the content filter."""

from collections.abc import Callable, Coroutine
from typing import TYPE_CHECKING, Any

from wordmask.config import ConfigError, FilterSettings

if TYPE_CHECKING:
    from wordmask.filters import ContentFilter
    from wordmask.loader import WordListClient


def create_config_change_handler(
    content_filter: "ContentFilter",
    client: "WordListClient | None" = None,
) -> Callable[[dict[str, Any]], Coroutine[Any, Any, None]]:
    """Create a config change callback that rebuilds the dictionary.

    Args:
        content_filter: The filter to reload on config changes
        client: Optional shared client for remote word lists

    Returns:
        Async callback function for config.on_change()
    """

    async def on_config_change(new_config: dict[str, Any]) -> None:
        try:
            settings = FilterSettings.from_dict(
                new_config.get("filter"), base_dir=content_filter.base_dir
            )
        except ConfigError as e:
            print(f"Warning: Invalid [filter] config, keeping previous dictionary: {e}")
            return
        if not await content_filter.reload(settings, client=client):
            print("Content filter unchanged after config change")

    return on_config_change
