"""wordmask - mask banned phrases in stdin."""

import asyncio
import sys
from contextlib import redirect_stdout

from wordmask.config import Config
from wordmask.filters import ContentFilter


def main() -> None:
    """Mask stdin line by line using the filter from CONFIG_PATH."""
    # Status messages go to stderr so stdout carries only masked text
    with redirect_stdout(sys.stderr):
        config = Config.from_env()
        config.load()

        content_filter = ContentFilter.from_config(config)
        settings = config.filter_settings()
        if settings.word_urls:
            asyncio.run(content_filter.reload(settings))

    for line in sys.stdin:
        sys.stdout.write(content_filter.mask(line) or line)


if __name__ == "__main__":
    main()
