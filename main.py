"""
Entrypoint: load config, mount a fox gallery, log what was loaded
"""

import asyncio
import sys

import structlog
from dotenv import load_dotenv

from gallery.config import Config
from gallery.errors import FetcherUnavailableError
from gallery.fetcher import HTTPFetcher
from gallery.loader import DEFAULT_PROVIDER_URL, FoxBatchLoader
from gallery.logs import configure_logging
from gallery.session import FoxGallery


async def main(count=None) -> int:
    """Wire dependencies, load one batch of foxes and print them

    ``count`` may be an int or the raw command-line string; None mounts.
    """
    # Load environment variables from .env file
    load_dotenv()
    config = Config()

    configure_logging(
        level=config.logging.get('level', 'INFO'),
        json=config.logging.get('json', True),
    )
    logger = structlog.get_logger(__name__)

    gallery_config = config.gallery
    async with HTTPFetcher.from_config(config.fetcher) as fetcher:
        loader = FoxBatchLoader(
            fetcher=fetcher,
            provider_url=config.provider.get('url', DEFAULT_PROVIDER_URL),
        )
        gallery = FoxGallery(
            loader,
            initial_count=gallery_config.get('initial_count', 9),
            load_more_count=gallery_config.get('load_more_count', 3),
        )

        try:
            if count is None:
                await gallery.mount()
            else:
                await gallery.load_more(int(count))
        except FetcherUnavailableError as e:
            logger.error("fatal_error", error=str(e))
            return 1
        except (TypeError, ValueError) as e:
            logger.error("invalid_count", count=count, error=str(e))
            return 2

    for fox in gallery.foxes:
        logger.info("fox_loaded", **fox.to_dict())
    return 0


if __name__ == "__main__":
    requested = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(asyncio.run(main(requested)))
