"""
Loads batches of foxes from the provider.

Every request of a batch is issued at once and the batch is joined with an
all-settled barrier, so a slow or failing fox never blocks its siblings.
Failed requests are dropped from the result; the surviving foxes keep the
order their requests were issued in.
"""
import asyncio
import uuid
from typing import Callable, List, Optional

import structlog
from pydantic import ValidationError

from gallery.errors import FetcherUnavailableError
from gallery.fetcher import HTTPFetcher
from gallery.models import FoxPayload, FoxRecord

logger = structlog.get_logger(__name__)

DEFAULT_PROVIDER_URL = "https://randomfox.ca/floof/"


def new_fox_id() -> str:
    return uuid.uuid4().hex


def _check_count(count: int):
    if isinstance(count, bool) or not isinstance(count, int):
        raise TypeError(f"count must be an int, got {type(count).__name__}")
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")


class FoxBatchLoader:
    """Fetches foxes in concurrent batches.

    ``loading`` is True while a batch is in flight. Overlapping
    ``load_batch`` calls on one loader are not serialized: whichever finishes
    first clears the flag while the other is still running. Callers that
    care (FoxGallery does) must not start a batch while ``loading`` is set.
    """

    def __init__(
        self,
        fetcher: HTTPFetcher = None,
        provider_url: str = DEFAULT_PROVIDER_URL,
        id_factory: Callable[[], str] = None,
    ):
        self.fetcher = fetcher
        self.provider_url = provider_url
        self.id_factory = id_factory or new_fox_id
        self.loading = False

    async def load_batch(self, count: int) -> List[FoxRecord]:
        """Fetch ``count`` foxes concurrently and return the ones that arrived.

        ``count == 0`` returns an empty list without touching the network.
        Raises FetcherUnavailableError when the fetcher is missing or cannot
        issue requests at all; individual fetch failures never raise.
        """
        _check_count(count)
        self.loading = True
        try:
            if self.fetcher is None:
                raise FetcherUnavailableError("No fetcher configured")

            logger.info("fox_batch_started", count=count, provider_url=self.provider_url)
            results = await asyncio.gather(
                *(self._fetch_fox(slot) for slot in range(count)),
                return_exceptions=True,
            )

            foxes = []
            for slot, result in enumerate(results):
                if isinstance(result, FetcherUnavailableError):
                    raise result
                if isinstance(result, BaseException):
                    logger.warning("fox_fetch_failed", slot=slot, reason=repr(result))
                    continue
                if result is not None:
                    foxes.append(result)

            logger.info("fox_batch_finished", requested=count, loaded=len(foxes))
            return foxes
        finally:
            self.loading = False

    async def _fetch_fox(self, slot: int) -> Optional[FoxRecord]:
        """Fetch one fox. Returns None when this slot failed."""
        result = await self.fetcher.fetch(self.provider_url)

        if not result.success:
            logger.warning(
                "fox_fetch_failed",
                slot=slot,
                status_code=result.status_code,
                size=result.size,
                fetch_time=result.fetch_time,
                reason=result.error or f"HTTP {result.status_code}",
            )
            return None

        try:
            payload = FoxPayload.model_validate_json(result.content)
        except ValidationError as e:
            logger.warning("fox_fetch_failed", slot=slot, reason="malformed payload",
                           size=result.size, error_count=e.error_count())
            return None

        return FoxRecord.from_payload(self.id_factory(), payload)
