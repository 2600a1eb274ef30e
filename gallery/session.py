"""
Headless gallery state: the collection of loaded foxes, likes, the modal
viewer and sharing. A UI layer renders from this and calls into it.
"""
from typing import Callable, Dict, List, Optional

import structlog

from gallery.loader import FoxBatchLoader
from gallery.models import FoxRecord

logger = structlog.get_logger(__name__)

SHARE_TITLE = "Cute Fox 🦊"


class FoxGallery:
    """Owns the accumulated foxes and the UI state around them."""

    def __init__(self, loader: FoxBatchLoader, initial_count: int = 9, load_more_count: int = 3):
        self.loader = loader
        self.initial_count = initial_count
        self.load_more_count = load_more_count
        self.foxes: List[FoxRecord] = []
        self.modal_fox: Optional[FoxRecord] = None
        self.modal_open = False

    @property
    def loading(self) -> bool:
        return self.loader.loading

    async def mount(self) -> List[FoxRecord]:
        """Load the first page of foxes, unless some are loaded or loading."""
        if self.foxes:
            return []
        if self.loading:
            logger.info("mount_ignored", reason="batch in flight")
            return []
        loaded = await self._append_batch(self.initial_count)
        logger.info("gallery_mounted", loaded=len(loaded))
        return loaded

    async def load_more(self, count: int = None) -> List[FoxRecord]:
        """Append another batch. Does nothing while a batch is loading."""
        if self.loading:
            logger.info("load_more_ignored", reason="batch in flight")
            return []
        return await self._append_batch(self.load_more_count if count is None else count)

    async def _append_batch(self, count: int) -> List[FoxRecord]:
        loaded = await self.loader.load_batch(count)
        self.foxes.extend(loaded)
        return loaded

    def get(self, fox_id: str) -> FoxRecord:
        for fox in self.foxes:
            if fox.id == fox_id:
                return fox
        raise KeyError(fox_id)

    def toggle_like(self, fox_id: str) -> bool:
        fox = self.get(fox_id)
        fox.liked = not fox.liked
        return fox.liked

    def liked_foxes(self) -> List[FoxRecord]:
        return [fox for fox in self.foxes if fox.liked]

    def open_modal(self, fox_id: str):
        self.modal_fox = self.get(fox_id)
        self.modal_open = True

    def close_modal(self):
        self.modal_open = False
        self.modal_fox = None

    def share(
        self,
        fox_id: str,
        share: Callable[[Dict[str, str]], None] = None,
        copy: Callable[[str], None] = None,
    ) -> Dict[str, str]:
        """Share a fox's source link.

        Prefers the native ``share`` sheet, falls back to ``copy`` (clipboard).
        With neither available the link is handed back for display.
        """
        link = self.get(fox_id).source_link
        if share is not None:
            share({"title": SHARE_TITLE, "url": link})
            status = "shared"
        elif copy is not None:
            copy(link)
            status = "copied"
        else:
            status = "unavailable"
        logger.info("fox_shared", fox_id=fox_id, status=status)
        return {"status": status, "url": link}
