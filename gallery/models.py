"""
Fox records and the provider payload schema.
"""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class FoxPayload(BaseModel):
    """Body returned by the provider: ``{"image": ..., "link": ...}``."""
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

    image: str = Field(min_length=1)
    link: str = Field(min_length=1)


class FoxRecord:
    """A fetched fox.

    ``id``, ``image_url`` and ``source_link`` are read-only once built.
    ``liked`` belongs to the display layer; the loader only initializes it.
    """

    __slots__ = ('_id', '_image_url', '_source_link', 'liked')

    def __init__(self, id: str, image_url: str, source_link: str, liked: bool = False):
        if not image_url or not source_link:
            raise ValueError("image_url and source_link must be non-empty")
        self._id = id
        self._image_url = image_url
        self._source_link = source_link
        self.liked = liked

    @classmethod
    def from_payload(cls, id: str, payload: FoxPayload) -> "FoxRecord":
        return cls(id=id, image_url=payload.image, source_link=payload.link)

    @property
    def id(self) -> str:
        return self._id

    @property
    def image_url(self) -> str:
        return self._image_url

    @property
    def source_link(self) -> str:
        return self._source_link

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self._id,
            'image_url': self._image_url,
            'source_link': self._source_link,
            'liked': self.liked,
        }

    def __repr__(self) -> str:
        return f"FoxRecord(id={self._id!r}, image_url={self._image_url!r}, liked={self.liked!r})"
