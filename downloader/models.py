"""Data types passed between extraction, download and reporting."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class MediaKind(Enum):
    VIDEO = "video"
    PHOTO = "photo"


@dataclass(frozen=True)
class MediaDescriptor:
    """
    Normalized description of a single post, ready for download.

    Built once by either the page extractor or the fallback API resolver and
    consumed once by the media downloader.

    Args:
        kind: Video or photo post
        author_handle: Author's unique id (the @handle without the @)
        post_id: Post id
        created_at: Unix timestamp in seconds
        media_urls: Video URL, or image URLs in display order
        caption: Post description, if known
        author_nickname: Author's display name, if known
        source: "html" or "api", whichever path produced the descriptor
    """
    kind: MediaKind
    author_handle: str
    post_id: str
    created_at: int
    media_urls: Tuple[str, ...]
    caption: Optional[str] = None
    author_nickname: Optional[str] = None
    source: str = "html"

    def __post_init__(self):
        # Freeze whatever sequence was passed in
        object.__setattr__(self, 'media_urls', tuple(self.media_urls))
        if not self.media_urls:
            raise ValueError("media_urls must not be empty")
        if not self.author_handle:
            raise ValueError("author_handle must not be empty")
        if not self.post_id:
            raise ValueError("post_id must not be empty")


@dataclass
class ProcessResult:
    """Outcome of processing one URL."""
    url: str
    status: str  # "downloaded" or "skipped"
    files: List[str] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def downloaded(self):
        return self.status == "downloaded"


@dataclass
class BatchSummary:
    results: List[ProcessResult] = field(default_factory=list)

    @property
    def downloaded(self):
        return sum(1 for result in self.results if result.downloaded)

    @property
    def skipped(self):
        return sum(1 for result in self.results if not result.downloaded)
