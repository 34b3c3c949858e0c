"""Exceptions raised while resolving and downloading TikTok posts."""

from enum import Enum
from typing import Optional


class DownloaderError(Exception):
    """Base class for every per-post failure."""


class ValidationError(DownloaderError):
    """URL does not look like a TikTok post."""

    def __init__(self, url):
        super().__init__(f"Invalid TikTok URL: {url!r}")
        self.url = url


class ExtractionReason(Enum):
    NOT_FOUND = "embedded data not found"
    PARSE_FAILURE = "embedded data is not valid JSON"
    SHAPE_MISMATCH = "unexpected embedded data structure"
    MISSING_FIELDS = "author or video data missing"
    NO_URL = "video URL not found"


class ExtractionError(DownloaderError):
    """Embedded page data could not be turned into a media descriptor."""

    def __init__(self, reason: ExtractionReason, detail: Optional[str] = None):
        message = reason.value if not detail else f"{reason.value}: {detail}"
        super().__init__(message)
        self.reason = reason


class ResolverReason(Enum):
    API_FAILURE = "API request failed"
    BAD_STATUS = "API returned non-success status"
    MISSING_VIDEO_URL = "API result has no video URL"
    MISSING_IMAGES = "API result has no images"
    MISSING_FIELDS = "API result is missing post fields"
    UNSUPPORTED_TYPE = "API result has unexpected media type"


class ResolverError(DownloaderError):
    """The fallback API could not resolve the post."""

    def __init__(self, reason: ResolverReason, detail: Optional[str] = None):
        message = reason.value if not detail else f"{reason.value}: {detail}"
        super().__init__(message)
        self.reason = reason


class TransportError(DownloaderError):
    """Network request failed, timed out or returned an error status."""

    def __init__(self, url, message, status_code: Optional[int] = None):
        super().__init__(f"Request to {url} failed: {message}")
        self.url = url
        self.status_code = status_code


class StorageError(DownloaderError):
    """Output directory or file could not be written."""

    def __init__(self, path, message):
        super().__init__(f"Could not write {path}: {message}")
        self.path = path
