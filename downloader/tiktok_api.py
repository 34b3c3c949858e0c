"""Module for resolving TikTok posts through the downloader helper API."""

from typing import Dict, List, Optional

from . import config
from .errors import ResolverError, ResolverReason, TransportError
from .http_client import HttpClient
from .models import MediaDescriptor, MediaKind
from .utils import format_upload_date

SUCCESS_STATUS = 'success'

# API result type -> media kind
RESULT_TYPES = {
    'video': MediaKind.VIDEO,
    'image': MediaKind.PHOTO,
}


class FallbackResolver:
    """
    Resolve a post URL with the helper API.

    Used for every photo post, and for video posts whose page did not yield
    usable embedded data.
    """

    def __init__(self, client: HttpClient, api_url: str = None, user_agent: str = None):
        self.client = client
        self.api_url = api_url or config.API_URL
        self.user_agent = user_agent or config.MOBILE_USER_AGENT

    def fetch_result(self, post_url: str) -> Dict:
        """
        Call the API and return its `result` object.

        Raises:
            ResolverError: API_FAILURE on transport errors, BAD_STATUS if the
                API did not report success, MISSING_FIELDS if there is no result
        """
        try:
            data = self.client.fetch_json(self.api_url, params={'url': post_url}, user_agent=self.user_agent)
        except TransportError as e:
            raise ResolverError(ResolverReason.API_FAILURE, str(e)) from e

        if not isinstance(data, dict):
            raise ResolverError(ResolverReason.API_FAILURE, "response is not a JSON object")

        status = data.get('status')
        if status != SUCCESS_STATUS:
            raise ResolverError(ResolverReason.BAD_STATUS, f"API return status: {status}")

        result = data.get('result')
        if not isinstance(result, dict):
            raise ResolverError(ResolverReason.MISSING_FIELDS, "no result object")
        return result

    def resolve(self, post_url: str, expect_kind: Optional[MediaKind] = None) -> MediaDescriptor:
        """
        Resolve a post into a MediaDescriptor.

        Args:
            post_url: Original TikTok post URL
            expect_kind: If given, the result must be of this kind

        Returns:
            MediaDescriptor: Descriptor with source "api"

        Raises:
            ResolverError: If the API fails or returns unusable data
        """
        result = self.fetch_result(post_url)

        kind = RESULT_TYPES.get(result.get('type'))
        if kind is None:
            raise ResolverError(ResolverReason.UNSUPPORTED_TYPE, f"type {result.get('type')!r}")
        if expect_kind is not None and kind != expect_kind:
            raise ResolverError(ResolverReason.UNSUPPORTED_TYPE,
                                f"expected {expect_kind.value}, got {result.get('type')}")

        if kind == MediaKind.VIDEO:
            media_urls = self._video_urls(result)
        else:
            media_urls = self._image_urls(result)

        author = result.get('author')
        author_handle = author.get('username') if isinstance(author, dict) else None
        post_id = result.get('id')
        create_time = result.get('createTime')
        if not author_handle or not post_id or create_time is None:
            raise ResolverError(ResolverReason.MISSING_FIELDS, "author.username, id or createTime missing")
        try:
            created_at = int(create_time)
            # Out-of-range timestamps cannot be turned into a file name
            format_upload_date(created_at)
        except (TypeError, ValueError, OverflowError, OSError) as e:
            raise ResolverError(ResolverReason.MISSING_FIELDS, f"bad createTime {create_time!r}") from e

        return MediaDescriptor(
            kind=kind,
            author_handle=str(author_handle),
            post_id=str(post_id),
            created_at=created_at,
            media_urls=media_urls,
            caption=result.get('desc'),
            author_nickname=author.get('nickname'),
            source="api",
        )

    def _video_urls(self, result: Dict) -> List[str]:
        # The API lists several candidates; the first one is used
        video = result.get('video')
        play_addr = video.get('playAddr') if isinstance(video, dict) else None
        if not isinstance(play_addr, list) or not play_addr or not play_addr[0]:
            raise ResolverError(ResolverReason.MISSING_VIDEO_URL)
        return [play_addr[0]]

    def _image_urls(self, result: Dict) -> List[str]:
        images = result.get('images')
        if not isinstance(images, list):
            raise ResolverError(ResolverReason.MISSING_IMAGES)
        urls = [url for url in images if isinstance(url, str) and url]
        if not urls:
            raise ResolverError(ResolverReason.MISSING_IMAGES)
        return urls
