"""Extract post metadata from the JSON embedded in TikTok post pages."""

import json
from bs4 import BeautifulSoup

from . import config
from .errors import ExtractionError, ExtractionReason
from .models import MediaDescriptor, MediaKind
from .utils import format_upload_date


def get_embedded_json(html):
    """
    Return the raw text of the page's rehydration data element.

    Raises:
        ExtractionError: NOT_FOUND if the element is missing or empty
    """
    soup = BeautifulSoup(html or "", "html.parser")
    element = soup.find(id=config.UNIVERSAL_DATA_ID)
    if element is None:
        raise ExtractionError(ExtractionReason.NOT_FOUND, f"no #{config.UNIVERSAL_DATA_ID} element")

    raw_json = element.string if element.string is not None else element.get_text()
    if not raw_json or not raw_json.strip():
        raise ExtractionError(ExtractionReason.NOT_FOUND, f"#{config.UNIVERSAL_DATA_ID} is empty")
    return raw_json

def get_item_struct(data):
    """Walk __DEFAULT_SCOPE__ -> webapp.video-detail -> itemInfo -> itemStruct."""
    scope = data.get('__DEFAULT_SCOPE__') if isinstance(data, dict) else None
    video_detail = scope.get('webapp.video-detail') if isinstance(scope, dict) else None
    if not isinstance(video_detail, dict):
        raise ExtractionError(ExtractionReason.SHAPE_MISMATCH, "video detail not found")

    item_info = video_detail.get('itemInfo')
    if not isinstance(item_info, dict):
        raise ExtractionError(ExtractionReason.SHAPE_MISMATCH, "itemInfo not found")

    item_struct = item_info.get('itemStruct')
    if not isinstance(item_struct, dict):
        raise ExtractionError(ExtractionReason.SHAPE_MISMATCH, "itemStruct not found")
    return item_struct

def extract_video_url(video):
    """
    Pick the playable URL from a video object.

    Prefers the first URL of the first bitrate variant and falls back to
    the plain playAddr field.

    Raises:
        ExtractionError: NO_URL if neither location holds a URL
    """
    bitrate_info = video.get('bitrateInfo')
    if isinstance(bitrate_info, list) and bitrate_info and isinstance(bitrate_info[0], dict):
        play_addr = bitrate_info[0].get('PlayAddr')
        if isinstance(play_addr, dict):
            url_list = play_addr.get('UrlList')
            if isinstance(url_list, list) and url_list and url_list[0]:
                return url_list[0]

    # Fallback to direct playAddr
    play_addr = video.get('playAddr')
    if isinstance(play_addr, str) and play_addr:
        return play_addr

    raise ExtractionError(ExtractionReason.NO_URL)

def extract_video_data(html):
    """
    Build a video MediaDescriptor from a post page.

    Args:
        html: Raw HTML of a TikTok video page

    Returns:
        MediaDescriptor: Descriptor with exactly one media URL

    Raises:
        ExtractionError: If any step fails; the reason says which one
    """
    raw_json = get_embedded_json(html)

    try:
        data = json.loads(raw_json)
    except ValueError as e:
        raise ExtractionError(ExtractionReason.PARSE_FAILURE, str(e)) from e

    item_struct = get_item_struct(data)

    author = item_struct.get('author')
    video = item_struct.get('video')
    if not isinstance(author, dict) or not isinstance(video, dict):
        raise ExtractionError(ExtractionReason.MISSING_FIELDS)

    video_url = extract_video_url(video)

    author_handle = author.get('uniqueId')
    post_id = item_struct.get('id')
    create_time = item_struct.get('createTime')
    if not author_handle or not post_id or create_time is None:
        raise ExtractionError(ExtractionReason.MISSING_FIELDS, "uniqueId, id or createTime missing")
    try:
        created_at = int(create_time)
        format_upload_date(created_at)
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise ExtractionError(ExtractionReason.MISSING_FIELDS, f"bad createTime {create_time!r}") from e

    return MediaDescriptor(
        kind=MediaKind.VIDEO,
        author_handle=str(author_handle),
        post_id=str(post_id),
        created_at=created_at,
        media_urls=(video_url,),
        caption=item_struct.get('desc'),
        author_nickname=author.get('nickname'),
        source="html",
    )
