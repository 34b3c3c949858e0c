"""Configuration constants for the TikTok media downloader."""

import os
import re
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _get_float(name, default):
    """Read a float setting from the environment, falling back to a default."""
    value = os.getenv(name, '').strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


# Desktop browser User-Agent for page and media requests
USER_AGENT = os.getenv(
    'TIKTOK_USER_AGENT',
    'Mozilla/5.0 (Windows NT 10.0; WOW64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)

# Mobile app User-Agent for the fallback API
MOBILE_USER_AGENT = os.getenv(
    'TIKTOK_MOBILE_USER_AGENT',
    'TikTok 26.2.0 rv:262018 (iPhone; iOS 14.4.2; en_US) Cronet'
)

TIKTOK_URL_REGEX = re.compile(
    os.getenv('TIKTOK_URL_REGEX', r'^https?://(www\.|vm\.)?(tiktok\.com)/?(.*)$')
)

API_URL = os.getenv('TIKTOK_API_URL', 'https://api-tiktok-downloader.vercel.app/api/v4/download')

# Appended to post URLs without a query string of their own
QUERY_PARAMS = os.getenv(
    'TIKTOK_QUERY_PARAMS',
    '?is_from_webapp=1&sender_device=pc&web_id=7221493350775866882'
)

VIDEO_DIR = os.getenv('TIKTOK_VIDEO_DIR', './tiktok-videos')
IMAGE_DIR = os.getenv('TIKTOK_IMAGE_DIR', './tiktok-images')

REQUEST_DELAY = _get_float('TIKTOK_REQUEST_DELAY', 2.0)  # seconds between posts
REQUEST_TIMEOUT = _get_float('TIKTOK_REQUEST_TIMEOUT', 30.0)

# Embedded page data element holding the post JSON
UNIVERSAL_DATA_ID = '__UNIVERSAL_DATA_FOR_REHYDRATION__'

# Headers for page requests
DEFAULT_HEADERS = {
    'accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'accept-language': 'en-US,en;q=0.9',
    'user-agent': USER_AGENT,
}

# Batch used when no input file is given
DEFAULT_URLS = [
    url.strip() for url in os.getenv('TIKTOK_DEFAULT_URLS', '').split(',') if url.strip()
] or [
    "https://www.tiktok.com/@user1/video/1234567890123456789",
    "https://www.tiktok.com/@user2/video/2345678901234567890",
    "https://www.tiktok.com/@user3/photo/3456789012345678901",
    "https://www.tiktok.com/@user4/photo/4567890123456789012",
]
