"""Utility functions for TikTok downloader."""

import os
from datetime import datetime
from urllib.parse import urlparse

from . import config


def clean_filename(name):
    """
    Clean a filename by removing invalid characters while preserving extension and ID.

    Args:
        name: Original filename to clean

    Returns:
        str: Cleaned filename safe for use in filesystem
    """
    # First, replace any invalid Unicode characters and control characters
    name = ''.join(char for char in name if ord(char) < 65536 and ord(char) >= 32 and char != '\ufff6')
    name = name.encode('ascii', 'ignore').decode('ascii')

    # Remove other invalid filename characters
    invalid_chars = '<>:"/\\|?*\x7f'
    name = ''.join(char for char in name if char not in invalid_chars)

    if not name.strip():
        return ""

    # Remove leading periods
    while name.startswith('.'):
        name = name[1:]

    return name

def validate_url(url):
    """
    Check whether a value is a TikTok URL we can process.

    Accepts tiktok.com, www.tiktok.com and vm.tiktok.com with any path.
    No network access is performed.

    Args:
        url: Value to check

    Returns:
        bool: True if url is a string matching the TikTok URL pattern
    """
    if not url or not isinstance(url, str):
        return False
    return config.TIKTOK_URL_REGEX.match(url) is not None

def is_photo_url(url):
    """Photo posts carry /photo/ in their path."""
    return '/photo/' in urlparse(url).path

def with_query_params(url, query_params=None):
    """Append the default web query parameters unless the URL already has a query."""
    if query_params is None:
        query_params = config.QUERY_PARAMS
    if not query_params or urlparse(url).query:
        return url
    return f"{url}{query_params}" if query_params.startswith('?') else f"{url}?{query_params}"

def format_upload_date(timestamp):
    """
    Format a Unix timestamp (seconds) as DDMMYYYY in local time.

    Args:
        timestamp: Seconds since the epoch

    Returns:
        str: Zero-padded date, e.g. "14112023"
    """
    return datetime.fromtimestamp(int(timestamp)).strftime('%d%m%Y')

def build_video_filename(author_handle, created_at, post_id):
    return clean_filename(f"{author_handle}_video_{format_upload_date(created_at)}_{post_id}.mp4")

def build_image_filename(author_handle, created_at, post_id, index):
    """Image names carry the 1-based position of the image within the post."""
    return clean_filename(f"{author_handle}_image_{format_upload_date(created_at)}_{post_id}_{index}.jpg")

def read_urls(file_path):
    """Read URLs from a text file, one per line, ignoring blank lines."""
    with open(file_path, 'r', encoding='utf-8') as f:
        return [line.strip() for line in f if line.strip()]

def print_final_summary(summary, video_dir, image_dir, error_log_path=None):
    """
    Print totals for a processed batch.

    Args:
        summary: BatchSummary from the processor
        video_dir: Directory videos were written to
        image_dir: Directory images were written to
        error_log_path: Error log written for this batch, if any
    """
    total_files = sum(len(result.files) for result in summary.results)

    print("\nDownload Summary:")
    print(f"- Successfully downloaded: {summary.downloaded:,} posts ({total_files:,} files)")
    print(f"- Skipped: {summary.skipped:,} posts")
    print(f"- Total processed: {len(summary.results):,} posts")

    skipped = [result for result in summary.results if not result.downloaded]
    if skipped:
        print("\nSkipped posts:")
        for idx, result in enumerate(skipped, 1):
            print(f"\t{idx:,}. {result.url} ({result.reason})")

    print(f"\nVideo directory: {os.path.abspath(video_dir)}")
    print(f"Image directory: {os.path.abspath(image_dir)}")
    if error_log_path and skipped:
        print(f"Failed posts are logged in: {error_log_path}")
