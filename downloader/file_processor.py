"""Batch processing of TikTok post URLs."""

import os
import time

from . import config
from .errors import DownloaderError, ExtractionError, StorageError, TransportError, ValidationError
from .extractor import extract_video_data
from .models import BatchSummary, MediaKind, ProcessResult
from .utils import is_photo_url, read_urls, validate_url, with_query_params


class Processor:
    """
    Resolve and download a batch of posts, one at a time.

    Video posts are first extracted from the data embedded in their page and
    fall back to the helper API when that fails. Photo posts always go
    through the helper API. A failing post is reported and skipped; it never
    stops the batch.
    """

    def __init__(self, client, resolver, media_downloader, file_handler,
                 delay=None, verbose=False, sleep=time.sleep):
        self.client = client
        self.resolver = resolver
        self.media_downloader = media_downloader
        self.file_handler = file_handler
        self.delay = config.REQUEST_DELAY if delay is None else delay
        self.verbose = verbose
        self.sleep = sleep

    def resolve_video(self, url):
        """
        Get a descriptor for a video post, trying the page data first.

        The helper API is called exactly once, and only if the page could not
        be fetched or its embedded data was unusable.
        """
        try:
            html = self.client.fetch_html(with_query_params(url))
            descriptor = extract_video_data(html)
            print("\t-> METHOD: Direct extraction from HTML successful")
            return descriptor
        except (ExtractionError, TransportError) as e:
            print("\t-> HTML extraction failed. Using API as backup...")
            if self.verbose:
                print(f"\t-> Reason: {e}")

        descriptor = self.resolver.resolve(url, expect_kind=MediaKind.VIDEO)
        print("\t-> METHOD: Using backup API successful")
        return descriptor

    def resolve_photo(self, url):
        return self.resolver.resolve(url, expect_kind=MediaKind.PHOTO)

    def process_url(self, url):
        """
        Validate, resolve and download a single post.

        Returns:
            list: Names of the written files

        Raises:
            DownloaderError: If any step fails
        """
        if not validate_url(url):
            raise ValidationError(url)

        if is_photo_url(url):
            print(f"Processing photo: {url}")
            descriptor = self.resolve_photo(url)
        else:
            print(f"Processing video: {url}")
            descriptor = self.resolve_video(url)

        files = self.media_downloader.download(descriptor, url)
        if self.verbose:
            method = "Direct extraction from HTML" if descriptor.source == "html" else "Backup API"
            print(f"\t-> Method used: {method}")
        return files

    def process_urls(self, urls):
        """
        Process URLs in order, pausing between posts.

        Args:
            urls: Post URLs to process

        Returns:
            BatchSummary: One result per input URL
        """
        summary = BatchSummary()
        print(f"Starting to process {len(urls):,} TikTok URLs...")

        for index, url in enumerate(urls):
            print(f"\n[{index + 1:,}/{len(urls):,}] ", end="")
            if not validate_url(url):
                print(f"Invalid TikTok URL: {url}")
                summary.results.append(ProcessResult(url, "skipped", reason="invalid url"))
                continue

            # Fixed pause before every post but the first
            if index > 0 and self.delay > 0:
                self.sleep(self.delay)

            try:
                files = self.process_url(url)
                summary.results.append(ProcessResult(url, "downloaded", files=files))
            except DownloaderError as e:
                print(f"\t-> Failed to process {url}: {e}")
                summary.results.append(ProcessResult(url, "skipped", reason=str(e)))

        print("\nAll URLs have been processed!")
        return summary

    def process_file(self, file_path):
        """
        Process every URL listed in a text file.

        Skipped URLs are appended to the file's error log.

        Returns:
            tuple: (BatchSummary, error log path)
        """
        urls = read_urls(file_path)
        print(f"\nFound {len(urls):,} links in {os.path.basename(file_path)}")

        summary = self.process_urls(urls)

        error_file_path = self.file_handler.get_error_log_path(file_path)
        for result in summary.results:
            if not result.downloaded:
                try:
                    self.file_handler.log_error(result.url, error_file_path, result.reason)
                except StorageError as e:
                    print(f"Warning: Error logging failure: {e}")
        return summary, error_file_path
