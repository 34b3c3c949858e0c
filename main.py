"""Main script for TikTok media downloader."""

import argparse
import os
import sys

import requests

from downloader import config
from downloader.file_handler import FileHandler
from downloader.file_processor import Processor
from downloader.http_client import HttpClient
from downloader.media_downloader import MediaDownloader
from downloader.tiktok_api import FallbackResolver
from downloader.utils import print_final_summary


def build_processor(session, video_dir, image_dir, delay, verbose):
    """Wire the collaborators around one shared HTTP session."""
    client = HttpClient(session)
    file_handler = FileHandler(video_dir, image_dir)
    resolver = FallbackResolver(client)
    media_downloader = MediaDownloader(client, file_handler, verbose=verbose)
    return Processor(client, resolver, media_downloader, file_handler,
                     delay=delay, verbose=verbose)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Download TikTok videos and photo posts.')
    parser.add_argument('input_path', nargs='?', help='Text file with one TikTok URL per line (defaults to the configured URLs)')
    parser.add_argument('--video-dir', default=config.VIDEO_DIR, help=f'Directory for videos (default: {config.VIDEO_DIR})')
    parser.add_argument('--image-dir', default=config.IMAGE_DIR, help=f'Directory for images (default: {config.IMAGE_DIR})')
    parser.add_argument('--delay', type=float, default=config.REQUEST_DELAY, help=f'Seconds to wait between posts (default: {config.REQUEST_DELAY})')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')

    args = parser.parse_args(argv)

    input_path = args.input_path
    if input_path is not None:
        if not os.path.isfile(input_path):
            print(f"Path {input_path} does not exist.")
            return 1
        if not input_path.endswith(".txt"):
            print(f"File {input_path} is not a .txt file.")
            return 1

    delay = max(args.delay, 0)
    session = requests.Session()
    processor = build_processor(session, args.video_dir, args.image_dir, delay, args.verbose)

    error_log_path = None
    try:
        if input_path is not None:
            summary, error_log_path = processor.process_file(input_path)
        else:
            summary = processor.process_urls(config.DEFAULT_URLS)
    except KeyboardInterrupt:
        print("\nProcess interrupted by user.")
        return 1
    except Exception as e:
        print(f"\nFatal error: {str(e)}")
        return 1
    finally:
        processor.client.close()

    print_final_summary(summary, args.video_dir, args.image_dir, error_log_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
