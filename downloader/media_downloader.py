"""Download the media referenced by a MediaDescriptor."""

from .models import MediaKind
from .utils import build_image_filename, build_video_filename


class MediaDownloader:
    """Fetch a post's media files and write them under generated names."""

    def __init__(self, client, file_handler, verbose=False):
        self.client = client
        self.file_handler = file_handler
        self.verbose = verbose

    def download(self, descriptor, post_url):
        """
        Download every file of a post.

        Args:
            descriptor: MediaDescriptor to download
            post_url: Original post URL, sent as referer

        Returns:
            list: Names of the written files

        Raises:
            TransportError: If a media request fails
            StorageError: If a file cannot be written
        """
        if descriptor.kind == MediaKind.VIDEO:
            return [self.download_video(descriptor, post_url)]
        return self.download_images(descriptor, post_url)

    def download_video(self, descriptor, post_url):
        video_url = descriptor.media_urls[0]
        if self.verbose:
            print(f"\t-> Video URL: {video_url}")

        data = self.client.fetch_bytes(video_url, referer=post_url)
        file_name = build_video_filename(descriptor.author_handle, descriptor.created_at, descriptor.post_id)
        self.file_handler.write_video(file_name, data)

        print(f"\t-> Video successfully downloaded: {file_name} ({len(data)/1024/1024:.2f} MB)")
        return file_name

    def download_images(self, descriptor, post_url):
        """
        Download images in order; the first failure stops the post.

        Images written before the failure are kept on disk.
        """
        file_names = []
        total = len(descriptor.media_urls)
        for index, image_url in enumerate(descriptor.media_urls, start=1):
            if self.verbose:
                print(f"\t-> Image {index} URL: {image_url}")

            data = self.client.fetch_bytes(image_url, referer=post_url)
            file_name = build_image_filename(descriptor.author_handle, descriptor.created_at,
                                             descriptor.post_id, index)
            self.file_handler.write_image(file_name, data)
            file_names.append(file_name)

            print(f"\t-> Image {index}/{total} successfully downloaded: {file_name}")
        return file_names
