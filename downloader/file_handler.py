"""File operations and error logging."""

import os

from .errors import StorageError


class FileHandler:
    def __init__(self, video_dir, image_dir):
        self.video_dir = video_dir
        self.image_dir = image_dir
        self.error_prefix = "[error log] "
        self._error_log_cache = {}

    def ensure_directory(self, dir_path):
        """Create a directory (and parents) if it doesn't exist."""
        try:
            os.makedirs(dir_path, exist_ok=True)
        except OSError as e:
            raise StorageError(dir_path, e) from e

    def write_file(self, dir_path, file_name, data):
        """
        Write bytes to dir_path/file_name, creating the directory first.

        Args:
            dir_path: Output directory
            file_name: Name of the file inside dir_path
            data: Bytes to write

        Returns:
            str: Full path of the written file

        Raises:
            StorageError: If the directory or file cannot be written
        """
        self.ensure_directory(dir_path)
        output_path = os.path.join(dir_path, file_name)
        try:
            with open(output_path, 'wb') as f:
                f.write(data)
        except OSError as e:
            raise StorageError(output_path, e) from e
        return output_path

    def write_video(self, file_name, data):
        return self.write_file(self.video_dir, file_name, data)

    def write_image(self, file_name, data):
        return self.write_file(self.image_dir, file_name, data)

    def get_error_log_path(self, file_path):
        """Get the path to the error log file for a given input file"""
        base_name = os.path.basename(file_path)
        if not base_name.endswith('.txt'):
            base_name += '.txt'
        return os.path.join(os.path.dirname(file_path),
                            f"{self.error_prefix}{base_name}")

    def _load_error_log(self, error_file_path):
        if error_file_path not in self._error_log_cache:
            entries = set()
            if os.path.exists(error_file_path):
                with open(error_file_path, 'r', encoding='utf-8') as f:
                    entries = {line.strip() for line in f if line.strip()}
            self._error_log_cache[error_file_path] = entries
        return self._error_log_cache[error_file_path]

    def log_error(self, url, error_file_path, reason=None):
        """Append a failed URL to the error log, skipping entries already present"""
        error_entry = f"{url} ({reason})" if reason else url
        entries = self._load_error_log(error_file_path)
        if error_entry in entries:
            return

        try:
            with open(error_file_path, 'a', encoding='utf-8') as error_file:
                error_file.write(f"{error_entry}\n")
        except OSError as e:
            raise StorageError(error_file_path, e) from e
        entries.add(error_entry)
