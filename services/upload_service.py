"""
Upload Service - Handles CSV upload validation and decoding

This service encapsulates file validation so that only readable text
reaches the roster importer.
"""

from typing import Iterable, Optional, Tuple
from werkzeug.datastructures import FileStorage


class UploadService:
    """Service for validating and reading uploaded squad files."""

    def __init__(self, upload_extensions: Iterable[str], max_content_length: int):
        """
        Initialize the upload service.

        Args:
            upload_extensions: Allowed file extensions (e.g., ['.csv', '.txt'])
            max_content_length: Maximum file size in bytes
        """
        self.upload_extensions = tuple(ext.lower() for ext in upload_extensions)
        self.max_content_length = max_content_length

    def validate_uploaded_file(self, file: Optional[FileStorage]) -> Tuple[bool, Optional[str]]:
        """
        Validate an uploaded file before reading it.

        Args:
            file: FileStorage object from Flask request

        Returns:
            Tuple of (is_valid, error_message)
            error_message is None if valid
        """
        if not file or not file.filename:
            return False, "No file selected"

        filename = file.filename.lower().strip()

        # Check for path traversal attempts
        if '/' in filename or '\\' in filename or '..' in filename:
            return False, "Invalid filename"

        if not filename.endswith(self.upload_extensions):
            allowed = ', '.join(self.upload_extensions)
            return False, f"Invalid file type. Allowed: {allowed}"

        file.stream.seek(0, 2)
        file_size = file.stream.tell()
        file.stream.seek(0)

        if file_size > self.max_content_length:
            max_kb = self.max_content_length // 1024
            return False, f"File too large. Maximum {max_kb}KB"

        if file_size == 0:
            return False, "File is empty"

        return True, None

    def read_text(self, file: FileStorage) -> Tuple[Optional[str], Optional[str]]:
        """
        Decode an uploaded file as UTF-8 text.

        A leading byte-order mark is removed.

        Returns:
            Tuple of (content, error_message)
        """
        try:
            return file.read().decode('utf-8-sig'), None
        except UnicodeDecodeError:
            return None, "File must be UTF-8 encoded text"
