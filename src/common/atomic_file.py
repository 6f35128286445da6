"""Atomic file writing so an interrupted compile never leaves a half-written page.

Usage:
    from common.atomic_file import atomic_write_text

    atomic_write_text("/path/to/page.html", "<html>...</html>")
"""

import os
import tempfile

from common.base.logging_config import get_logger

# Module-level logger
logger = get_logger(__name__)


class AtomicWriteError(Exception):
    """Raised when atomic write operation fails."""
    pass


def atomic_write_text(file_path: str, content: str, encoding: str = 'utf-8') -> None:
    """Atomically write text content to a file.

    This function:
    1. Writes content to a temporary file in the same directory
    2. Calls fsync to ensure data is on disk
    3. Renames the temp file over the target path

    Args:
        file_path: Path to the file to write
        content: The text content to write
        encoding: Text encoding (default: utf-8)

    Raises:
        AtomicWriteError: If the file could not be written
    """
    file_path = os.fspath(file_path)
    file_dir = os.path.dirname(file_path) or '.'

    try:
        os.makedirs(file_dir, exist_ok=True)
        # Same directory keeps the final rename on one filesystem
        temp_fd, temp_path = tempfile.mkstemp(
            dir=file_dir,
            prefix='.tmp_',
            suffix=os.path.basename(file_path)
        )
    except OSError as e:
        raise AtomicWriteError(f"Could not create temporary file for {file_path}: {e}") from e

    try:
        with os.fdopen(temp_fd, 'w', encoding=encoding) as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, file_path)
    except OSError as e:
        logger.error(f"Error during atomic write to {file_path}: {e}")
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise AtomicWriteError(f"Could not write {file_path}: {e}") from e

    logger.debug(f"Wrote {len(content)} characters to {file_path}")
