import logging
from pathlib import Path

from core.config import settings
from core.exceptions import BadRequestError

logger = logging.getLogger(__name__)


class FileStorage:
    """Local disk storage for product UI attachments below the web root."""

    def __init__(self, web_root: str | Path):
        self.web_root = Path(web_root).resolve()

    def resolve(self, folder: str, filename: str) -> Path:
        """
        Build the absolute path of an attachment.

        Raises:
            BadRequestError: if the filename is not a plain file name, or the
                folder/filename pair points outside the web root or at a directory
        """
        if filename in ("", ".", "..") or "/" in filename or "\\" in filename:
            raise BadRequestError(f"Invalid file name: {filename!r}")
        path = (self.web_root / folder / filename).resolve()
        if path == self.web_root or self.web_root not in path.parents or path.is_dir():
            raise BadRequestError(f"Invalid file location: {folder}/{filename}")
        return path

    def ensure_directory(self, folder: str) -> Path:
        directory = (self.web_root / folder).resolve()
        if directory != self.web_root and self.web_root not in directory.parents:
            raise BadRequestError(f"Invalid folder: {folder}")
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def write_bytes(self, folder: str, filename: str, content: bytes) -> Path:
        self.ensure_directory(folder)
        path = self.resolve(folder, filename)
        path.write_bytes(content)
        logger.debug("Wrote %d bytes to %s", len(content), path)
        return path

    def delete_if_exists(self, folder: str, filename: str) -> bool:
        path = self.resolve(folder, filename)
        if not path.is_file():
            return False
        path.unlink()
        logger.debug("Removed %s", path)
        return True


# Global instance
file_storage = FileStorage(settings.WEB_ROOT_PATH)


def get_file_storage() -> FileStorage:
    return file_storage
