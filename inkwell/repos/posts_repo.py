import logging
import os
from pathlib import Path
from typing import List

from inkwell.errors import PostNotFound, StoreUnavailable

logger = logging.getLogger(__name__)

POST_SUFFIX = ".md"


class FilePostsRepo:
    """Flat directory of ``<slug>.md`` files. Read-only."""

    def __init__(self, posts_dir):
        self.posts_dir = Path(posts_dir)

    def list_filenames(self) -> List[str]:
        try:
            return sorted(os.listdir(self.posts_dir))
        except OSError as e:
            raise StoreUnavailable(f"Cannot list {self.posts_dir}: {e}") from e

    def read_post(self, slug: str) -> str:
        path = self._path_for(slug)
        logger.debug(f"Reading post file {path}")
        if not path.is_file():
            raise PostNotFound(slug)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StoreUnavailable(f"Cannot read {path}: {e}") from e

    def _path_for(self, slug: str) -> Path:
        # Slugs name files directly inside posts_dir, never anything below or above it
        if not slug or "/" in slug or "\\" in slug or slug in (".", ".."):
            raise PostNotFound(slug)
        return self.posts_dir / f"{slug}{POST_SUFFIX}"
