import logging
import re
from pathlib import Path

import pyperclip

logger = logging.getLogger(__name__)

SLUG_SOURCE_CHARS = 50
DEFAULT_SLUG = "article"
_NON_SLUG_CHAR = re.compile(r"[^a-z0-9]", re.IGNORECASE | re.ASCII)


def download_filename(topic: str) -> str:
    """Map a topic to ``<slug>.md``.

    Only the first 50 characters of the topic are used. Every character
    outside ``[a-z0-9]`` becomes ``-`` one for one, so "AI Ethics & Society!"
    gives ``ai-ethics---society-.md``. A topic with nothing alphanumeric
    falls back to ``article.md``.
    """
    slug = _NON_SLUG_CHAR.sub("-", topic[:SLUG_SOURCE_CHARS]).lower()
    if not slug.strip("-"):
        slug = DEFAULT_SLUG
    return f"{slug}.md"


class SystemClipboard:
    """Plain-text clipboard backed by pyperclip."""

    def write_text(self, text: str) -> None:
        pyperclip.copy(text)


class DownloadSaver:
    """Save markdown files into a directory without clobbering earlier ones."""

    def __init__(self, directory: str | Path = ".") -> None:
        self.directory = Path(directory)

    def save(self, filename: str, content: str) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self._available_path(filename)
        target.write_text(content, encoding="utf-8")
        logger.info("download.saved path=%s chars=%d", target, len(content))
        return target

    def _available_path(self, filename: str) -> Path:
        candidate = self.directory / filename
        stem, suffix = candidate.stem, candidate.suffix
        index = 1
        while candidate.exists():
            candidate = self.directory / f"{stem} ({index}){suffix}"
            index += 1
        return candidate
