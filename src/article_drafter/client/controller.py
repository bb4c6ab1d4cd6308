import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

import httpx

from article_drafter.api.schemas import KEY_POINTS_MAX_CHARS, TOPIC_MAX_CHARS, Tone
from article_drafter.client.export import DownloadSaver, SystemClipboard, download_filename

logger = logging.getLogger(__name__)

ENTER_TOPIC = "Please enter a topic"
TOPIC_TOO_LONG = f"Topic must be {TOPIC_MAX_CHARS} characters or less"
ENTER_KEY_POINTS = "Please enter at least one key point"
KEY_POINTS_TOO_LONG = f"Key points must be {KEY_POINTS_MAX_CHARS} characters or less"
COOLDOWN = "Please wait a few seconds before generating again"
GENERATE_FAILED = "Failed to generate article"
UNREACHABLE = "Could not reach the article service. Please try again."
NOTHING_TO_EXPORT = "Generate an article before exporting"
COPY_FAILED = "Failed to copy to clipboard. Please try again or use Ctrl+C/Cmd+C."
DOWNLOAD_FAILED = "Failed to download file. Please try again."


class Clipboard(Protocol):
    def write_text(self, text: str) -> None: ...


class Saver(Protocol):
    def save(self, filename: str, content: str) -> Path: ...


class ExportFlash(str, Enum):
    NONE = "none"
    COPIED = "copied"
    DOWNLOADED = "downloaded"


@dataclass
class FormData:
    topic: str = ""
    key_points: str = ""
    tone: str = Tone.PROFESSIONAL.value

    def as_payload(self) -> dict[str, str]:
        return {"topic": self.topic, "keyPoints": self.key_points, "tone": self.tone}


class FormController:
    """Headless article form: field state, request lifecycle and exports.

    One controller serves one user. While a request is in flight further
    submissions are ignored, and a successful generation starts a cooldown
    before the next one may be sent. Failed attempts never start it.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        clipboard: Clipboard | None = None,
        saver: Saver | None = None,
        clock: Callable[[], float] = time.monotonic,
        cooldown_seconds: float = 3.0,
        flash_seconds: float = 2.0,
        generate_path: str = "/generate",
    ) -> None:
        self.client = client
        self.clipboard = clipboard or SystemClipboard()
        self.saver = saver or DownloadSaver()
        self.clock = clock
        self.cooldown_seconds = cooldown_seconds
        self.flash_seconds = flash_seconds
        self.generate_path = generate_path

        self.form_data = FormData()
        self.generated_article = ""
        self.is_loading = False
        self.error = ""
        self.last_generated_at: float | None = None
        self._flash = ExportFlash.NONE
        self._flash_until = 0.0

    @property
    def flash(self) -> ExportFlash:
        if self._flash is not ExportFlash.NONE and self.clock() >= self._flash_until:
            self._flash = ExportFlash.NONE
        return self._flash

    @property
    def copy_success(self) -> bool:
        return self.flash is ExportFlash.COPIED

    @property
    def download_success(self) -> bool:
        return self.flash is ExportFlash.DOWNLOADED

    @property
    def can_submit(self) -> bool:
        return not self.is_loading

    def update_field(self, field: str, value: str) -> bool:
        if field not in FormData.__dataclass_fields__:
            raise KeyError(field)
        # Fields are locked while a request is in flight.
        if self.is_loading:
            return False
        setattr(self.form_data, field, value)
        self.error = ""
        return True

    def edit_article(self, text: str) -> None:
        self.generated_article = text

    def validate(self) -> bool:
        # Tone comes from a fixed selection and is only re-checked by the server.
        topic = self.form_data.topic
        key_points = self.form_data.key_points
        if not topic.strip():
            self.error = ENTER_TOPIC
        elif len(topic) > TOPIC_MAX_CHARS:
            self.error = TOPIC_TOO_LONG
        elif not key_points.strip():
            self.error = ENTER_KEY_POINTS
        elif len(key_points) > KEY_POINTS_MAX_CHARS:
            self.error = KEY_POINTS_TOO_LONG
        else:
            return True
        return False

    async def submit(self) -> bool:
        if self.is_loading:
            logger.info("controller.submit ignored=in_flight")
            return False
        if not self.validate():
            return False
        if self.last_generated_at is not None and self.clock() - self.last_generated_at < self.cooldown_seconds:
            self.error = COOLDOWN
            return False

        self.is_loading = True
        self.error = ""
        self.generated_article = ""
        logger.info("controller.submit topic=%s tone=%s", self.form_data.topic, self.form_data.tone)
        try:
            response = await self.client.post(self.generate_path, json=self.form_data.as_payload())
            data = self._json_body(response)
            article = data.get("article")
            if response.is_error or not isinstance(article, str):
                self.error = str(data.get("error") or GENERATE_FAILED)
                logger.info("controller.submit.failed status=%d error=%s", response.status_code, self.error)
                return False
            self.generated_article = article
            self.last_generated_at = self.clock()
            return True
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
            logger.warning("controller.submit.unreachable type=%s detail=%s", exc.__class__.__name__, exc)
            self.error = UNREACHABLE
            return False
        finally:
            self.is_loading = False

    def copy_to_clipboard(self) -> bool:
        if not self.generated_article:
            self.error = NOTHING_TO_EXPORT
            return False
        try:
            self.clipboard.write_text(self.generated_article)
        except Exception as exc:
            logger.warning("controller.copy.failed type=%s detail=%s", exc.__class__.__name__, exc)
            self._flash = ExportFlash.NONE
            self.error = COPY_FAILED
            return False
        self.error = ""
        self._set_flash(ExportFlash.COPIED)
        return True

    def download_as_file(self) -> Path | None:
        if not self.generated_article:
            self.error = NOTHING_TO_EXPORT
            return None
        filename = download_filename(self.form_data.topic)
        try:
            path = self.saver.save(filename, self.generated_article)
        except Exception as exc:
            logger.warning("controller.download.failed file=%s type=%s", filename, exc.__class__.__name__)
            self._flash = ExportFlash.NONE
            self.error = DOWNLOAD_FAILED
            return None
        self._set_flash(ExportFlash.DOWNLOADED)
        return path

    def _set_flash(self, flash: ExportFlash) -> None:
        self._flash = flash
        self._flash_until = self.clock() + self.flash_seconds

    @staticmethod
    def _json_body(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
