from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from .config import Settings, load_settings
from .errors import GenerationError, IngestionError
from .ingest import PreviewStore, ingest_file
from .llm.gemini import generate_logo
from .prompts import DEFAULT_BRAND_NAME, build_redesign_prompt
from .state import (
    GeneratedImage,
    GenerationRequest,
    GenerationState,
    ImagePayload,
    Phase,
    UploadedImage,
)

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Something went wrong. Please try again."

GenerateFn = Callable[[ImagePayload, Optional[ImagePayload], str], GeneratedImage]


class LogoSession:
    """Per-user form state: two upload slots plus the generation lifecycle.

    idle -> loading -> success | failure; a new submit (or retry) from success
    or failure goes back through loading. There is no cancel.
    """

    def __init__(
        self,
        client: GenerateFn = generate_logo,
        store: Optional[PreviewStore] = None,
        brand_name: str = DEFAULT_BRAND_NAME,
        settings: Optional[Settings] = None,
    ) -> None:
        self.client = client
        self.store = store or PreviewStore()
        self.settings = settings or load_settings()
        self.prompt = build_redesign_prompt(brand_name)
        self.main_logo: Optional[UploadedImage] = None
        self.font_reference: Optional[UploadedImage] = None
        self.state = GenerationState.idle()
        self.upload_error: Optional[str] = None
        self.last_request: Optional[GenerationRequest] = None
        self._saved_result: Optional[GeneratedImage] = None

    # ---------------- uploads ----------------

    def upload_main(self, path: str | Path) -> bool:
        image = self._ingest(path, "Failed to process main logo image.")
        if image is None:
            return False
        self._release(self.main_logo)
        self.main_logo = image
        return True

    def upload_font(self, path: str | Path) -> bool:
        image = self._ingest(path, "Failed to process font reference image.")
        if image is None:
            return False
        self._release(self.font_reference)
        self.font_reference = image
        return True

    def remove_main(self) -> None:
        self._release(self.main_logo)
        self.main_logo = None

    def remove_font(self) -> None:
        self._release(self.font_reference)
        self.font_reference = None

    def _ingest(self, path: str | Path, failure: str) -> Optional[UploadedImage]:
        try:
            image = ingest_file(path, self.store, settings=self.settings)
        except IngestionError as e:
            logger.warning("%s %s", failure, e)
            self.upload_error = f"{failure} {e}"
            return None
        self.upload_error = None
        return image

    def _release(self, image: Optional[UploadedImage]) -> None:
        if image is not None:
            self.store.release(image.preview)

    # ---------------- generation ----------------

    @property
    def can_submit(self) -> bool:
        return self.main_logo is not None and not self.state.is_loading

    @property
    def can_retry(self) -> bool:
        # retry replays the stored request but still needs a logo in the form
        return (
            self.state.phase is Phase.FAILURE
            and self.last_request is not None
            and self.main_logo is not None
        )

    def begin(self) -> Optional[GenerationRequest]:
        """Enter loading with a fresh request; None when the guard refuses."""
        main_logo = self.main_logo
        if main_logo is None or not self.can_submit:
            return None
        request = GenerationRequest(
            main=main_logo.payload,
            font_reference=self.font_reference.payload if self.font_reference else None,
            prompt=self.prompt,
        )
        return self._enter_loading(request)

    def begin_retry(self) -> Optional[GenerationRequest]:
        request = self.last_request
        if request is None or not self.can_retry:
            return None
        return self._enter_loading(request)

    def _enter_loading(self, request: GenerationRequest) -> GenerationRequest:
        self.last_request = request
        self.state = GenerationState.loading()
        return request

    def finish(self, request: GenerationRequest) -> GenerationState:
        try:
            result = self.client(request.main, request.font_reference, request.prompt)
        except GenerationError as e:
            self.state = GenerationState.failed(str(e) or GENERIC_FAILURE)
        except Exception:
            logger.exception("unexpected error during generation")
            self.state = GenerationState.failed(GENERIC_FAILURE)
        else:
            self.state = GenerationState.succeeded(result)
        return self.state

    def submit(self) -> GenerationState:
        request = self.begin()
        if request is None:
            return self.state
        return self.finish(request)

    def retry(self) -> GenerationState:
        request = self.begin_retry()
        if request is None:
            return self.state
        return self.finish(request)

    def result_file(self) -> Optional[Path]:
        """Save the current result under the fixed download filename."""
        result = self.state.result
        if result is None:
            return None
        path = self.store.scratch_path(self.settings.download_filename)
        if self._saved_result is not result:
            result.save(path)
            self._saved_result = result
        return path

    def close(self) -> None:
        self.main_logo = None
        self.font_reference = None
        self.store.close()
