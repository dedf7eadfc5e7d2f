"""Translation Coordinator - Drives the popover: translate, OCR, clipboard and results."""

import logging
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import QObject, QThreadPool, Signal, Slot

from gtranslator.core import AUTO_LANGUAGE, TranslationRequest
from gtranslator.services import (
    ClipboardService,
    OCRResult,
    OCRService,
    PreferencesManager,
    TranslationResult,
    TranslationService,
    read_dropped_file,
)
from gtranslator.services.api_workers import OCRWorker, TranslationWorker
from gtranslator.services.file_intake import KIND_IMAGE
from gtranslator.ui.notifications import NotificationBus

logger = logging.getLogger(__name__)

CLIPBOARD_IMAGE_SOURCE = "clipboard image"
DROPPED_IMAGE_SOURCE = "dropped image"


class _TranslationRequest(QObject):
    """Helper class to hold translation request context and handle results safely."""

    def __init__(self, worker_id: int, parent: "TranslationCoordinator"):
        super().__init__()
        self.worker_id = worker_id
        self.parent_ref = parent

    @Slot(object)
    def on_translation_result(self, result):
        coordinator = self.parent_ref
        if coordinator:
            try:
                coordinator._handle_translation_result(result, self.worker_id)
            except RuntimeError:
                # Coordinator might be destroyed, ignore
                pass

    @Slot(str)
    def on_translation_error(self, error: str):
        coordinator = self.parent_ref
        if coordinator:
            try:
                coordinator._handle_translation_error(error, self.worker_id)
            except RuntimeError:
                pass


class _OCRRequest(QObject):
    """Helper class holding the continuation to run once text is extracted."""

    def __init__(
        self,
        worker_id: int,
        on_text: Callable[[str], None],
        parent: "TranslationCoordinator",
    ):
        super().__init__()
        self.worker_id = worker_id
        self.on_text = on_text
        self.parent_ref = parent

    @Slot(object)
    def on_ocr_result(self, result):
        coordinator = self.parent_ref
        if coordinator:
            try:
                coordinator._handle_ocr_result(result, self.worker_id, self.on_text)
            except RuntimeError:
                pass

    @Slot(str)
    def on_ocr_error(self, error: str):
        coordinator = self.parent_ref
        if coordinator:
            try:
                coordinator._handle_ocr_error(error, self.worker_id)
            except RuntimeError:
                pass


class TranslationCoordinator(QObject):
    """
    Orchestrates the popover workflow.

    Responsibilities:
    - Read input, languages and context from the view and start requests.
    - Run translation and OCR calls on the thread pool.
    - Apply results on the UI thread: result text, detected language,
      auto-copy to clipboard, and "Error: ..." strings on failure.
    - React to notification-bus requests (shortcuts and menu actions).
    """

    translation_started = Signal()
    translation_completed = Signal(str)
    translation_failed = Signal(str)
    text_extracted = Signal(str)

    def __init__(
        self,
        view,
        translation_service: TranslationService,
        ocr_service: OCRService,
        preferences: PreferencesManager,
        clipboard: ClipboardService,
        notifications: NotificationBus,
        thread_pool: Optional[QThreadPool] = None,
    ):
        super().__init__()

        self.view = view
        self.translation_service = translation_service
        self.ocr_service = ocr_service
        self.preferences = preferences
        self.clipboard = clipboard
        self.notifications = notifications
        self.thread_pool = thread_pool if thread_pool is not None else QThreadPool.globalInstance()

        self.is_loading = False
        self.error_message: Optional[str] = None
        self.extracted_text = ""
        self.detected_language = AUTO_LANGUAGE

        # Results from superseded workers are dropped
        self._active_worker_id: Optional[int] = None
        self._worker_counter = 0

        # Keep references to helper objects so they don't get garbage collected
        # while workers are running in background threads
        self._translation_request_helper: Optional[_TranslationRequest] = None
        self._ocr_request_helper: Optional[_OCRRequest] = None

    def connect_notifications(self) -> None:
        """Route bus requests to coordinator actions and view toggles."""
        bus = self.notifications
        bus.translate_requested.connect(self.translate)
        bus.translate_clipboard_requested.connect(self.translate_from_clipboard)
        bus.copy_result_requested.connect(self.copy_result)
        bus.clear_all_requested.connect(self.clear_all)
        bus.toggle_context_requested.connect(self.view.toggle_context)
        bus.select_all_requested.connect(self.view.select_all)
        bus.show_preferences_requested.connect(self.view.show_preferences)
        bus.text_extracted_from_image.connect(self._on_text_extracted_from_image)

    # Actions

    @Slot()
    def translate(self) -> None:
        """Translate the input field; ignored when empty or busy."""
        text = self.view.input_text()
        if not text or self.is_loading:
            return

        request = TranslationRequest(
            text=text,
            source_language=self.view.source_language(),
            target_language=self.view.target_language(),
            context=self._current_context(),
        )
        self._start_translation(request)

    @Slot()
    def translate_from_clipboard(self) -> None:
        """
        Clipboard text goes into the input field for review; a clipboard image
        is run through OCR and the extracted text is translated.
        """
        if self.is_loading:
            return

        text = self.clipboard.text()
        if text:
            self.view.set_input_text(text)
            return

        image_data = self.clipboard.image_bytes()
        if image_data is None:
            if not self.clipboard.has_content():
                self._show_failure("No content found in the clipboard")
            else:
                self._show_failure("No image found in the clipboard")
            return

        target = self.view.target_language()
        context = self._current_context()

        def translate_extracted(extracted: str) -> None:
            self.notifications.text_extracted_from_image.emit(extracted, CLIPBOARD_IMAGE_SOURCE)
            self._start_translation(
                TranslationRequest(
                    text=extracted,
                    source_language=AUTO_LANGUAGE,
                    target_language=target,
                    context=context,
                )
            )

        self._start_ocr(self._image_extractor(image_data), translate_extracted)

    @Slot(Path)
    def handle_file_dropped(self, path: Path) -> None:
        """Images go through OCR, text files are loaded into the input."""
        intake = read_dropped_file(path)
        if intake.is_error:
            self._set_error(intake.error)
            return

        if intake.kind == KIND_IMAGE:
            image_data = intake.image_data

            def show_extracted(extracted: str) -> None:
                self.view.set_input_text(extracted)
                self.view.show_extracted_text(extracted, DROPPED_IMAGE_SOURCE)

            self._start_ocr(self._image_extractor(image_data), show_extracted)
            return

        logger.debug("Loaded %d chars from %s", len(intake.text), path.name)
        self._set_error(None)
        self.view.set_input_text(intake.text)

    @Slot()
    def copy_result(self) -> None:
        text = self.view.result_text()
        if not text:
            return
        self.clipboard.set_text(text)

    @Slot()
    def clear_all(self) -> None:
        """Reset input, result and extracted text; pending results are dropped."""
        self._active_worker_id = None
        self.translation_service.cancel_detection()
        self._set_loading(False)

        self.view.set_input_text("")
        self.view.set_result_text("")
        self.extracted_text = ""
        self.view.hide_extracted_text()

    # Request plumbing

    def _start_translation(self, request: TranslationRequest) -> None:
        self._set_loading(True)
        self._set_error(None)
        self.translation_started.emit()

        worker_id = self._next_worker_id()

        worker = TranslationWorker(
            translation_service=self.translation_service,
            request=request,
            api_key=self.preferences.api_key,
        )

        # IMPORTANT: Store reference so it doesn't get garbage collected while worker runs
        request_helper = _TranslationRequest(worker_id, self)
        self._translation_request_helper = request_helper

        worker.signals.translation_result.connect(request_helper.on_translation_result)
        worker.signals.error.connect(request_helper.on_translation_error)

        self.thread_pool.start(worker)

    def _image_extractor(self, image_data: bytes) -> Callable[[], OCRResult]:
        """Gemini OCR with a Gemini key, otherwise on-device Vision or Cloud Vision."""
        api_key = self.preferences.api_key
        if api_key:
            return lambda: self.ocr_service.extract_text_with_gemini(image_data, api_key)
        ocr_api_key = self.preferences.ocr_api_key
        return lambda: self.ocr_service.extract_text(image_data, ocr_api_key)

    def _start_ocr(self, extract: Callable[[], OCRResult], on_text: Callable[[str], None]) -> None:
        self._set_loading(True)
        self._set_error(None)

        worker_id = self._next_worker_id()
        worker = OCRWorker(extract)

        request_helper = _OCRRequest(worker_id, on_text, self)
        self._ocr_request_helper = request_helper

        worker.signals.ocr_result.connect(request_helper.on_ocr_result)
        worker.signals.error.connect(request_helper.on_ocr_error)

        self.thread_pool.start(worker)

    def _handle_translation_result(self, result: TranslationResult, worker_id: int) -> None:
        if worker_id != self._active_worker_id:
            logger.debug("Ignoring stale translation result (worker %s, current %s)", worker_id, self._active_worker_id)
            return

        self._set_loading(False)

        if result.detected_language:
            self.detected_language = result.detected_language
            self.view.set_detected_language(result.detected_language)

        if result.is_error:
            self._show_failure(result.error or "Error during translation")
            return

        self.view.set_result_text(result.text)
        if self.preferences.auto_copy_to_clipboard:
            self.clipboard.set_text(result.text)
        self.translation_completed.emit(result.text)

    def _handle_translation_error(self, error: str, worker_id: int) -> None:
        if worker_id != self._active_worker_id:
            logger.debug("Ignoring stale translation error (worker %s, current %s)", worker_id, self._active_worker_id)
            return
        self._set_loading(False)
        self._show_failure(error)

    def _handle_ocr_result(self, result: OCRResult, worker_id: int, on_text: Callable[[str], None]) -> None:
        if worker_id != self._active_worker_id:
            logger.debug("Ignoring stale OCR result (worker %s, current %s)", worker_id, self._active_worker_id)
            return

        self._set_loading(False)

        if result.is_error:
            self._show_failure(result.error or "No text found in the image")
            return

        logger.debug("OCR (%s) extracted %d chars", result.engine, len(result.text))
        self.extracted_text = result.text
        self.text_extracted.emit(result.text)
        on_text(result.text)

    def _handle_ocr_error(self, error: str, worker_id: int) -> None:
        if worker_id != self._active_worker_id:
            logger.debug("Ignoring stale OCR error (worker %s, current %s)", worker_id, self._active_worker_id)
            return
        self._set_loading(False)
        self._show_failure(error)

    def _on_text_extracted_from_image(self, text: str, source: str) -> None:
        self.extracted_text = text
        self.view.set_input_text(text)
        self.view.show_extracted_text(text, source)

    # State helpers

    def _next_worker_id(self) -> int:
        self._worker_counter += 1
        self._active_worker_id = self._worker_counter
        return self._worker_counter

    def _current_context(self) -> Optional[str]:
        if not self.view.is_context_visible():
            return None
        return self.view.context_text() or None

    def _set_loading(self, loading: bool) -> None:
        self.is_loading = loading
        self.view.set_loading(loading)

    def _set_error(self, message: Optional[str]) -> None:
        self.error_message = message
        self.view.set_error(message)

    def _show_failure(self, message: str) -> None:
        logger.info("Request failed: %s", message)
        self._set_error(message)
        self.view.set_result_text(f"Error: {message}")
        self.translation_failed.emit(message)
