"""Async workers for non-blocking API calls using Qt threading."""

from typing import Callable

from PySide6.QtCore import QObject, QRunnable, Signal, Slot

from gtranslator.core import TranslationRequest
from gtranslator.services.ocr import OCRResult
from gtranslator.services.translation import TranslationService


class WorkerSignals(QObject):
    """
    Signals for communicating results from worker threads.

    QRunnable doesn't inherit from QObject, so we need a separate
    QObject to hold the signals.
    """
    finished = Signal()
    error = Signal(str)
    translation_result = Signal(object)  # TranslationResult
    ocr_result = Signal(object)  # OCRResult


class TranslationWorker(QRunnable):
    """
    Worker that runs the translation call chain in a background thread.

    Language detection (when needed) and translation happen inside the
    service call, so the UI sees a single result.
    """

    def __init__(
        self,
        translation_service: TranslationService,
        request: TranslationRequest,
        api_key: str,
    ):
        super().__init__()
        self.translation_service = translation_service
        self.request = request
        self.api_key = api_key
        self.signals = WorkerSignals()
        self.setAutoDelete(True)

    @Slot()
    def run(self):
        """Execute the translation API call in background thread."""
        try:
            result = self.translation_service.translate(
                request=self.request,
                api_key=self.api_key,
            )
            self.signals.translation_result.emit(result)
        except Exception as e:
            # Catch any unexpected exceptions not handled by service
            self.signals.error.emit(f"Unexpected translation error: {str(e)}")
        finally:
            self.signals.finished.emit()


class OCRWorker(QRunnable):
    """Worker that runs one OCR extraction in a background thread."""

    def __init__(self, extract: Callable[[], OCRResult]):
        super().__init__()
        self.extract = extract
        self.signals = WorkerSignals()
        self.setAutoDelete(True)

    @Slot()
    def run(self):
        try:
            self.signals.ocr_result.emit(self.extract())
        except Exception as e:
            self.signals.error.emit(f"Unexpected OCR error: {str(e)}")
        finally:
            self.signals.finished.emit()
