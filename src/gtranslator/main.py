"""Main entry point for the GTranslator menu-bar application."""

import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication, QSystemTrayIcon

from gtranslator.coordinators import TranslationCoordinator
from gtranslator.core import LanguageTable
from gtranslator.services import (
    ClipboardService,
    CloudVisionOCR,
    GeminiClient,
    GeminiOCR,
    GeminiTranslationService,
    LocalVisionOCR,
    OCRService,
    PreferencesManager,
    SettingsManager,
    local_vision_available,
)
from gtranslator.ui import MenuBarShell, NotificationBus, PopoverView

LOG_DIR = Path.home() / ".gtranslator"

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Console plus a log file under ~/.gtranslator."""
    handlers = [logging.StreamHandler()]
    file_error = None
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(LOG_DIR / "gtranslator.log"))
    except OSError as e:
        file_error = e
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
    if file_error is not None:
        logger.warning("File logging disabled: %s", file_error)


def build_ocr_service(client: GeminiClient, timeout: float) -> OCRService:
    return OCRService(
        local_engine=LocalVisionOCR(),
        cloud_engine_factory=lambda key: CloudVisionOCR(key, timeout_seconds=timeout),
        gemini_engine_factory=lambda key: GeminiOCR(client, key),
        local_available=local_vision_available,
    )


def main():
    """
    Bootstrap the application following the Composition Root pattern.
    This is the only place that knows how to instantiate and wire all components.
    """
    # 1. Initialize Application
    app = QApplication(sys.argv)
    app.setApplicationName("GTranslator")
    app.setOrganizationName("GTranslator")
    app.setQuitOnLastWindowClosed(False)

    # 2. Configuration and preferences
    settings_manager = SettingsManager()
    configure_logging(settings_manager.get_log_level())
    preferences = PreferencesManager(settings_manager=settings_manager)
    PreferencesManager.set_shared(preferences)

    if not QSystemTrayIcon.isSystemTrayAvailable():
        logger.error("No system tray available on this desktop")
        return 1

    # 3. Services
    timeout = settings_manager.get_http_timeout()
    gemini_client = GeminiClient(settings_manager.get_model_name(), timeout_seconds=timeout)
    translation_service = GeminiTranslationService(gemini_client)
    ocr_service = build_ocr_service(gemini_client, timeout)
    clipboard = ClipboardService()
    languages = LanguageTable()
    notifications = NotificationBus()

    # 4. Construct UI
    popover = PopoverView(preferences, languages)
    shell = MenuBarShell(popover, notifications)

    # 5. Coordinator (Dependency Injection)
    coordinator = TranslationCoordinator(
        view=popover,
        translation_service=translation_service,
        ocr_service=ocr_service,
        preferences=preferences,
        clipboard=clipboard,
        notifications=notifications,
    )
    coordinator.connect_notifications()

    # 6. Signal Wiring (Connect UI signals to Coordinator slots)
    popover.translate_clicked.connect(coordinator.translate)
    popover.clipboard_clicked.connect(coordinator.translate_from_clipboard)
    popover.copy_clicked.connect(coordinator.copy_result)
    popover.clear_clicked.connect(coordinator.clear_all)
    popover.file_dropped.connect(coordinator.handle_file_dropped)
    popover.quit_clicked.connect(app.quit)
    app.aboutToQuit.connect(shell.stop)

    # 7. Show tray icon and start event loop
    shell.start()
    logger.info("GTranslator started (model %s)", gemini_client.model_name)

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
