"""Local Vision OCR - on-device text recognition with the macOS Vision framework.

Uses pyobjc bindings; the framework is imported lazily so the module can be
loaded on every platform.
"""

import importlib.util
import logging
import platform
import sys

from gtranslator.services.ocr.ocr_service import NO_TEXT_FOUND, OCREngine, OCRResult

logger = logging.getLogger(__name__)

MINIMUM_MACOS_MAJOR = 13


def local_vision_available() -> bool:
    """True on macOS 13+ with the Vision bindings installed."""
    if sys.platform != "darwin":
        return False
    release = platform.mac_ver()[0]
    try:
        major = int(release.split(".")[0])
    except ValueError:
        return False
    if major < MINIMUM_MACOS_MAJOR:
        return False
    return importlib.util.find_spec("Vision") is not None


class LocalVisionOCR(OCREngine):
    """Accurate-level recognition with language correction, one line per observation."""

    name = "vision-local"

    def extract_text(self, image_data: bytes) -> OCRResult:
        import Vision
        from Foundation import NSData

        nsdata = NSData.dataWithBytes_length_(image_data, len(image_data))
        if nsdata is None or len(image_data) == 0:
            return self.failure("Unable to process the image")

        request = Vision.VNRecognizeTextRequest.alloc().init()
        request.setRecognitionLevel_(Vision.VNRequestTextRecognitionLevelAccurate)
        request.setUsesLanguageCorrection_(True)

        handler = Vision.VNImageRequestHandler.alloc().initWithData_options_(nsdata, None)
        success, error = handler.performRequests_error_([request], None)
        if not success:
            detail = error.localizedDescription() if error is not None else "unknown error"
            logger.warning("Local OCR failed: %s", detail)
            return self.failure(f"Local OCR error: {detail}")

        observations = request.results() or []
        lines = []
        for observation in observations:
            candidates = observation.topCandidates_(1)
            if candidates:
                lines.append(str(candidates[0].string()))

        text = "\n".join(lines)
        if not text:
            return self.failure(NO_TEXT_FOUND)

        logger.debug("Local OCR extracted %d lines", len(lines))
        return OCRResult(text=text, engine=self.name)
