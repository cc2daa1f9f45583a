import io
import string
from typing import Any

import pytesseract
from PIL import Image

from docsummary.extraction.exceptions import OcrError
from docsummary.extraction.models import ExtractionResult
from docsummary.logging.logger import Log
from docsummary.ocr.base import BaseOcrExtractor
from docsummary.ocr.preprocessing import preprocess_image
from docsummary.text.cleaner import clean

CHAR_WHITELIST = string.ascii_letters + string.digits + ".,!?;:-()[]{}@#$%^&*+=/"


def assemble_text(data: dict[str, list[Any]]) -> tuple[str, float, int]:
    """Rebuild text from Tesseract word boxes.

    Words on the same line are joined with spaces, lines with newlines, and a
    blank line separates paragraphs.

    Returns:
        (text, mean word confidence clamped to [0, 100], recognized word count)
    """
    lines: list[str] = []
    confidences: list[float] = []
    previous_line: tuple[int, int, int] | None = None
    for index, raw_word in enumerate(data.get("text", [])):
        word = str(raw_word).strip()
        confidence = float(data["conf"][index])
        if not word or confidence < 0:
            continue
        line_key = (
            int(data["block_num"][index]),
            int(data["par_num"][index]),
            int(data["line_num"][index]),
        )
        if line_key == previous_line:
            lines[-1] = f"{lines[-1]} {word}"
        else:
            if previous_line is not None and line_key[:2] != previous_line[:2]:
                lines.append("")
            lines.append(word)
            previous_line = line_key
        confidences.append(confidence)

    if not confidences:
        return "", 0.0, 0
    mean_confidence = sum(confidences) / len(confidences)
    return "\n".join(lines), max(0.0, min(100.0, mean_confidence)), len(confidences)


class TesseractOcrAdapter(BaseOcrExtractor):
    """OCR via Tesseract, after best-effort image preprocessing."""

    def __init__(self, language: str = "eng", tesseract_cmd: str = "") -> None:
        self._language = language
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self._config = (
            f"--psm 3 -c tessedit_char_whitelist={CHAR_WHITELIST} "
            "-c preserve_interword_spaces=1"
        )

    def extract(self, image_bytes: bytes) -> ExtractionResult:
        Log.info(f"Starting OCR on {len(image_bytes)} bytes ({self._language})")
        try:
            image = self._prepare(image_bytes)
            data = pytesseract.image_to_data(
                image,
                lang=self._language,
                config=self._config,
                output_type=pytesseract.Output.DICT,
            )
        except Exception as exc:
            raise OcrError(f"OCR processing failed: {exc}") from exc

        raw_text, confidence, word_total = assemble_text(data)
        Log.debug(f"OCR recognized {word_total} words at {confidence:.1f} mean confidence")
        result = ExtractionResult.from_text(clean(raw_text), "ocr", confidence=confidence)
        Log.info(
            f"OCR completed. Confidence: {confidence:.1f}, "
            f"text length: {result.text_length}"
        )
        return result

    @staticmethod
    def _prepare(image_bytes: bytes) -> Image.Image:
        try:
            return preprocess_image(image_bytes)
        except Exception as exc:
            Log.warning(f"Image preprocessing failed, using original image: {exc}")
        return Image.open(io.BytesIO(image_bytes))
