"""Brute-force PDF text recovery for files the structural parsers reject.

Many broken PDFs (damaged cross-reference tables, unusual compression) still
carry their text-show operands as plain literals. This extractor scans the raw
bytes for them under several decodings and keeps whichever decoding yields the
most cleaned text. Precision is traded for robustness.
"""

import math
import re
from collections.abc import Callable

from docsummary.extraction.exceptions import RawStreamExtractionError
from docsummary.extraction.models import ExtractionResult
from docsummary.logging.logger import Log
from docsummary.pdf.base import BasePdfExtractor
from docsummary.text.cleaner import MIN_TEXT_LENGTH, clean

WORDS_PER_PAGE = 300

_PAREN_LITERAL = re.compile(r"\((.*?)\)")
_ESCAPED_CHAR = re.compile(r"\\(.)")
_ANGLE_LITERAL = re.compile(r"<([^<>]+)>")
_HEX_DIGITS = re.compile(r"[0-9A-Fa-f\s]+")
_STREAM = re.compile(r"stream[\s\S]*?endstream", re.IGNORECASE)
_TEXT_BLOCK = re.compile(r"BT[\s\S]*?ET", re.IGNORECASE)
_TEXT_BLOCK_MARKERS = re.compile(r"BT|ET")
_BLOCK_LITERAL = re.compile(r"\(([^)]+)\)")
_ALPHA_RUN = re.compile(r"[a-zA-Z]{3,}")

DECODINGS: dict[str, Callable[[bytes], str]] = {
    "utf8": lambda data: data.decode("utf-8", errors="replace"),
    "latin1": lambda data: data.decode("latin-1"),
    "binary": lambda data: data.decode("ascii", errors="ignore"),
}


def _decode_angle_literal(content: str) -> str:
    if not _HEX_DIGITS.fullmatch(content):
        return _ESCAPED_CHAR.sub(r"\1", content)
    digits = "".join(content.split())
    if len(digits) % 2:
        digits += "0"
    return bytes.fromhex(digits).decode("latin-1")


def scan_text(pdf_content: str) -> str:
    """Concatenate every literal and text block found in decoded PDF content."""
    parts: list[str] = []
    for literal in _PAREN_LITERAL.findall(pdf_content):
        parts.append(_ESCAPED_CHAR.sub(r"\1", literal))
    for literal in _ANGLE_LITERAL.findall(pdf_content):
        parts.append(_decode_angle_literal(literal))
    for stream in _STREAM.findall(pdf_content):
        for block in _TEXT_BLOCK.findall(stream):
            parts.append(_BLOCK_LITERAL.sub(r"\1", _TEXT_BLOCK_MARKERS.sub("", block)))
    return clean(" ".join(parts))


def scrape_alpha_runs(pdf_bytes: bytes) -> str:
    """Last resort: every run of three or more letters, structure ignored."""
    return " ".join(_ALPHA_RUN.findall(pdf_bytes.decode("latin-1")))


def estimate_pages(text: str) -> int:
    return max(1, math.ceil(len(text.split()) / WORDS_PER_PAGE))


class RawStreamPdfExtractor(BasePdfExtractor):
    """Scans raw PDF bytes for text literals under several decodings."""

    name = "raw_stream"

    def extract(self, pdf_bytes: bytes) -> ExtractionResult:
        candidates = {
            encoding: scan_text(decode(pdf_bytes)) for encoding, decode in DECODINGS.items()
        }
        qualified = {
            encoding: text
            for encoding, text in candidates.items()
            if len(text) >= MIN_TEXT_LENGTH
        }
        if not qualified:
            # Below the threshold the short scans and the letter-run scrape compete on length.
            qualified = {**candidates, "raw": scrape_alpha_runs(pdf_bytes)}

        encoding = max(qualified, key=lambda name: len(qualified[name]))
        text = qualified[encoding]
        if not text:
            raise RawStreamExtractionError("No readable text found in raw PDF content")

        result = ExtractionResult.from_text(
            text,
            "raw_stream_pdf",
            pages=estimate_pages(text),
            encoding=encoding,
        )
        Log.info(
            f"Raw stream extraction ({encoding}): {result.text_length} chars, "
            f"{result.word_count} meaningful words"
        )
        return result
