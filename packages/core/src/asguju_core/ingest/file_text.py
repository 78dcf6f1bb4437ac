from __future__ import annotations

from pathlib import Path

import docx
import fitz
import pytesseract
from PIL import Image

IMAGE_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".bmp", ".tiff"})
OCR_LANGUAGES = "eng+ind"


def extract_pdf_text(pdf_path: str) -> str:
    parts: list[str] = []
    with fitz.open(pdf_path) as doc:
        for page in doc:
            parts.append(page.get_text())
    return "\n".join(parts)


def extract_docx_text(docx_path: str) -> str:
    document = docx.Document(docx_path)
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def extract_image_text(image_path: str) -> str:
    with Image.open(image_path) as image:
        return pytesseract.image_to_string(image, lang=OCR_LANGUAGES)


def extract_file_text(file_path: str, original_name: str) -> str:
    """Plain text of an uploaded file, chosen by the original file extension.

    Library errors propagate to the caller.
    """
    suffix = Path(original_name).suffix.lower()
    if suffix == ".pdf":
        return extract_pdf_text(file_path)
    if suffix == ".docx":
        return extract_docx_text(file_path)
    if suffix == ".txt":
        return Path(file_path).read_text(encoding="utf-8")
    if suffix in IMAGE_SUFFIXES:
        return extract_image_text(file_path)
    return Path(file_path).read_text(encoding="utf-8", errors="replace")
