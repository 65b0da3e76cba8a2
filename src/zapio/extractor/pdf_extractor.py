import io

import fitz  # PyMuPDF
import pytesseract
from loguru import logger
from PIL import Image

from zapio.errors import ExtractionError


def _ocr_page(page) -> str:
    pix = page.get_pixmap(dpi=300)
    image = Image.open(io.BytesIO(pix.tobytes("png")))
    try:
        return pytesseract.image_to_string(image)
    except pytesseract.TesseractNotFoundError:
        logger.warning("Page {} has no text layer and tesseract is not installed; skipping", page.number + 1)
        return ""
    except pytesseract.TesseractError as e:
        logger.warning("OCR failed on page {}: {}; skipping", page.number + 1, e)
        return ""


def extract_text_from_pdf(pdf_path: str) -> str:
    parts = []

    try:
        with fitz.open(pdf_path) as doc:
            for page in doc:
                text = page.get_text().strip()

                # Scanned pages carry no selectable text
                if not text:
                    text = _ocr_page(page).strip()

                if text:
                    parts.append(text)
    except RuntimeError as e:  # includes fitz.FileDataError
        raise ExtractionError(f"Failed to extract from PDF: {e}") from e

    return "\n".join(parts).strip()
