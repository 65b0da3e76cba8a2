import os

from loguru import logger

from zapio.cleaner.text_cleaner import clean_text
from zapio.errors import ExtractionError, UnsupportedFormatError, ZapioError
from zapio.extractor.docx_extractor import extract_text_from_docx
from zapio.extractor.pdf_extractor import extract_text_from_pdf
from zapio.extractor.txt_extractor import extract_text_from_txt

MAX_CHARS = 15000

EXTRACTORS = {
    ".pdf": extract_text_from_pdf,
    ".docx": extract_text_from_docx,
    ".txt": extract_text_from_txt,
}

SUPPORTED_EXTENSIONS = tuple(EXTRACTORS)


def is_supported(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in EXTRACTORS


def extract_text(path: str) -> str:
    """Return the raw text of a PDF, DOCX or TXT file."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    extractor = EXTRACTORS.get(ext)
    if extractor is None:
        raise UnsupportedFormatError(f"Unsupported file format: {os.path.basename(path)}")

    return extractor(path)


def load_document(path: str, max_chars: int = MAX_CHARS) -> str:
    """
    Extract, clean and truncate a document so it fits in a single prompt.
    """
    raw_text = extract_text(path)
    text = clean_text(raw_text)

    if not text:
        raise ExtractionError(f"No text extracted from {os.path.basename(path)}")

    if len(text) > max_chars:
        logger.info("Truncating {} from {:,} to {:,} chars", os.path.basename(path), len(text), max_chars)
        text = text[:max_chars]

    return text


def preview_document(path: str, max_chars: int = MAX_CHARS) -> str:
    """Text shown in the preview pane, or the reason there is none."""
    try:
        return load_document(path, max_chars)
    except (ZapioError, OSError) as e:
        logger.warning("Cannot preview {}: {}", os.path.basename(path), e)
        return f"Could not preview document: {e}"
