import textwrap
from pathlib import Path

import fitz  # PyMuPDF
from loguru import logger

from zapio.models import Cheatsheet

TITLE = "One Sheet to Rule Them All"
PAGE_WIDTH, PAGE_HEIGHT = fitz.paper_size("a4")
MARGIN = 50
TITLE_SIZE = 16
FONT_SIZE = 10
LEADING = 1.5 * FONT_SIZE
WRAP_WIDTH = 95  # characters of 10pt Helvetica across the text column


def _wrap(line: str) -> list[str]:
    return textwrap.wrap(line, WRAP_WIDTH) or [""]


def export_cheatsheet_pdf(sheet: Cheatsheet | str, out_path: str) -> Path:
    """
    Lay a cheatsheet out on A4 pages, one text line per row.

    Lines starting with '#' are set in bold. Blank lines keep their spacing.
    """
    text = sheet.text if isinstance(sheet, Cheatsheet) else sheet
    out = Path(out_path)
    if out.suffix.lower() != ".pdf":
        out = out.with_name(out.name + ".pdf")
    out.parent.mkdir(parents=True, exist_ok=True)

    doc = fitz.open()
    page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
    page.insert_text((100, 92), TITLE, fontname="hebo", fontsize=TITLE_SIZE)
    y = 122

    for line in text.split("\n"):
        stripped = line.strip()
        font = "hebo" if stripped.startswith("#") else "helv"

        for row in _wrap(stripped):
            if row:
                page.insert_text((MARGIN, y), row, fontname=font, fontsize=FONT_SIZE)
            y += LEADING

            if y >= PAGE_HEIGHT - MARGIN:
                page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
                y = MARGIN + FONT_SIZE

    doc.save(str(out))
    page_count = doc.page_count
    doc.close()

    logger.info("Exported cheatsheet to {} ({} pages)", out, page_count)
    return out
