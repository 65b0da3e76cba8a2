from docx import Document
from docx.opc.exceptions import PackageNotFoundError

from zapio.errors import ExtractionError


def extract_text_from_docx(docx_path: str) -> str:
    """
    Extract text from DOCX files while preserving paragraph structure.

    Args:
        docx_path: Path to the DOCX file

    Returns:
        Non-empty paragraphs, followed by table rows with cells joined by " | "

    Raises:
        ExtractionError: If the file is not a readable DOCX package
    """
    try:
        doc = Document(docx_path)
    except (PackageNotFoundError, KeyError, ValueError) as e:
        raise ExtractionError(f"Failed to extract from DOCX: {e}") from e

    full_text = []

    for paragraph in doc.paragraphs:
        text = paragraph.text.strip()
        if text:
            full_text.append(text)

    for table in doc.tables:
        for row in table.rows:
            row_text = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if row_text:
                full_text.append(" | ".join(row_text))

    return "\n".join(full_text).strip()
