import argparse
import os
import re
import sys

from loguru import logger

from zapio.ai.generator import generate
from zapio.config import load_config
from zapio.errors import ConfigError
from zapio.export.anki_exporter import export_anki
from zapio.export.markdown_exporter import (
    cheatsheet_to_markdown,
    export_markdown,
    flashcards_to_markdown,
    quiz_to_markdown,
)
from zapio.export.pdf_exporter import export_cheatsheet_pdf
from zapio.extractor.document import SUPPORTED_EXTENSIONS, is_supported
from zapio.models import ContentKind

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def configure_logging(verbose: bool = False):
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO", format=LOG_FORMAT)


def safe_filename(name: str) -> str:
    name = os.path.splitext(os.path.basename(name))[0]
    name = re.sub(r"[^a-zA-Z0-9_-]+", "_", name)
    return name.strip("_").lower() or "zapio"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zapio",
        description="Turn a PDF, DOCX or TXT document into a quiz, flashcards or a cheatsheet.",
    )
    parser.add_argument("file", help="document to study")
    parser.add_argument(
        "-m", "--mode",
        choices=[k.value for k in ContentKind],
        default=ContentKind.FLASHCARDS.value,
        help="what to generate (default: flashcards)",
    )
    parser.add_argument("-o", "--out", help="output path (default: <file>_<mode>.md)")
    parser.add_argument("--anki", action="store_true", help="also export flashcards as an Anki deck")
    parser.add_argument("--pdf", action="store_true", help="write the cheatsheet as PDF instead of Markdown")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def run(file_path: str, kind: ContentKind, out_path: str | None = None,
        anki: bool = False, pdf: bool = False, cfg: dict | None = None) -> str:
    """Generate content for one document and write it to disk. Returns the output path."""
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")
    if not is_supported(file_path):
        raise ValueError(f"Unsupported file type, expected one of {', '.join(SUPPORTED_EXTENSIONS)}")

    kind = ContentKind(kind)
    base = safe_filename(file_path)
    suffix = ".pdf" if pdf and kind is ContentKind.CHEATSHEET else ".md"
    out_path = out_path or f"{base}_{kind.value}{suffix}"

    result = generate(kind, file_path, cfg)

    if kind is ContentKind.CHEATSHEET:
        if result.failed:
            raise RuntimeError(result.text)
        if pdf:
            return str(export_cheatsheet_pdf(result, out_path))
        return str(export_markdown(cheatsheet_to_markdown(result), out_path))

    if not result:
        raise RuntimeError(f"Failed to generate {kind.value}. Please try again.")

    if kind is ContentKind.QUIZ:
        return str(export_markdown(quiz_to_markdown(result), out_path))

    if anki:
        export_anki(result, deck_name=base, output_dir=os.path.dirname(out_path) or ".")
    return str(export_markdown(flashcards_to_markdown(result), out_path))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        output = run(
            args.file,
            ContentKind(args.mode),
            out_path=args.out,
            anki=args.anki,
            pdf=args.pdf,
            cfg=load_config(),
        )
    except (ConfigError, FileNotFoundError, ValueError, RuntimeError) as e:
        logger.error(str(e))
        return 1

    logger.success("Saved {} to {}", args.mode, output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
