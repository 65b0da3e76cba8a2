import os

from loguru import logger

from zapio.ai.llm_router import check_config, complete
from zapio.ai.prompts import build_prompt
from zapio.ai.response_parser import parse_cheatsheet, parse_flashcards, parse_quiz_questions
from zapio.config import DEFAULT_CONFIG, load_config
from zapio.extractor.document import load_document
from zapio.models import Cheatsheet, ContentKind, Flashcard, QuizQuestion

CHEATSHEET_ERROR = "Error generating cheatsheet. Please try again."

TITLES = {
    ContentKind.QUIZ: "Zapio Quiz Generator",
    ContentKind.FLASHCARDS: "Zapio Flashcard Generator",
    ContentKind.CHEATSHEET: "Zapio Cheatsheet Generator",
}


def _ask(kind: ContentKind, path: str, cfg: dict) -> str:
    """Document -> prompt -> model reply."""
    text = load_document(path, max_chars=cfg.get("max_chars", DEFAULT_CONFIG["max_chars"]))
    logger.info("Generating {} from {} ({:,} chars)", kind.value, os.path.basename(path), len(text))
    return complete(build_prompt(kind, text), cfg, title=TITLES[kind])


def generate_quiz(path: str, cfg: dict | None = None) -> list[QuizQuestion]:
    """
    Build a ten-question quiz from a document.

    Returns an empty list when the document or the backend fails, and
    placeholder questions when the reply cannot be parsed. A missing API key
    is raised as ConfigError.
    """
    cfg = cfg if cfg is not None else load_config()
    check_config(cfg)
    try:
        return parse_quiz_questions(_ask(ContentKind.QUIZ, path, cfg))
    except Exception:  # any failure past setup becomes the empty result
        logger.exception("Error generating questions")
        return []


def generate_flashcards(path: str, cfg: dict | None = None) -> list[Flashcard]:
    """Same contract as generate_quiz, producing ten flashcards."""
    cfg = cfg if cfg is not None else load_config()
    check_config(cfg)
    try:
        return parse_flashcards(_ask(ContentKind.FLASHCARDS, path, cfg))
    except Exception:
        logger.exception("Error generating flashcards")
        return []


def generate_cheatsheet(path: str, cfg: dict | None = None) -> Cheatsheet:
    cfg = cfg if cfg is not None else load_config()
    check_config(cfg)
    try:
        return parse_cheatsheet(_ask(ContentKind.CHEATSHEET, path, cfg))
    except Exception:
        logger.exception("Error generating cheatsheet")
        return Cheatsheet(CHEATSHEET_ERROR, failed=True)


GENERATORS = {
    ContentKind.QUIZ: generate_quiz,
    ContentKind.FLASHCARDS: generate_flashcards,
    ContentKind.CHEATSHEET: generate_cheatsheet,
}


def generate(kind: ContentKind | str, path: str, cfg: dict | None = None):
    return GENERATORS[ContentKind(kind)](path, cfg)
