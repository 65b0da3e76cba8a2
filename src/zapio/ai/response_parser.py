"""
Best-effort conversion of model replies into study records.

Models are asked for a JSON array but often wrap it in prose or code fences,
so parsing is lenient and falls back to placeholder records instead of
raising.
"""
import json
import re

from loguru import logger

from zapio.models import OPTION_COUNT, Cheatsheet, Flashcard, QuizQuestion

FILLER_OPTION = "N/A"
PLACEHOLDER_OPTIONS = [f"Option {i}" for i in range(1, OPTION_COUNT + 1)]
PLACEHOLDER_QUESTION_COUNT = 2

FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*$", re.MULTILINE)
QA_RE = re.compile(r"^(Q:|Question:|A:|Answer:)\s*", re.IGNORECASE)


def extract_json_array(text: str) -> str:
    """Cut the outermost [...] out of a reply, dropping code fences and chatter."""
    content = FENCE_RE.sub("", text.strip()).strip()

    start = content.find("[")
    end = content.rfind("]")
    if start >= 0 and end > start:
        content = content[start:end + 1]
    return content


def _load_array(text: str) -> list:
    data = json.loads(extract_json_array(text))
    if isinstance(data, dict):
        # {"questions": [...]} and similar single-key wrappers
        lists = [v for v in data.values() if isinstance(v, list)]
        if len(lists) == 1:
            return lists[0]
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    return data


def _normalize_options(raw) -> list[str]:
    options = [str(o).strip() for o in raw][:OPTION_COUNT]
    while len(options) < OPTION_COUNT:
        options.append(FILLER_OPTION)
    return options


def _correct_index(raw) -> int:
    if isinstance(raw, bool):
        return 0
    try:
        index = int(raw)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Invalid correctOption {!r}, defaulting to 0", raw)
        return 0
    if not 0 <= index < OPTION_COUNT:
        logger.warning("correctOption {} out of range, defaulting to 0", index)
        return 0
    return index


def placeholder_questions() -> list[QuizQuestion]:
    return [
        QuizQuestion(f"Failed to parse API response. Question {i}?", PLACEHOLDER_OPTIONS)
        for i in range(1, PLACEHOLDER_QUESTION_COUNT + 1)
    ]


def parse_quiz_questions(text: str, limit: int = 10) -> list[QuizQuestion]:
    questions = []

    try:
        items = _load_array(text)
    except ValueError as e:  # json.JSONDecodeError included
        logger.error("Error parsing quiz response: {}", e)
        items = []

    for item in items:
        if len(questions) >= limit:
            break
        if not isinstance(item, dict) or not isinstance(item.get("question"), str) \
                or not isinstance(item.get("options"), list):
            logger.warning("Skipping malformed quiz entry: {!r}", item)
            continue
        questions.append(QuizQuestion(
            item["question"].strip(),
            _normalize_options(item["options"]),
            _correct_index(item.get("correctOption", item.get("correct_option", 0))),
        ))

    if not questions:
        return placeholder_questions()
    return questions


def parse_qa_text(text: str) -> list[Flashcard]:
    """
    Parse flashcards from 'Q: ... A: ...' lines.

    Answers may continue over several lines until the next Q:.
    """
    cards = []
    current_q = None
    current_a = None

    for line in text.splitlines():
        line = line.strip()
        marker = QA_RE.match(line)
        if marker and marker.group(1).upper().startswith("Q"):
            if current_q and current_a:
                cards.append(Flashcard(current_q, current_a))
            current_q = line[marker.end():].strip()
            current_a = None
        elif marker:
            current_a = line[marker.end():].strip()
        elif current_q and current_a is not None and line:
            current_a += " " + line

    if current_q and current_a:
        cards.append(Flashcard(current_q, current_a))
    return cards


def parse_flashcards(text: str, count: int = 10) -> list[Flashcard]:
    cards = []

    try:
        items = _load_array(text)
    except ValueError as e:
        logger.warning("Flashcard response is not JSON ({}), trying Q:/A: lines", e)
        items = []

    for item in items:
        if len(cards) >= count:
            break
        if not isinstance(item, dict) or not isinstance(item.get("question"), str) \
                or not isinstance(item.get("answer"), str):
            logger.warning("Skipping malformed flashcard entry: {!r}", item)
            continue
        cards.append(Flashcard(item["question"].strip(), item["answer"].strip()))

    if not cards:
        cards = parse_qa_text(text)[:count]

    if not cards:
        logger.error("No flashcards could be parsed from the response")
        return [
            Flashcard(f"Key concept {i}", "Failed to generate content. Please try again.")
            for i in range(1, count + 1)
        ]

    while len(cards) < count:
        cards.append(Flashcard(
            f"Important concept {len(cards) + 1}",
            "This is a placeholder for missing content.",
        ))
    return cards


def format_cheatsheet(text: str) -> str:
    """Drop markdown code markers the model adds despite being told not to."""
    return text.replace("```", "").replace("`", "").strip()


def parse_cheatsheet(text: str) -> Cheatsheet:
    return Cheatsheet(format_cheatsheet(text))
