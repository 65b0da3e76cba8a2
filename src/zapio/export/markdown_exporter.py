from pathlib import Path
import re

from zapio.models import Cheatsheet, Flashcard, QuizQuestion


def to_markdown(text: str) -> str:
    if not text:
        return ""
    t = text.replace("\r\n", "\n").replace("\r", "\n")
    # Plain-text cheatsheets use ALL CAPS lines as section titles
    t = re.sub(r'^([A-Z][A-Z0-9 ,&/()\-]{2,}):?[ \t]*$', r'## \1', t, flags=re.MULTILINE)
    t = re.sub(r'^\s*[•*]\s+', r'- ', t, flags=re.MULTILINE)
    t = re.sub(r'\n{3,}', '\n\n', t)
    return t.strip()


def flashcards_to_markdown(cards: list[Flashcard], title: str = "Flashcards") -> str:
    lines = [f"# {title}", ""]
    for i, card in enumerate(cards, start=1):
        lines.append(f"#### Q{i}: {card.question}")
        lines.append(f"> A: {card.answer}")
        lines.append("")
    return "\n".join(lines).strip() + "\n"


def quiz_to_markdown(questions: list[QuizQuestion], title: str = "Practice Quiz") -> str:
    lines = [f"# {title}", ""]
    for i, q in enumerate(questions, start=1):
        lines.append(f"#### {i}. {q.question}")
        for j, option in enumerate(q.options):
            mark = "x" if q.is_correct(j) else " "
            lines.append(f"- [{mark}] {option}")
        lines.append("")
    return "\n".join(lines).strip() + "\n"


def cheatsheet_to_markdown(sheet: Cheatsheet, title: str = "Cheatsheet") -> str:
    return f"# {title}\n\n{to_markdown(sheet.text)}\n"


def export_markdown(content: str, out_path: str) -> Path:
    out = Path(out_path)
    if out.suffix.lower() != ".md":
        out = out.with_suffix(".md")
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    return out
