from dataclasses import dataclass
from enum import Enum

OPTION_COUNT = 4


class ContentKind(str, Enum):
    """What to generate from a document."""
    QUIZ = "quiz"
    FLASHCARDS = "flashcards"
    CHEATSHEET = "cheatsheet"


@dataclass
class Flashcard:
    """A question on the front and its answer on the back."""
    question: str
    answer: str


@dataclass
class QuizQuestion:
    """A single-choice question with four options."""
    question: str
    options: list[str]
    correct_option: int = 0

    def __post_init__(self):
        self.options = list(self.options)
        if not 0 <= self.correct_option < len(self.options):
            raise ValueError(
                f"correct_option {self.correct_option} out of range "
                f"for {len(self.options)} options"
            )

    def option_at(self, index: int) -> str:
        if 0 <= index < len(self.options):
            return self.options[index]
        return ""

    def is_correct(self, index: int | None) -> bool:
        return index == self.correct_option

    def __str__(self) -> str:
        lines = [self.question]
        for i, option in enumerate(self.options, start=1):
            lines.append(f"{i}. {option}")
        return "\n".join(lines)


@dataclass
class Cheatsheet:
    text: str
    failed: bool = False
