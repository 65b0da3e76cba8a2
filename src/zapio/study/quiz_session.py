from dataclasses import dataclass

from zapio.models import QuizQuestion

# (threshold, message), highest first
MESSAGES = [
    (0.9, "Excellent! You've mastered this material and are ready to apply your knowledge!"),
    (0.7, "Great job! You have a solid understanding of the key concepts!"),
    (0.5, "Good effort! With a bit more study, you'll improve your understanding!"),
    (0.3, "You're making progress! Review the material again to strengthen your knowledge!"),
    (0.0, "Keep practicing! Everyone starts somewhere, and with dedication you'll improve!"),
]


@dataclass(frozen=True)
class QuizResult:
    score: int
    total: int

    @property
    def percentage(self) -> float:
        if not self.total:
            return 0.0
        return self.score / self.total

    @property
    def percent(self) -> int:
        return round(self.percentage * 100)

    @property
    def band(self) -> str:
        """'success', 'warning' or 'error', used to colour the score."""
        if self.percentage >= 0.7:
            return "success"
        if self.percentage >= 0.4:
            return "warning"
        return "error"

    @property
    def message(self) -> str:
        for threshold, message in MESSAGES:
            if self.percentage >= threshold:
                return message
        return MESSAGES[-1][1]

    def __str__(self) -> str:
        return f"{self.score}/{self.total} ({self.percent}%)"


class QuizSession:
    """Walks through a list of questions and records one answer per question."""

    def __init__(self, questions: list[QuizQuestion]):
        if not questions:
            raise ValueError("A quiz needs at least one question")
        self.questions = list(questions)
        self.answers: list[int | None] = [None] * len(self.questions)
        self.index = 0

    @property
    def current(self) -> QuizQuestion:
        return self.questions[self.index]

    @property
    def current_answer(self) -> int | None:
        return self.answers[self.index]

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index == len(self.questions) - 1

    @property
    def progress_label(self) -> str:
        return f"Question {self.index + 1}/{len(self.questions)}"

    def select(self, option: int):
        if not 0 <= option < len(self.current.options):
            raise IndexError(f"Option {option} out of range")
        self.answers[self.index] = option

    def next(self) -> bool:
        if self.is_last:
            return False
        self.index += 1
        return True

    def back(self) -> bool:
        if self.is_first:
            return False
        self.index -= 1
        return True

    def score(self) -> int:
        return sum(
            1 for question, answer in zip(self.questions, self.answers)
            if question.is_correct(answer)
        )

    def finish(self) -> QuizResult:
        return QuizResult(self.score(), len(self.questions))
