from zapio.models import Flashcard


class FlashcardDeck:
    """Current card and side for a flashcard study session."""

    def __init__(self, cards: list[Flashcard]):
        if not cards:
            raise ValueError("A deck needs at least one card")
        self.cards = list(cards)
        self.index = 0
        self.showing_answer = False

    @property
    def current(self) -> Flashcard:
        return self.cards[self.index]

    @property
    def current_text(self) -> str:
        card = self.current
        return card.answer if self.showing_answer else card.question

    @property
    def progress_label(self) -> str:
        return f"{self.index + 1} / {len(self.cards)}"

    @property
    def has_next(self) -> bool:
        return self.index < len(self.cards) - 1

    @property
    def has_previous(self) -> bool:
        return self.index > 0

    @property
    def finished(self) -> bool:
        return not self.has_next and self.showing_answer

    def flip(self) -> str:
        self.showing_answer = not self.showing_answer
        return self.current_text

    def next(self) -> bool:
        if not self.has_next:
            return False
        self.index += 1
        self.showing_answer = False
        return True

    def previous(self) -> bool:
        if not self.has_previous:
            return False
        self.index -= 1
        self.showing_answer = False
        return True
