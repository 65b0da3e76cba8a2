import os
import re

import genanki
from loguru import logger

from zapio.models import Flashcard

MODEL_ID = 1607392319

CARD_MODEL = genanki.Model(
    MODEL_ID,
    "Zapio Flashcard",
    fields=[
        {"name": "Front"},
        {"name": "Back"},
    ],
    templates=[
        {
            "name": "Card 1",
            "qfmt": "{{Front}}",
            "afmt": "{{FrontSide}}<hr id=answer>{{Back}}",
        },
    ],
)


def deck_id_for(deck_name: str) -> int:
    """Stable id so re-exporting the same deck updates it in Anki instead of duplicating."""
    return int(deck_name.encode().hex()[:16], 16) % (2**31)


def export_anki(flashcards: list[Flashcard], deck_name: str = "Zapio", output_dir: str = ".") -> str:
    """
    Write flashcards to an Anki .apkg package.

    Args:
        flashcards: Cards to export
        deck_name: Name for the Anki deck, also used for the file name
        output_dir: Directory to save the .apkg file

    Returns:
        Path to the created .apkg file

    Raises:
        ValueError: If there are no flashcards
    """
    if not flashcards:
        raise ValueError("No flashcards to export")

    deck = genanki.Deck(deck_id_for(deck_name), deck_name)
    for card in flashcards:
        deck.add_note(genanki.Note(
            model=CARD_MODEL,
            fields=[card.question, card.answer],
            tags=["zapio"],
        ))

    os.makedirs(output_dir, exist_ok=True)
    file_name = re.sub(r"[^a-zA-Z0-9_-]+", "_", deck_name).strip("_") or "zapio"
    output_file = os.path.join(output_dir, f"{file_name}.apkg")
    genanki.Package(deck).write_to_file(output_file)

    logger.info("Exported {} flashcards to {}", len(flashcards), output_file)
    return output_file
