"""
Shared fixtures.

Every test runs with an empty config directory and without API keys from the
real environment, so nothing here can reach a live backend.
"""
import json

import pytest

ENV_VARS = ("OPENROUTER_API_KEY", "GEMINI_API_KEY", "ZAPIO_LLM_MODE", "ZAPIO_MODEL")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    monkeypatch.setenv("ZAPIO_CONFIG_DIR", str(config_dir))
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return config_dir


@pytest.fixture
def cfg():
    return {
        "llm_mode": "openrouter",
        "openrouter_api_key": "sk-test",
        "openrouter_model": "test/model",
        "max_chars": 15000,
        "request_timeout": 5,
    }


@pytest.fixture
def txt_document(tmp_path):
    path = tmp_path / "biology.txt"
    path.write_text(
        "Photosynthesis converts light energy into chemical energy.\n\n"
        "Mitochondria are the powerhouse of the cell.",
        encoding="utf-8",
    )
    return str(path)


@pytest.fixture
def quiz_reply():
    questions = [
        {
            "question": "What does photosynthesis produce?",
            "options": ["Glucose", "Salt", "Iron", "Helium"],
            "correctOption": 0,
        },
        {
            "question": "Which organelle makes ATP?",
            "options": ["Nucleus", "Mitochondria", "Ribosome", "Vacuole"],
            "correctOption": 1,
        },
    ]
    return "Here is your quiz:\n" + json.dumps(questions) + "\nGood luck!"


@pytest.fixture
def flashcard_reply():
    cards = [
        {"question": "What is photosynthesis?", "answer": "Turning light into chemical energy."},
        {"question": "What are mitochondria?", "answer": "The powerhouse of the cell."},
    ]
    return json.dumps(cards)
