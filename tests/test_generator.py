"""
Pipeline tests: document -> prompt -> (patched) backend -> records.
"""
from unittest.mock import MagicMock, PropertyMock, patch

import pytest

from zapio.ai import generator
from zapio.ai.generator import (
    CHEATSHEET_ERROR,
    generate,
    generate_cheatsheet,
    generate_flashcards,
    generate_quiz,
)
from zapio.errors import ConfigError, LLMError
from zapio.models import Cheatsheet, Flashcard, QuizQuestion


class TestGenerateQuiz:

    def test_builds_questions_from_reply(self, txt_document, cfg, quiz_reply):
        with patch.object(generator, "complete", return_value=quiz_reply) as mock_complete:
            questions = generate_quiz(txt_document, cfg)

        assert len(questions) == 2
        assert all(isinstance(q, QuizQuestion) for q in questions)
        prompt = mock_complete.call_args[0][0]
        assert "create a quiz with 10 single-choice questions" in prompt
        assert prompt.endswith("Mitochondria are the powerhouse of the cell.")
        assert mock_complete.call_args.kwargs["title"] == "Zapio Quiz Generator"

    def test_backend_failure_gives_empty_list(self, txt_document, cfg):
        with patch.object(generator, "complete", side_effect=LLMError("boom")):
            assert generate_quiz(txt_document, cfg) == []

    def test_missing_file_gives_empty_list(self, tmp_path, cfg):
        with patch.object(generator, "complete") as mock_complete:
            assert generate_quiz(str(tmp_path / "gone.pdf"), cfg) == []
        mock_complete.assert_not_called()

    def test_unsupported_file_gives_empty_list(self, tmp_path, cfg):
        path = tmp_path / "image.png"
        path.write_bytes(b"\x89PNG")
        assert generate_quiz(str(path), cfg) == []

    @pytest.mark.parametrize("error", [RuntimeError("worker died"), ValueError("bad state"), KeyError("choices")])
    def test_unexpected_backend_error_gives_empty_list(self, txt_document, cfg, error):
        with patch.object(generator, "complete", side_effect=error):
            assert generate_quiz(txt_document, cfg) == []

    def test_parser_error_gives_empty_list(self, txt_document, cfg, quiz_reply):
        with patch.object(generator, "complete", return_value=quiz_reply), \
                patch.object(generator, "parse_quiz_questions", side_effect=ValueError("bad index")):
            assert generate_quiz(txt_document, cfg) == []

    @pytest.mark.parametrize("body", [b"null", b"42", b"\"x\"", b"[]"])
    @patch("zapio.ai.openrouter_client.urllib.request.urlopen")
    def test_non_object_openrouter_body_gives_empty_list(self, mock_urlopen, body, txt_document, cfg):
        resp = MagicMock()
        resp.read.return_value = body
        resp.__enter__.return_value = resp
        mock_urlopen.return_value = resp

        assert generate_quiz(txt_document, cfg) == []

    @patch("zapio.ai.gemini_client.genai")
    def test_blocked_gemini_reply_gives_empty_list(self, mock_genai, txt_document):
        type(mock_genai.GenerativeModel.return_value.generate_content.return_value).text = PropertyMock(
            side_effect=ValueError("response has no parts")
        )
        gemini_cfg = {"llm_mode": "gemini", "gemini_api_key": "g-key", "gemini_model": "gemini-x"}

        assert generate_quiz(txt_document, gemini_cfg) == []

    @patch("zapio.ai.generator.load_document", side_effect=KeyboardInterrupt)
    def test_interrupt_is_not_swallowed(self, mock_load, txt_document, cfg):
        with pytest.raises(KeyboardInterrupt):
            generate_quiz(txt_document, cfg)

    def test_missing_key_is_raised(self, txt_document, cfg):
        cfg["openrouter_api_key"] = ""
        with pytest.raises(ConfigError):
            generate_quiz(txt_document, cfg)

    def test_document_is_truncated_before_prompting(self, tmp_path, cfg, quiz_reply):
        path = tmp_path / "long.txt"
        path.write_text("x" * 20000 + "TAIL", encoding="utf-8")
        with patch.object(generator, "complete", return_value=quiz_reply) as mock_complete:
            generate_quiz(str(path), cfg)

        prompt = mock_complete.call_args[0][0]
        assert "TAIL" not in prompt
        assert prompt.endswith("x" * 15000)


class TestGenerateFlashcards:

    def test_builds_ten_cards(self, txt_document, cfg, flashcard_reply):
        with patch.object(generator, "complete", return_value=flashcard_reply) as mock_complete:
            cards = generate_flashcards(txt_document, cfg)

        assert len(cards) == 10
        assert cards[0] == Flashcard("What is photosynthesis?", "Turning light into chemical energy.")
        assert "create exactly 10 flashcards" in mock_complete.call_args[0][0]

    def test_garbage_reply_gives_placeholders(self, txt_document, cfg):
        with patch.object(generator, "complete", return_value="no idea"):
            cards = generate_flashcards(txt_document, cfg)
        assert cards[0].question == "Key concept 1"

    def test_backend_failure_gives_empty_list(self, txt_document, cfg):
        with patch.object(generator, "complete", side_effect=LLMError("timeout")):
            assert generate_flashcards(txt_document, cfg) == []

    def test_unexpected_error_gives_empty_list(self, txt_document, cfg):
        with patch.object(generator, "complete", side_effect=RuntimeError("worker died")):
            assert generate_flashcards(txt_document, cfg) == []


class TestGenerateCheatsheet:

    def test_plain_text_reply(self, txt_document, cfg):
        with patch.object(generator, "complete", return_value="```\nCELLS\n1. Mitochondria\n```"):
            sheet = generate_cheatsheet(txt_document, cfg)
        assert sheet == Cheatsheet("CELLS\n1. Mitochondria")

    def test_failure_gives_error_sheet(self, txt_document, cfg):
        with patch.object(generator, "complete", side_effect=LLMError("down")):
            sheet = generate_cheatsheet(txt_document, cfg)
        assert sheet.failed
        assert sheet.text == CHEATSHEET_ERROR

    def test_unexpected_error_gives_error_sheet(self, txt_document, cfg):
        with patch.object(generator, "complete", side_effect=ValueError("bad state")):
            sheet = generate_cheatsheet(txt_document, cfg)
        assert sheet == Cheatsheet(CHEATSHEET_ERROR, failed=True)


class TestDispatch:

    @pytest.mark.parametrize("kind, expected_type", [
        ("quiz", list),
        ("flashcards", list),
        ("cheatsheet", Cheatsheet),
    ])
    def test_generate_by_kind(self, kind, expected_type, txt_document, cfg, quiz_reply):
        with patch.object(generator, "complete", return_value=quiz_reply):
            assert isinstance(generate(kind, txt_document, cfg), expected_type)

    def test_unknown_kind(self, txt_document, cfg):
        with pytest.raises(ValueError):
            generate("mindmap", txt_document, cfg)

    def test_uses_saved_config_when_none_given(self, txt_document, monkeypatch, quiz_reply):
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-env")
        with patch.object(generator, "complete", return_value=quiz_reply) as mock_complete:
            generate_quiz(txt_document)
        assert mock_complete.call_args[0][1]["openrouter_api_key"] == "sk-env"
