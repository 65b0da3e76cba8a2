import time

import google.generativeai as genai
from loguru import logger

from zapio.errors import LLMError

DEFAULT_MODEL = "gemini-2.0-flash"


def _is_rate_limited(error: Exception) -> bool:
    error_msg = str(error)
    return "429" in error_msg or "quota" in error_msg.lower()


def gemini_complete(prompt: str, api_key: str, model: str = DEFAULT_MODEL, max_retries: int = 3) -> str:
    if not api_key:
        raise LLMError("Gemini API key not set")

    genai.configure(api_key=api_key)
    client = genai.GenerativeModel(model)

    for attempt in range(max_retries):
        try:
            response = client.generate_content(prompt)
            text = response.text if response else ""
        except Exception as e:  # api_core errors, or ValueError from .text on a blocked reply
            if _is_rate_limited(e) and attempt < max_retries - 1:
                wait_time = 2 ** attempt
                logger.warning(
                    "Rate limit hit. Retrying in {}s... (attempt {}/{})",
                    wait_time, attempt + 1, max_retries,
                )
                time.sleep(wait_time)
                continue
            if _is_rate_limited(e):
                raise LLMError(
                    "Gemini API quota exceeded. Wait and try again later, "
                    "or switch backend in Settings."
                ) from e
            raise LLMError(f"Gemini request failed: {e}") from e

        if not text:
            raise LLMError("Gemini returned empty response")
        return text.strip()

    raise LLMError("Gemini rate limit exceeded")
