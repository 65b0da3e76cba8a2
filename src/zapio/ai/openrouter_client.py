import json
import time
import urllib.error
import urllib.request

from loguru import logger

from zapio.errors import LLMError

API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.0-flash-exp:free"
REFERER = "http://localhost:8080"


def build_request_body(prompt: str, model: str = DEFAULT_MODEL) -> dict:
    """A chat-completion body with the prompt as the single user message."""
    return {
        "model": model,
        "messages": [
            {
                "role": "user",
                "content": [{"type": "text", "text": prompt}],
            }
        ],
    }


def extract_message_content(data: dict) -> str:
    """Pull choices[0].message.content out of a chat-completion response."""
    if not isinstance(data, dict):
        raise LLMError(f"Unexpected response from OpenRouter: {data!r}")

    if "error" in data:
        err = data["error"]
        message = err.get("message", err) if isinstance(err, dict) else err
        raise LLMError(f"OpenRouter error: {message}")

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise LLMError(f"Unexpected response shape from OpenRouter: {e!r}") from e

    if not isinstance(content, str) or not content.strip():
        raise LLMError("OpenRouter returned empty response")
    return content


def openrouter_complete(
    prompt: str,
    api_key: str,
    model: str = DEFAULT_MODEL,
    title: str = "Zapio",
    timeout: float = 90,
    max_retries: int = 3,
) -> str:
    if not api_key:
        raise LLMError("OpenRouter API key not set")

    payload = json.dumps(build_request_body(prompt, model)).encode("utf-8")
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
        "HTTP-Referer": REFERER,
        "X-Title": title,
    }

    for attempt in range(max_retries):
        req = urllib.request.Request(API_URL, data=payload, headers=headers, method="POST")
        logger.debug("POST {} model={} ({:,} prompt chars)", API_URL, model, len(prompt))
        try:
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                body = resp.read().decode("utf-8", "replace")
        except urllib.error.HTTPError as e:
            # Rate limited: back off 1s, 2s, ...
            if e.code == 429 and attempt < max_retries - 1:
                wait_time = 2 ** attempt
                logger.warning(
                    "Rate limit hit. Retrying in {}s... (attempt {}/{})",
                    wait_time, attempt + 1, max_retries,
                )
                time.sleep(wait_time)
                continue
            raise LLMError(f"OpenRouter request failed with HTTP {e.code}: {e.reason}") from e
        except (urllib.error.URLError, TimeoutError) as e:
            raise LLMError(f"OpenRouter request failed: {e}") from e

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise LLMError("OpenRouter returned a non-JSON body") from e

        return extract_message_content(data).strip()

    raise LLMError("OpenRouter rate limit exceeded")
