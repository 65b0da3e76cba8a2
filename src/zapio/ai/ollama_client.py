import json
import os
import shutil
import subprocess
import urllib.error
import urllib.request

from loguru import logger

from zapio.errors import LLMError

DEFAULT_MODEL = "llama3"
OLLAMA_URL = "http://127.0.0.1:11434"


def _find_ollama_cli() -> str | None:
    """Locate the Ollama CLI, falling back to typical Windows install paths."""
    path = shutil.which("ollama")
    if path:
        return path
    candidates = [
        os.path.expandvars(r"%LOCALAPPDATA%\Programs\Ollama\ollama.exe"),
        r"C:\Program Files\Ollama\ollama.exe",
    ]
    for c in candidates:
        if os.path.exists(c):
            return c
    return None


def ollama_models() -> list[str]:
    """Installed model names via the REST API, or an empty list if unreachable."""
    try:
        with urllib.request.urlopen(f"{OLLAMA_URL}/api/tags", timeout=2) as resp:
            data = json.loads(resp.read().decode("utf-8", "replace"))
    except (urllib.error.URLError, TimeoutError, json.JSONDecodeError):
        return []

    names = []
    for m in data.get("models", []):
        # Tags come back as "llama3:latest"
        name = m.get("name") or m.get("model")
        if name:
            names.append(str(name).split(":")[0])
    return names


def _complete_cli(cli: str, prompt: str, model: str, timeout: float) -> str:
    try:
        result = subprocess.run(
            [cli, "run", model],
            input=prompt,
            text=True,
            encoding="utf-8",
            errors="replace",
            capture_output=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise LLMError("Ollama model timed out") from e

    if result.returncode != 0:
        raise LLMError(result.stderr.strip() or "Ollama failed")
    return result.stdout.strip()


def _complete_rest(prompt: str, model: str, timeout: float) -> str:
    models = ollama_models()
    if models and model not in models:
        logger.warning("Ollama model {} not installed, using {}", model, models[0])
        model = models[0]

    payload = json.dumps({"model": model, "prompt": prompt, "stream": False}).encode("utf-8")
    req = urllib.request.Request(
        f"{OLLAMA_URL}/api/generate",
        data=payload,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            data = json.loads(resp.read().decode("utf-8", "replace"))
    except (urllib.error.URLError, TimeoutError, json.JSONDecodeError) as e:
        raise LLMError(f"Ollama REST call failed: {e}") from e

    if "error" in data:
        raise LLMError(f"Ollama error: {data['error']}")
    return data.get("response", "").strip()


def ollama_complete(prompt: str, model: str = DEFAULT_MODEL, timeout: float = 90) -> str:
    """Run the prompt through Ollama, using the CLI if available, otherwise the REST API."""
    cli = _find_ollama_cli()
    if cli:
        output = _complete_cli(cli, prompt, model, timeout)
    else:
        output = _complete_rest(prompt, model, timeout)

    if not output:
        raise LLMError("Ollama returned empty response")
    return output
