from loguru import logger

from zapio.ai.gemini_client import gemini_complete
from zapio.ai.ollama_client import ollama_complete
from zapio.ai.openrouter_client import openrouter_complete
from zapio.config import DEFAULT_CONFIG
from zapio.errors import ConfigError

MODES = ("openrouter", "gemini", "ollama")

API_KEY_SETTINGS = {
    "openrouter": ("openrouter_api_key", "OPENROUTER_API_KEY"),
    "gemini": ("gemini_api_key", "GEMINI_API_KEY"),
}


def check_config(cfg: dict) -> str:
    """
    Validate the backend settings and return the selected mode.

    Raises ConfigError when the selected backend needs a key that is not set.
    """
    mode = cfg.get("llm_mode", DEFAULT_CONFIG["llm_mode"])
    if mode not in MODES:
        raise ValueError(f"Invalid LLM mode: {mode}")

    if mode in API_KEY_SETTINGS:
        key, env_name = API_KEY_SETTINGS[mode]
        if not cfg.get(key):
            raise ConfigError(
                f"{env_name} not found. Add it to a .env file or set it in Settings."
            )
    return mode


def complete(prompt: str, cfg: dict, title: str = "Zapio") -> str:
    """Send a single prompt to the configured backend and return its reply text."""
    mode = check_config(cfg)
    timeout = cfg.get("request_timeout", DEFAULT_CONFIG["request_timeout"])
    logger.info("Calling {} backend", mode)

    if mode == "openrouter":
        return openrouter_complete(
            prompt,
            api_key=cfg["openrouter_api_key"],
            model=cfg.get("openrouter_model", DEFAULT_CONFIG["openrouter_model"]),
            title=title,
            timeout=timeout,
        )

    if mode == "gemini":
        return gemini_complete(
            prompt,
            api_key=cfg["gemini_api_key"],
            model=cfg.get("gemini_model", DEFAULT_CONFIG["gemini_model"]),
        )

    return ollama_complete(
        prompt,
        model=cfg.get("ollama_model", DEFAULT_CONFIG["ollama_model"]),
        timeout=timeout,
    )
