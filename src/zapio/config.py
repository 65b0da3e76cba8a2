import json
import os

from dotenv import find_dotenv, load_dotenv
from loguru import logger

DEFAULT_CONFIG = {
    "llm_mode": "openrouter",   # "openrouter", "gemini" or "ollama"
    "openrouter_api_key": "",
    "openrouter_model": "google/gemini-2.0-flash-exp:free",
    "gemini_api_key": "",
    "gemini_model": "gemini-2.0-flash",
    "ollama_model": "llama3",
    "max_chars": 15000,
    "request_timeout": 90,
}

# Environment variables win over the config file when set.
ENV_OVERRIDES = {
    "OPENROUTER_API_KEY": "openrouter_api_key",
    "GEMINI_API_KEY": "gemini_api_key",
    "ZAPIO_LLM_MODE": "llm_mode",
}

MODEL_KEYS = {
    "openrouter": "openrouter_model",
    "gemini": "gemini_model",
    "ollama": "ollama_model",
}


def config_dir() -> str:
    return os.environ.get("ZAPIO_CONFIG_DIR") or os.path.join(os.path.expanduser("~"), ".zapio")


def config_path() -> str:
    return os.path.join(config_dir(), "config.json")


def load_config(use_env: bool = True) -> dict:
    """
    Load settings from ~/.zapio/config.json merged over the defaults.

    When use_env is true, a .env file in the working directory is read and
    API keys / mode found in the environment override the file.
    """
    cfg = DEFAULT_CONFIG.copy()
    path = config_path()
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                logger.warning("Ignoring unreadable config file {}: {}", path, e)
                data = {}
        if isinstance(data, dict):
            cfg.update(data)
        else:
            logger.warning("Ignoring config file {}: expected a JSON object", path)

    if use_env:
        load_dotenv(find_dotenv(usecwd=True))
        for env_name, key in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                cfg[key] = value
        model = os.environ.get("ZAPIO_MODEL")
        if model:
            cfg[MODEL_KEYS.get(cfg["llm_mode"], "openrouter_model")] = model

    return cfg


def save_config(cfg: dict):
    os.makedirs(config_dir(), exist_ok=True)
    with open(config_path(), "w", encoding="utf-8") as f:
        json.dump(cfg, f, indent=2)
    logger.debug("Saved config to {}", config_path())
