import json

from zapio.config import DEFAULT_CONFIG, config_path, load_config, save_config


class TestConfig:

    def test_defaults_without_file(self):
        cfg = load_config()
        assert cfg == DEFAULT_CONFIG
        assert cfg["llm_mode"] == "openrouter"
        assert cfg["max_chars"] == 15000

    def test_save_and_load(self, isolated_config):
        cfg = load_config()
        cfg["openrouter_api_key"] = "sk-saved"
        save_config(cfg)

        assert (isolated_config / "config.json").exists()
        assert load_config()["openrouter_api_key"] == "sk-saved"

    def test_partial_file_is_merged_over_defaults(self, isolated_config):
        isolated_config.mkdir()
        (isolated_config / "config.json").write_text(json.dumps({"llm_mode": "ollama"}), encoding="utf-8")

        cfg = load_config()
        assert cfg["llm_mode"] == "ollama"
        assert cfg["ollama_model"] == "llama3"

    def test_unreadable_file_falls_back_to_defaults(self, isolated_config):
        isolated_config.mkdir()
        (isolated_config / "config.json").write_text("{not json", encoding="utf-8")
        assert load_config() == DEFAULT_CONFIG

    def test_non_object_file_falls_back_to_defaults(self, isolated_config):
        isolated_config.mkdir()
        (isolated_config / "config.json").write_text("[1, 2, 3]", encoding="utf-8")
        assert load_config() == DEFAULT_CONFIG

    def test_environment_overrides_file(self, monkeypatch):
        save_config({**DEFAULT_CONFIG, "openrouter_api_key": "from-file"})
        monkeypatch.setenv("OPENROUTER_API_KEY", "from-env")
        monkeypatch.setenv("ZAPIO_MODEL", "meta/llama")

        cfg = load_config()
        assert cfg["openrouter_api_key"] == "from-env"
        assert cfg["openrouter_model"] == "meta/llama"

    def test_use_env_false_ignores_environment(self, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "from-env")
        assert load_config(use_env=False)["openrouter_api_key"] == ""

    def test_dotenv_file_in_working_directory(self, tmp_path):
        (tmp_path / ".env").write_text("GEMINI_API_KEY=from-dotenv\nZAPIO_LLM_MODE=gemini\n", encoding="utf-8")

        cfg = load_config()
        assert cfg["llm_mode"] == "gemini"
        assert cfg["gemini_api_key"] == "from-dotenv"

    def test_config_path_follows_env(self, isolated_config):
        assert config_path() == str(isolated_config / "config.json")
