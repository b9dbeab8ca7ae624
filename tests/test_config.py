"""Tests for application configuration loading."""

from pathlib import Path

from learnme.config import (
    clear_config_cache,
    get_provider_config,
    load_app_config,
)


class TestDefaults:
    """Without a config file the built-in defaults apply."""

    def test_default_values(self):
        config = load_app_config()
        assert config.db_path == Path("db/learnme.db")
        assert config.chat.provider == "openai"
        assert config.chat.history_limit == 10
        assert config.certificates.completion_threshold == 80
        assert config.certificates.issuer == "LearnMe Platform"

    def test_providers(self):
        openai = get_provider_config("openai")
        assert openai is not None
        assert openai.api_key_env == "OPENAI_API_KEY"
        assert openai.requires_api_key is True
        assert get_provider_config("lmstudio").requires_api_key is False
        assert get_provider_config("missing") is None

    def test_cached(self):
        assert load_app_config() is load_app_config()


class TestConfigFile:
    """Tests for config/learnme.yaml and LEARNME_CONFIG."""

    def test_project_config_file(self, tmp_path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "learnme.yaml").write_text(
            "chat:\n  provider: lmstudio\n  model: qwen\npaths:\n  db_path: data/app.db\n"
        )
        clear_config_cache()

        config = load_app_config()
        assert config.chat.provider == "lmstudio"
        assert config.chat.model == "qwen"
        assert config.db_path == Path("data/app.db")
        # Sections left out keep their defaults
        assert config.certificates.completion_threshold == 80
        assert "openai" in config.providers

    def test_env_path(self, tmp_path, monkeypatch):
        custom = tmp_path / "other.yaml"
        custom.write_text("certificates:\n  issuer: Acme Academy\n")
        monkeypatch.setenv("LEARNME_CONFIG", str(custom))
        clear_config_cache()

        assert load_app_config().certificates.issuer == "Acme Academy"

    def test_empty_file(self, tmp_path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "learnme.yaml").write_text("")
        clear_config_cache()

        assert load_app_config().chat.temperature == 0.7

    def test_force_reload(self, tmp_path):
        first = load_app_config()
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "learnme.yaml").write_text("chat:\n  temperature: 0.2\n")

        assert load_app_config() is first
        assert load_app_config(force_reload=True).chat.temperature == 0.2

    def test_base_url_env_override(self, monkeypatch):
        monkeypatch.setenv("LEARNME_BASE_URL", "https://learnme.dev")
        clear_config_cache()
        assert load_app_config().certificates.base_url == "https://learnme.dev"
