"""
Tests for configuration loading.
"""
import pytest

from translator_bot.config import ConfigError, load_settings

BASE_ENV = {"DISCORD_BOT_TOKEN": "token", "DEEPL_API_KEY": "key"}


class TestRequiredSecrets:
    def test_missing_secrets_are_all_reported(self):
        with pytest.raises(ConfigError) as exc:
            load_settings({})
        assert "DISCORD_BOT_TOKEN" in str(exc.value)
        assert "DEEPL_API_KEY" in str(exc.value)

    def test_empty_secret_counts_as_missing(self):
        with pytest.raises(ConfigError, match="DEEPL_API_KEY"):
            load_settings({"DISCORD_BOT_TOKEN": "token", "DEEPL_API_KEY": ""})


class TestDefaults:
    def test_defaults(self):
        settings = load_settings(dict(BASE_ENV))
        assert settings.discord_token == "token"
        assert settings.deepl_api_key == "key"
        assert settings.prefix == "!translate"
        assert settings.cache_ttl == 300
        assert settings.sweep_interval == 60
        assert settings.translate_timeout == 15
        assert settings.log_level == "INFO"
        assert settings.support_server_url is None

    def test_free_api_inferred_from_key(self):
        assert load_settings(dict(BASE_ENV)).deepl_free_api is False
        assert load_settings({**BASE_ENV, "DEEPL_API_KEY": "abc:fx"}).deepl_free_api is True

    def test_free_api_override(self):
        env = {**BASE_ENV, "DEEPL_API_KEY": "abc:fx", "DEEPL_FREE_API": "false"}
        assert load_settings(env).deepl_free_api is False


class TestOverrides:
    def test_integer_overrides(self):
        env = {**BASE_ENV, "CACHE_TTL_SECONDS": "120", "CACHE_SWEEP_SECONDS": "10", "TRANSLATE_PREFIX": "!tr"}
        settings = load_settings(env)
        assert settings.cache_ttl == 120
        assert settings.sweep_interval == 10
        assert settings.prefix == "!tr"

    @pytest.mark.parametrize("value", ["abc", "0", "-5"])
    def test_bad_integer_is_rejected(self, value):
        with pytest.raises(ConfigError, match="CACHE_TTL_SECONDS"):
            load_settings({**BASE_ENV, "CACHE_TTL_SECONDS": value})

    def test_log_level(self):
        assert load_settings({**BASE_ENV, "LOG_LEVEL": "debug"}).log_level == "DEBUG"
        with pytest.raises(ConfigError, match="LOG_LEVEL"):
            load_settings({**BASE_ENV, "LOG_LEVEL": "chatty"})
