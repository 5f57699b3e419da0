import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

REQUIRED_VARS = ("DISCORD_BOT_TOKEN", "DEEPL_API_KEY")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when the process environment cannot produce usable settings"""


@dataclass(frozen=True)
class Settings:
    discord_token: str
    deepl_api_key: str
    deepl_free_api: bool = True
    prefix: str = "!translate"
    cache_ttl: int = 300
    sweep_interval: int = 60
    presence_interval: int = 60
    translate_timeout: int = 15
    log_level: str = "INFO"
    support_server_url: Optional[str] = None
    support_contact: Optional[str] = None


def _read_int(env, name, default):
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def _read_bool(env, name, default):
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_settings(env=None, dotenv: bool = True) -> Settings:
    """Build settings from the environment (and a .env file when present)

    Missing secrets are reported together so a single restart fixes them all.
    """
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    missing = [name for name in REQUIRED_VARS if not env.get(name)]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    log_level = (env.get("LOG_LEVEL") or "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    api_key = env["DEEPL_API_KEY"]
    # DeepL free-tier keys end with ":fx"
    free_api = _read_bool(env, "DEEPL_FREE_API", api_key.endswith(":fx"))

    return Settings(
        discord_token=env["DISCORD_BOT_TOKEN"],
        deepl_api_key=api_key,
        deepl_free_api=free_api,
        prefix=(env.get("TRANSLATE_PREFIX") or "!translate").strip(),
        cache_ttl=_read_int(env, "CACHE_TTL_SECONDS", 300),
        sweep_interval=_read_int(env, "CACHE_SWEEP_SECONDS", 60),
        presence_interval=_read_int(env, "PRESENCE_INTERVAL_SECONDS", 60),
        translate_timeout=_read_int(env, "TRANSLATE_TIMEOUT_SECONDS", 15),
        log_level=log_level,
        support_server_url=env.get("SUPPORT_SERVER_URL") or None,
        support_contact=env.get("SUPPORT_CONTACT") or None,
    )
