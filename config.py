import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./brick.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "127.0.0.1")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    AUTH_DISABLED = bool(data.get("AUTH_DISABLED", False))
    API_KEY = data.get("API_KEY", "dev-brick-key-change-me")
    # Wall-clock zone used to evaluate recurring windows
    TIMEZONE = data.get("TIMEZONE", "UTC")
    OVERRIDE_COOLDOWN_MINUTES = int(data.get("OVERRIDE_COOLDOWN_MINUTES", 30))
    OVERRIDE_UNLOCK_MINUTES = int(data.get("OVERRIDE_UNLOCK_MINUTES", 5))
    TICK_ENABLED = bool(data.get("TICK_ENABLED", True))
    TICK_INTERVAL_SECONDS = float(data.get("TICK_INTERVAL_SECONDS", 30))
    TICK_LOCK_TIMEOUT_SECONDS = float(data.get("TICK_LOCK_TIMEOUT_SECONDS", 2))
