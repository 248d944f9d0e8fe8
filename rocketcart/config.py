"""
Runtime configuration read from environment variables.

Values are resolved once at import time. Factories accept explicit
arguments that take precedence over these defaults.
"""

import os


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except ValueError:
        return default


# Inventory API (stock + product catalog)
INVENTORY_API_URL = os.environ.get("INVENTORY_API_URL", "http://localhost:3333")
INVENTORY_TIMEOUT = _env_float("INVENTORY_TIMEOUT", 10.0)

# Cart snapshot
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "@RocketShoes:cart")

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Telegram notifications
TELEGRAM_TOKEN = os.environ.get("TELEGRAM_TOKEN", "")
TELEGRAM_CHAT_ID = os.environ.get("TELEGRAM_CHAT_ID", "")

# Notifications
CART_LANGUAGE = os.environ.get("CART_LANGUAGE", "pt")
CART_NOTIFY_SUCCESS = _env_bool("CART_NOTIFY_SUCCESS")
CART_CURRENCY = os.environ.get("CART_CURRENCY", "BRL")


def redis_configured() -> bool:
    return bool(UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN)


def telegram_configured() -> bool:
    return bool(TELEGRAM_TOKEN and TELEGRAM_CHAT_ID)
