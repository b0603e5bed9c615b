import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application settings."""

    # ログ設定
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # LINE Messaging API
    LINE_CHANNEL_SECRET = os.environ.get("LINE_CHANNEL_SECRET", "")
    LINE_CHANNEL_ACCESS_TOKEN = os.environ.get("LINE_CHANNEL_ACCESS_TOKEN", "")
    LINE_REPLY_TIMEOUT = 10

    # fortune
    FORTUNE_ENABLED = _env_flag("FORTUNE_ENABLED")
    FORTUNE_COMMAND = os.environ.get("FORTUNE_COMMAND", "fortune")
    FORTUNE_TIMEOUT = float(os.environ.get("FORTUNE_TIMEOUT", "5"))

    # cowsay
    DEFAULT_WRAP = int(os.environ.get("DEFAULT_WRAP", "40"))
    STATUS_HINT = "cowsay -h"

    # サーバー設定
    API_HOST = "0.0.0.0"
    API_PORT = int(os.environ.get("PORT", "8080"))


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    DEBUG = False
    LOG_LEVEL = "WARNING"


class TestingConfig(Config):
    TESTING = True
    LOG_LEVEL = "DEBUG"
    FORTUNE_ENABLED = False


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}


def get_config() -> Config:
    """Pick the settings class for FLASK_ENV."""
    env = os.environ.get("FLASK_ENV", "default")
    return config.get(env, config["default"])
