import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'spendwise.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Baseline used by the dashboard when the owner has no overall budget
    DEFAULT_BUDGET_AMOUNT = os.getenv("DEFAULT_BUDGET_AMOUNT", "5000")
    # Unknown categories raise instead of being labelled "Unknown"
    STRICT_CATEGORY_RESOLUTION = _env_flag("STRICT_CATEGORY_RESOLUTION", True)
    DEFAULT_TREND_MONTHS = int(os.getenv("DEFAULT_TREND_MONTHS", "6"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    DEFAULT_BUDGET_AMOUNT = "5000"
    STRICT_CATEGORY_RESOLUTION = True
    DEFAULT_TREND_MONTHS = 6
