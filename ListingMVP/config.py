from datetime import timedelta
from dotenv import load_dotenv
import os

load_dotenv()


def _env_flag(name, default="false"):
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


# ===================================================
# ⚙️ MAIN CONFIG CLASS
# ===================================================

class Config:
    # --------------------------------------------------
    # 🔐 CORE APP SETTINGS
    # --------------------------------------------------
    SECRET_KEY = os.getenv("SECRET_KEY", "dev_only_change_me")

    DEBUG = _env_flag("FLASK_DEBUG")
    TESTING = False

    PERMANENT_SESSION_LIFETIME = timedelta(days=1)
    REMEMBER_COOKIE_DURATION = timedelta(days=1)

    SESSION_COOKIE_SECURE = _env_flag("SESSION_COOKIE_SECURE", "true")
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"

    REMEMBER_COOKIE_SECURE = SESSION_COOKIE_SECURE
    REMEMBER_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_SAMESITE = "Lax"

    SESSION_PROTECTION = "strong"

    # --------------------------------------------------
    # 🌍 CORS
    # --------------------------------------------------
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
    CORS_SUPPORTS_CREDENTIALS = True

    # --------------------------------------------------
    # 🤖 AI SETTINGS
    # --------------------------------------------------
    AI_PROVIDER = os.environ.get("AI_PROVIDER", "openai").strip().lower()
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "").strip()
    AI_MODEL = os.environ.get("AI_MODEL", "gpt-4o")
    AI_TIMEOUT = int(os.environ.get("AI_TIMEOUT", 30))
    AI_MAX_TOKENS = int(os.environ.get("AI_MAX_TOKENS", 1000))
    AI_TEMPERATURE = float(os.environ.get("AI_TEMPERATURE", 0.7))

    # =========================================================
    # ☁️ AWS BEDROCK (used when AI_PROVIDER=bedrock)
    # =========================================================
    BEDROCK_MODEL_ID = os.environ.get("BEDROCK_MODEL_ID", "anthropic.claude-v2")
    AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")
    AWS_ACCESS_KEY_ID = os.environ.get("AWS_ACCESS_KEY_ID", "").strip()
    AWS_SECRET_ACCESS_KEY = os.environ.get("AWS_SECRET_ACCESS_KEY", "").strip()

    # --------------------------------------------------
    # 📧 MAIL SETTINGS
    # --------------------------------------------------
    MAIL_SERVER = os.environ.get("MAIL_SERVER", "smtp.gmail.com")
    MAIL_PORT = int(os.environ.get("MAIL_PORT", 587))
    MAIL_USE_TLS = True
    MAIL_USE_SSL = False
    MAIL_USERNAME = os.environ.get("MAIL_USERNAME", "")
    MAIL_PASSWORD = os.environ.get("MAIL_PASSWORD", "")
    MAIL_DEFAULT_SENDER = os.environ.get("MAIL_DEFAULT_SENDER", MAIL_USERNAME or "noreply@listingmvp.app")

    # --------------------------------------------------
    # 📄 PDF EXPORT
    # --------------------------------------------------
    LOGO_URL = os.environ.get("LOGO_URL", "")
    PDF_IMAGE_TIMEOUT = int(os.environ.get("PDF_IMAGE_TIMEOUT", 10))
    PDF_IMAGE_MAX_BYTES = int(os.environ.get("PDF_IMAGE_MAX_BYTES", 5 * 1024 * 1024))

    # --------------------------------------------------
    # 🏢 BRAND INFO
    # --------------------------------------------------
    COMPANY_NAME = os.environ.get("COMPANY_NAME", "ListingMVP Realty")
    COMPANY_EMAIL = os.environ.get("COMPANY_EMAIL", "hello@listingmvp.app")

    # --------------------------------------------------
    # 📝 LOGGING
    # --------------------------------------------------
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "standard")

    # --------------------------------------------------
    # 🚀 FEATURE TOGGLES
    # --------------------------------------------------
    SEED_DEMO_DATA = _env_flag("SEED_DEMO_DATA", "true")


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "testing"
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False
    AI_PROVIDER = "openai"
    OPENAI_API_KEY = ""
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = "noreply@listingmvp.test"
    COMPANY_EMAIL = "inbox@listingmvp.test"
    SEED_DEMO_DATA = True
