"""Configuration for the low-inventory alert mailer."""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Base paths
BASE_DIR = Path(__file__).resolve().parent.parent
LOGS_DIR = Path(os.getenv("LOGS_DIR", str(BASE_DIR / "logs")))
LOGS_DIR.mkdir(parents=True, exist_ok=True)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = LOGS_DIR / os.getenv("LOG_FILE", "mailer.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024)))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "5"))
BETTERSTACK_SOURCE_TOKEN = os.getenv("BETTERSTACK_SOURCE_TOKEN")
BETTERSTACK_INGEST_HOST = os.getenv("BETTERSTACK_INGEST_HOST")

# Database connection
DATABASE_URL = os.getenv("DATABASE_URL")

# Worker settings
POLL_INTERVAL = int(os.getenv("POLL_INTERVAL", "60"))  # seconds between drain cycles

# Mail
MAIL_TRANSPORT = os.getenv("MAIL_TRANSPORT", "smtp").lower()  # "smtp" or "mailgun"
MAIL_FROM_NAME = os.getenv("MAIL_FROM_NAME", "Museum Gift Shop")
MAIL_FROM_ADDRESS = os.getenv("MAIL_FROM_ADDRESS")

SMTP_HOST = os.getenv("SMTP_HOST", "localhost")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USERNAME = os.getenv("SMTP_USERNAME")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
SMTP_USE_SSL = os.getenv("SMTP_USE_SSL", "false").lower() in {"1", "true", "yes"}
SMTP_TIMEOUT = int(os.getenv("SMTP_TIMEOUT", "30"))

MAILGUN_API_KEY = os.getenv("MAILGUN_API_KEY")
MAILGUN_DOMAIN = os.getenv("MAILGUN_DOMAIN")
MAILGUN_BASE_URL = os.getenv("MAILGUN_BASE_URL")

MAIL_TRANSPORTS = ("smtp", "mailgun")


def validate_config():
    """Validate required configuration."""
    errors = []

    if not DATABASE_URL:
        errors.append("DATABASE_URL is required")

    if not MAIL_FROM_ADDRESS:
        errors.append("MAIL_FROM_ADDRESS is required")

    if POLL_INTERVAL <= 0:
        errors.append(f"POLL_INTERVAL must be positive: {POLL_INTERVAL}")

    if MAIL_TRANSPORT not in MAIL_TRANSPORTS:
        errors.append(f"MAIL_TRANSPORT must be one of {', '.join(MAIL_TRANSPORTS)}: {MAIL_TRANSPORT}")
    elif MAIL_TRANSPORT == "mailgun":
        if not MAILGUN_API_KEY:
            errors.append("MAILGUN_API_KEY is required for the mailgun transport")
        if not MAILGUN_DOMAIN:
            errors.append("MAILGUN_DOMAIN is required for the mailgun transport")

    if errors:
        raise ValueError("Config errors:\n  " + "\n  ".join(errors))
