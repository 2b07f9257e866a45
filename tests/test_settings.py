import pytest

from lowstock_mailer import settings


@pytest.fixture
def valid_config(monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", "postgresql://example/museum")
    monkeypatch.setattr(settings, "MAIL_FROM_ADDRESS", "shop@example.com")
    monkeypatch.setattr(settings, "POLL_INTERVAL", 60)
    monkeypatch.setattr(settings, "MAIL_TRANSPORT", "smtp")


def test_valid_config_passes(valid_config):
    settings.validate_config()


def test_reports_every_problem_at_once(valid_config, monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", None)
    monkeypatch.setattr(settings, "MAIL_FROM_ADDRESS", None)
    monkeypatch.setattr(settings, "POLL_INTERVAL", 0)

    with pytest.raises(ValueError) as exc_info:
        settings.validate_config()

    text = str(exc_info.value)
    assert "DATABASE_URL is required" in text
    assert "MAIL_FROM_ADDRESS is required" in text
    assert "POLL_INTERVAL must be positive" in text


def test_unknown_transport_rejected(valid_config, monkeypatch):
    monkeypatch.setattr(settings, "MAIL_TRANSPORT", "fax")

    with pytest.raises(ValueError, match="MAIL_TRANSPORT must be one of smtp, mailgun"):
        settings.validate_config()


def test_mailgun_requires_credentials(valid_config, monkeypatch):
    monkeypatch.setattr(settings, "MAIL_TRANSPORT", "mailgun")
    monkeypatch.setattr(settings, "MAILGUN_API_KEY", None)
    monkeypatch.setattr(settings, "MAILGUN_DOMAIN", "mg.example.com")

    with pytest.raises(ValueError, match="MAILGUN_API_KEY is required"):
        settings.validate_config()
