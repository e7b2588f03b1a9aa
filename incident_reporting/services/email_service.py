"""Lightweight SMTP/Mailgun helper for operator notifications."""
from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

import requests

from ..config import get_settings, is_placeholder

logger = logging.getLogger(__name__)


class EmailDeliveryError(RuntimeError):
    """Raised when the mail transport fails."""


def _resolve_email_password() -> str:
    password = get_settings().email_password
    if is_placeholder(password):
        raise EmailDeliveryError("EMAIL_PASSWORD is required when EMAIL_USERNAME is set")
    return password.strip()


def _resolve_mailgun_api_key() -> str:
    api_key = get_settings().mailgun_api_key
    if is_placeholder(api_key):
        raise EmailDeliveryError("MAILGUN_API_KEY is not configured")
    return api_key.strip()


def _smtp_enabled() -> bool:
    settings = get_settings()
    return bool(settings.email_host and settings.email_from_address)


def _mailgun_enabled() -> bool:
    settings = get_settings()
    if is_placeholder(settings.mailgun_api_key):
        return False
    return bool(settings.mailgun_domain and settings.email_from_address)


def _build_message(to_address: str, subject: str, body: str, html_body: str | None) -> EmailMessage:
    message = EmailMessage()
    message["Subject"] = subject
    message["From"] = str(get_settings().email_from_address)
    message["To"] = to_address
    message.set_content(body)
    if html_body:
        message.add_alternative(html_body, subtype="html")
    return message


def _open_smtp() -> smtplib.SMTP:
    settings = get_settings()
    smtp = smtplib.SMTP(settings.email_host, settings.email_port, timeout=settings.email_timeout_seconds)
    try:
        if settings.email_use_tls:
            smtp.starttls()
        username = (settings.email_username or "").strip()
        if username:
            smtp.login(username, _resolve_email_password())
    except Exception:
        smtp.close()
        raise
    return smtp


def _send_via_smtp(to_address: str, subject: str, body: str, html_body: str | None) -> None:
    if not _smtp_enabled():
        raise EmailDeliveryError("SMTP is not fully configured")

    message = _build_message(to_address, subject, body, html_body)
    try:
        with _open_smtp() as smtp:
            smtp.send_message(message)
    except EmailDeliveryError:
        raise
    except Exception as exc:  # pragma: no cover - network interactions
        logger.exception("SMTP delivery failed for %s", to_address)
        raise EmailDeliveryError(str(exc)) from exc


def _send_via_mailgun(to_address: str, subject: str, body: str, html_body: str | None) -> None:
    settings = get_settings()
    domain = settings.mailgun_domain
    from_address = settings.email_from_address
    if not domain or not from_address:
        raise EmailDeliveryError("Mailgun is not configured")
    api_key = _resolve_mailgun_api_key()

    data = {
        "from": str(from_address),
        "to": to_address,
        "subject": subject,
        "text": body,
    }
    if html_body:
        data["html"] = html_body

    url = f"https://api.mailgun.net/v3/{domain}/messages"
    try:
        response = requests.post(
            url,
            auth=("api", api_key),
            data=data,
            timeout=settings.email_timeout_seconds,
        )
    except requests.RequestException as exc:  # pragma: no cover - network interactions
        logger.exception("Mailgun request failed for %s", to_address)
        raise EmailDeliveryError(str(exc)) from exc

    if response.status_code >= 400:
        logger.error("Mailgun returned %s: %s", response.status_code, response.text)
        raise EmailDeliveryError(f"Mailgun delivery failed with status {response.status_code}")


def send_email(to_address: str, subject: str, body: str, *, html_body: str | None = None) -> bool:
    """Send a notification email through SMTP, falling back to Mailgun.

    ``to_address`` may hold several comma-separated recipients. Returns
    ``True`` once a transport accepted the message. Raises
    ``EmailDeliveryError`` when nothing is configured or every transport fails.
    """

    if not to_address or not subject or not body:
        raise EmailDeliveryError("Email payload is incomplete")

    smtp_enabled = _smtp_enabled()
    mailgun_enabled = _mailgun_enabled()
    if not smtp_enabled and not mailgun_enabled:
        raise EmailDeliveryError(
            "Email delivery is not configured. Provide SMTP settings or Mailgun credentials."
        )

    if smtp_enabled:
        try:
            _send_via_smtp(to_address, subject, body, html_body)
            return True
        except EmailDeliveryError as exc:
            logger.warning("SMTP delivery failed, attempting fallback if available: %s", exc)
            if not mailgun_enabled:
                raise

    if mailgun_enabled:
        _send_via_mailgun(to_address, subject, body, html_body)
        return True

    raise EmailDeliveryError("All email transports failed")


def verify_email_transport() -> bool:
    """Check once that a transport is usable; failures are logged, never raised."""

    if _smtp_enabled():
        try:
            with _open_smtp() as smtp:
                smtp.noop()
        except Exception as exc:  # pragma: no cover - network interactions
            logger.warning("SMTP readiness check failed: %s", exc)
            return False
        logger.info("SMTP transport ready (%s)", get_settings().email_host)
        return True

    if _mailgun_enabled():
        logger.info("Mailgun transport configured for %s", get_settings().mailgun_domain)
        return True

    logger.warning("Email delivery is not configured; incident notifications will be skipped")
    return False


__all__ = ["EmailDeliveryError", "send_email", "verify_email_transport"]
