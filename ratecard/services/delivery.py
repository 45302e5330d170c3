"""Quote delivery: e-mail and plain-text export.

Rendering uses Jinja2 templates in ``ratecard/templates``. Sending goes
through a `QuoteMailer`:

  - ``log``: writes the message summary to the log and reports success
    (default; no outbound traffic).
  - ``smtp``: plain SMTP with optional STARTTLS/login.

Mailers report failure by returning False; they do not raise.
"""

from __future__ import annotations

import logging
import smtplib
from datetime import date
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Any, Optional, Protocol

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ratecard.core.config import Settings
from ratecard.models.constants import SWAT_STRUCTURAL_DISCOUNT_FACTOR
from ratecard.models.quote import QuoteCreate

logger = logging.getLogger("ratecard.delivery")

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
    trim_blocks=True,
    lstrip_blocks=True,
)


def _thousands(value: int) -> str:
    return f"{value:,}"


_env.filters["thousands"] = _thousands


def quote_subject(quote: QuoteCreate) -> str:
    return f"Rate Card Quote - {quote.type_label}"


def render_quote_email(quote: QuoteCreate, sender_name: str, message: Optional[str] = None) -> str:
    return _env.get_template("quote_email.html").render(
        quote=quote, sender_name=sender_name, message=message
    )


def render_quote_export(
    quote: QuoteCreate,
    breakdown: Optional[Any] = None,
    generated_on: Optional[date] = None,
) -> str:
    """Plain-text quote document.

    ``breakdown`` is a calculator breakdown or the request model mirroring
    one; when given, the AED calculation steps are listed above the final rate.
    """
    return _env.get_template("quote_export.txt").render(
        quote=quote,
        breakdown=breakdown,
        structural_factor=SWAT_STRUCTURAL_DISCOUNT_FACTOR,
        generated_on=(generated_on or date.today()).isoformat(),
    )


def export_filename(quote: QuoteCreate, generated_on: Optional[date] = None) -> str:
    prefix = "custom-resource" if quote.type == "custom" else "swat-team"
    return f"{prefix}-quote-{(generated_on or date.today()).isoformat()}.txt"


class QuoteMailer(Protocol):
    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool: ...


class LogMailer:
    def __init__(self, from_address: str):
        self.from_address = from_address

    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        logger.info("mail (log backend) from=%s to=%s subject=%s bytes=%d", self.from_address, to, subject, len(html))
        return True


class SMTPMailer:
    def __init__(self, settings: Settings):
        self._settings = settings

    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        s = self._settings
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"Rate Card Calculator <{s.mail_from}>"
        msg["To"] = to
        msg.attach(MIMEText(text or "Please view this email in HTML format.", "plain", "utf-8"))
        msg.attach(MIMEText(html, "html", "utf-8"))
        try:
            with smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=s.http_timeout_seconds) as server:
                if s.smtp_use_tls:
                    server.starttls()
                if s.smtp_username and s.smtp_password:
                    server.login(s.smtp_username, s.smtp_password)
                server.sendmail(s.mail_from, [to], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error("smtp delivery to %s failed: %s", to, e)
            return False
        logger.info("mail sent to=%s subject=%s", to, subject)
        return True


def make_mailer(settings: Settings) -> QuoteMailer:
    if settings.mail_backend == "smtp":
        return SMTPMailer(settings)
    return LogMailer(settings.mail_from)


def send_quote(
    mailer: QuoteMailer,
    recipient: str,
    sender_name: str,
    quote: QuoteCreate,
    message: Optional[str] = None,
) -> bool:
    html = render_quote_email(quote, sender_name, message)
    return mailer.send(recipient, quote_subject(quote), html, text=render_quote_export(quote))
