"""
Admin email alert for new quote requests, delivered through the configured SMTP relay.
Skips silently when the relay or the admin address is not configured.
"""
import logging
import smtplib
from email.message import EmailMessage

from config import Settings
from errors import NotificationError

logger = logging.getLogger(__name__)

CHANNEL = "email"

# Body lines in display order: (label, quote attribute)
EMAIL_FIELDS = (
    ("행사명", "event_name"),
    ("행사일", "event_date"),
    ("장소", "event_place"),
    ("운영기간", "event_duration"),
    ("장비", "led_type"),
    ("규격", "led_size"),
    ("콘텐츠", "led_content"),
    ("전력", "power"),
    ("요청사항", "extra"),
    ("담당자", "contact_name"),
    ("회사/기관", "contact_company"),
    ("연락처", "contact_phone"),
    ("이메일", "contact_email"),
    ("접수시간", "created_at"),
)


def build_subject(quote) -> str:
    return f"견적 요청: {quote.event_name}"


def build_body(quote) -> str:
    return "\n".join(f"{label}: {getattr(quote, attr, None) or '-'}" for label, attr in EMAIL_FIELDS)


class EmailSender:
    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def configured(self) -> bool:
        return self.settings.email_configured

    def build_message(self, quote) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = build_subject(quote)
        msg["From"] = self.settings.SMTP_FROM
        msg["To"] = self.settings.ADMIN_EMAIL
        msg.set_content(build_body(quote))
        return msg

    def _connect(self) -> smtplib.SMTP:
        s = self.settings
        # Port 465 speaks TLS from the first byte; anything else is upgraded if the server allows it
        if s.SMTP_PORT == 465:
            return smtplib.SMTP_SSL(s.SMTP_HOST, s.SMTP_PORT, timeout=s.SMTP_TIMEOUT_SECONDS)
        server = smtplib.SMTP(s.SMTP_HOST, s.SMTP_PORT, timeout=s.SMTP_TIMEOUT_SECONDS)
        try:
            server.ehlo()
            if server.has_extn("starttls"):
                server.starttls()
                server.ehlo()
        except (smtplib.SMTPException, OSError):
            server.close()
            raise
        return server

    def send(self, quote) -> bool:
        """
        Send the alert for one quote.
        Returns False when email is not configured, True once the relay accepted it.
        Raises NotificationError when the relay fails.
        """
        if not self.configured:
            logger.debug("Email not configured; skipping alert for quote id=%s", getattr(quote, "id", None))
            return False

        msg = self.build_message(quote)
        try:
            with self._connect() as server:
                server.login(self.settings.SMTP_USER, self.settings.SMTP_PASS)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(CHANNEL, f"SMTP delivery failed: {e}") from e

        logger.info("Alert email sent: %s → %s", msg["Subject"], self.settings.ADMIN_EMAIL)
        return True
