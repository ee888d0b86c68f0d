"""
Admin SMS alert for new quote requests via Naver Cloud SENS (v2 API).

Every request is signed: base64(HMAC-SHA256(secret, "METHOD PATH\\nTIMESTAMP\\nACCESS_KEY"))
with the timestamp in epoch milliseconds, sent alongside the access key in
x-ncp-* headers.
"""
import base64
import hashlib
import hmac
import logging
import time
from typing import Optional

import requests

from config import Settings
from errors import NotificationError

logger = logging.getLogger(__name__)

CHANNEL = "sms"
SENS_API_HOST = "https://sens.apigw.ntruss.com"


def make_signature(method: str, url_path: str, timestamp: str, access_key: str, secret_key: str) -> str:
    message = f"{method} {url_path}\n{timestamp}\n{access_key}"
    digest = hmac.new(
        secret_key.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode("utf-8")


def build_content(quote) -> str:
    return f"견적 요청: {quote.event_name} / {quote.event_date} / {quote.contact_name}"


class SmsSender:
    """Sends alerts through the SENS gateway, one requests.post per message."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def configured(self) -> bool:
        return self.settings.sms_configured

    @property
    def url_path(self) -> str:
        return f"/sms/v2/services/{self.settings.SENS_SERVICE_ID}/messages"

    def build_request(self, quote, timestamp: Optional[str] = None) -> tuple[dict, dict]:
        """Return (headers, body) for one alert."""
        s = self.settings
        timestamp = timestamp or str(int(time.time() * 1000))
        signature = make_signature("POST", self.url_path, timestamp, s.SENS_ACCESS_KEY, s.SENS_SECRET_KEY)
        headers = {
            "Content-Type": "application/json; charset=utf-8",
            "x-ncp-apigw-timestamp": timestamp,
            "x-ncp-iam-access-key": s.SENS_ACCESS_KEY,
            "x-ncp-apigw-signature-v2": signature,
        }
        body = {
            "type": "SMS",
            "from": s.SENS_FROM_NUMBER,
            "content": build_content(quote),
            "messages": [{"to": s.ADMIN_PHONE}],
        }
        return headers, body

    def send(self, quote) -> bool:
        """
        Send the alert for one quote.
        Returns False when SMS is not configured, True on a 2xx from the gateway.
        Raises NotificationError on transport errors and non-2xx responses.
        """
        if not self.configured:
            logger.debug("SMS not configured; skipping alert for quote id=%s", getattr(quote, "id", None))
            return False

        headers, body = self.build_request(quote)
        try:
            response = requests.post(
                SENS_API_HOST + self.url_path,
                headers=headers,
                json=body,
                timeout=self.settings.SMS_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            raise NotificationError(CHANNEL, f"SMS request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise NotificationError(CHANNEL, f"SMS send failed: {response.status_code} {response.text}")

        logger.info("Alert SMS sent to %s", self.settings.ADMIN_PHONE)
        return True
