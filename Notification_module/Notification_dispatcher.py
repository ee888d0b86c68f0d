"""
Fan-out of admin alerts after a quote has been stored.

Email and SMS run concurrently in the worker threadpool and are joined before
the request finishes, only so their outcome can be logged and counted. A
failing channel never affects the other one or the caller.
"""
import asyncio
import logging
import threading
from enum import Enum

from starlette.concurrency import run_in_threadpool

from config import Settings
from errors import NotificationError

from .email_service import EmailSender
from .sms_service import SmsSender

logger = logging.getLogger(__name__)


class DeliveryOutcome(str, Enum):
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


class NotificationDispatcher:
    def __init__(self, settings: Settings, email_sender=None, sms_sender=None):
        self.channels = {
            "email": email_sender or EmailSender(settings),
            "sms": sms_sender or SmsSender(settings),
        }
        self._lock = threading.Lock()
        self._counts = {
            name: {outcome.value: 0 for outcome in DeliveryOutcome}
            for name in self.channels
        }

    def _deliver(self, channel: str, quote) -> DeliveryOutcome:
        sender = self.channels[channel]
        quote_id = getattr(quote, "id", None)
        try:
            outcome = DeliveryOutcome.SENT if sender.send(quote) else DeliveryOutcome.SKIPPED
        except NotificationError as e:
            logger.warning("%s alert failed for quote id=%s: %s", channel, quote_id, e)
            outcome = DeliveryOutcome.FAILED
        except Exception as e:
            logger.error("Unexpected %s alert error for quote id=%s: %s", channel, quote_id, e, exc_info=True)
            outcome = DeliveryOutcome.FAILED
        self._record(channel, outcome)
        return outcome

    def _record(self, channel: str, outcome: DeliveryOutcome) -> None:
        with self._lock:
            self._counts[channel][outcome.value] += 1

    async def dispatch(self, quote) -> dict[str, DeliveryOutcome]:
        """Deliver every channel concurrently and wait for all of them. Never raises."""
        names = list(self.channels)
        outcomes = await asyncio.gather(
            *(run_in_threadpool(self._deliver, name, quote) for name in names)
        )
        result = dict(zip(names, outcomes))
        logger.info(
            "Notifications for quote id=%s: %s",
            getattr(quote, "id", None),
            ", ".join(f"{name}={outcome.value}" for name, outcome in result.items()),
        )
        return result

    def stats(self) -> dict[str, dict[str, int]]:
        """Per-channel delivery counters since process start."""
        with self._lock:
            return {name: dict(counts) for name, counts in self._counts.items()}
