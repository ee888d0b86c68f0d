"""
Quote submission flow: validate, timestamp, store, then alert the admin.

Only a storage failure reaches the submitter. Alerts run after the row is
committed and their outcome never changes the result.
"""
import logging
from datetime import datetime
from typing import Optional

from starlette.concurrency import run_in_threadpool

from errors import QuoteValidationError
from Login_module.Utils.datetime_utils import format_korean_locale
from Notification_module.Notification_dispatcher import NotificationDispatcher

from .Quote_model import Quote
from .Quote_schema import QuoteCreate, REQUIRED_FIELDS, OPTIONAL_FIELDS
from .Quote_store import QuoteStore

logger = logging.getLogger(__name__)


def build_quote_values(data: QuoteCreate, now: Optional[datetime] = None) -> dict:
    """Column values for a validated submission; optional fields default to ''."""
    values = {name: getattr(data, name) for name in REQUIRED_FIELDS}
    values.update({name: getattr(data, name) or "" for name in OPTIONAL_FIELDS})
    values["created_at"] = format_korean_locale(now)
    return values


async def submit_quote(
    data: Optional[QuoteCreate],
    store: QuoteStore,
    dispatcher: NotificationDispatcher,
    now: Optional[datetime] = None,
) -> Quote:
    """
    Validate and store one quote request, then send the admin alerts.
    Raises QuoteValidationError before any side effect, StorageError if the write fails.
    """
    data = data or QuoteCreate()
    missing = data.first_missing_field()
    if missing:
        raise QuoteValidationError(missing)

    values = build_quote_values(data, now)
    quote = await run_in_threadpool(store.insert, values)

    await dispatcher.dispatch(quote)
    return quote
