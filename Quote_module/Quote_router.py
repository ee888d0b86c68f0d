"""
Quote routers - public form submission and the admin list/delete endpoints.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends

from deps import get_dispatcher, get_store
from errors import StorageError
from Login_module.Utils.auth_user import get_current_admin
from Notification_module.Notification_dispatcher import NotificationDispatcher

from .Quote_schema import OkResponse, QuoteCreate, QuoteOut
from .Quote_service import submit_quote
from .Quote_store import QuoteStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/quotes", tags=["Quotes"])
admin_router = APIRouter(prefix="/api/admin/quotes", tags=["Admin"])


@router.post("", response_model=OkResponse)
async def post_quote(
    data: Optional[QuoteCreate] = Body(None),
    store: QuoteStore = Depends(get_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Submit a quote request. Six fields are required: eventName, eventDate,
    eventPlace, contactName, contactPhone, contactEmail.
    Admin email/SMS alerts are best-effort and never affect the response.
    """
    try:
        await submit_quote(data, store, dispatcher)
    except StorageError as e:
        logger.exception(f"Quote submission failed: {e}")
        raise StorageError("Failed to save quote") from e
    return OkResponse()


@admin_router.get("", response_model=list[QuoteOut])
def get_quotes(
    admin: dict = Depends(get_current_admin),
    store: QuoteStore = Depends(get_store),
):
    """List every stored quote, newest first. Requires admin token."""
    try:
        return store.list_all()
    except StorageError as e:
        logger.error(f"Loading quotes failed: {e}")
        raise StorageError("Failed to load quotes") from e


@admin_router.delete("/{quote_id}", response_model=OkResponse)
def remove_quote(
    quote_id: int,
    admin: dict = Depends(get_current_admin),
    store: QuoteStore = Depends(get_store),
):
    """Delete a quote by id. Deleting an id that does not exist is not an error. Requires admin token."""
    try:
        if not store.delete_by_id(quote_id):
            logger.info(f"Delete requested for missing quote id={quote_id}")
    except StorageError as e:
        logger.error(f"Deleting quote id={quote_id} failed: {e}")
        raise StorageError("Failed to delete") from e
    return OkResponse()
