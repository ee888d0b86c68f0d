import logging

from fastapi import APIRouter, Depends

from deps import get_dispatcher
from Login_module.Utils.auth_user import get_current_admin

from .Notification_dispatcher import NotificationDispatcher
from .Notification_schema import NotificationStatsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/notifications", tags=["Notifications"])


@router.get("/stats", response_model=NotificationStatsResponse)
def get_notification_stats(
    admin: dict = Depends(get_current_admin),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """Sent/skipped/failed alert counts per channel since the server started. Requires admin token."""
    return NotificationStatsResponse(**dispatcher.stats())
