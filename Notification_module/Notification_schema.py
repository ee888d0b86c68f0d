from pydantic import BaseModel


class ChannelStats(BaseModel):
    """Delivery counters for one channel since process start."""
    sent: int = 0
    skipped: int = 0
    failed: int = 0


class NotificationStatsResponse(BaseModel):
    """Response for GET /api/admin/notifications/stats"""
    email: ChannelStats
    sms: ChannelStats
