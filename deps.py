"""
Dependencies for FastAPI routes.

The settings object, quote store and notification dispatcher are created once
in main.create_app() and hung off app.state; routes receive them from here.
"""
from fastapi import Request

from config import Settings
from Quote_module.Quote_store import QuoteStore
from Notification_module.Notification_dispatcher import NotificationDispatcher


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> QuoteStore:
    return request.app.state.store


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.dispatcher
