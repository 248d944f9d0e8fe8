"""Collaborators of the cart store: inventory API, notifications, money helpers."""
from .inventory import InventoryClient, ProductCatalog, StockService
from .notifications import (
    LoggingNotificationSink,
    NotificationSink,
    Severity,
    TelegramNotificationSink,
)

__all__ = [
    "InventoryClient",
    "ProductCatalog",
    "StockService",
    "LoggingNotificationSink",
    "NotificationSink",
    "Severity",
    "TelegramNotificationSink",
]
