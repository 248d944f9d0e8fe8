"""
Notification Sinks

Receive human-readable cart outcome messages. Delivery is fire-and-forget:
notify() never blocks the caller and never raises.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional, Protocol

import httpx
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from rocketcart import config
from rocketcart.logging import get_logger

logger = get_logger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"
TELEGRAM_MAX_LENGTH = 4096
PERMANENT_ERROR_CODES = {400, 403, 404}


class Severity(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


SEVERITY_LOG_LEVELS = {
    Severity.SUCCESS: logging.INFO,
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}

SEVERITY_ICONS = {
    Severity.SUCCESS: "✅",
    Severity.INFO: "ℹ️",
    Severity.WARNING: "⚠️",
    Severity.ERROR: "❌",
}


class NotificationSink(Protocol):
    def notify(self, message: str, severity: Severity) -> None:
        ...


class LoggingNotificationSink:
    """Writes notifications to a logger."""

    def __init__(self, name: str = "rocketcart.notifications"):
        self._logger = get_logger(name)

    def notify(self, message: str, severity: Severity) -> None:
        self._logger.log(SEVERITY_LOG_LEVELS.get(severity, logging.INFO), message)


class _RetryableStatus(Exception):
    def __init__(self, status_code: int):
        super().__init__(f"Telegram API returned {status_code}")
        self.status_code = status_code


def _truncate_message(text: str, max_length: int = TELEGRAM_MAX_LENGTH) -> str:
    """Truncate message to Telegram's limit."""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


class TelegramNotificationSink:
    """
    Sends notifications to a Telegram chat through the Bot API.

    Each notify() call schedules a background send on the running event
    loop. Transport errors and 5xx/429 responses are retried with
    exponential backoff; 400/403/404 are logged and dropped.

    Usage:
        sink = TelegramNotificationSink()
        sink.notify("Erro na adição do produto", Severity.ERROR)
        await sink.drain()  # on shutdown
    """

    def __init__(
        self,
        token: Optional[str] = None,
        chat_id: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        retries: int = 3,
        backoff: float = 0.5,
        timeout: float = 10.0,
    ):
        self.token = token or config.TELEGRAM_TOKEN
        self.chat_id = chat_id or config.TELEGRAM_CHAT_ID
        if not self.token or not self.chat_id:
            raise ValueError("TELEGRAM_TOKEN and TELEGRAM_CHAT_ID must be set")
        self.retries = retries
        self.backoff = backoff
        self.timeout = timeout
        self._http_client = http_client
        self._pending: set[asyncio.Task] = set()

    @property
    def url(self) -> str:
        return f"{TELEGRAM_API_URL}/bot{self.token}/sendMessage"

    def notify(self, message: str, severity: Severity) -> None:
        text = f"{SEVERITY_ICONS.get(severity, '')} {message}".strip()

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, Telegram notification dropped")
            return

        task = loop.create_task(self.send(text))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for every scheduled notification to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def aclose(self) -> None:
        await self.drain()
        if self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()

    async def _post(self, payload: dict) -> bool:
        client = await self._get_http_client()
        response = await client.post(self.url, json=payload)

        if response.status_code == 200:
            return True

        if response.status_code in PERMANENT_ERROR_CODES:
            error_text = response.text[:200] if response.text else "No response body"
            logger.error(f"Telegram rejected notification ({response.status_code}): {error_text}")
            return False

        raise _RetryableStatus(response.status_code)

    async def send(self, text: str) -> bool:
        """Send one message. Returns False instead of raising on failure."""
        payload = {"chat_id": self.chat_id, "text": _truncate_message(text)}

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.retries),
                wait=wait_exponential(multiplier=self.backoff, max=8),
                retry=retry_if_exception_type((httpx.TransportError, _RetryableStatus)),
            ):
                with attempt:
                    return await self._post(payload)
        except RetryError as e:
            logger.error(f"Telegram notification failed after {self.retries} attempts: {e.last_attempt.exception()}")
        except httpx.HTTPError as e:
            logger.error(f"Telegram notification failed: {e}")

        return False
